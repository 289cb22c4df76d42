"""CLI command for the daily practice reminder."""

from breathe_trainer.cli.commands.common import build_context
from breathe_trainer.exceptions import BreatheTrainerException
from breathe_trainer.presenters import ConsolePresenter


def reminder_command(args) -> int:
    """Execute the reminder subcommand."""
    presenter = ConsolePresenter()
    context = build_context(args, presenter)
    action = args.reminder_command

    if action == "cancel":
        context.cancel_daily_reminder()
        return 0

    if action == "set":
        try:
            hour_text, minute_text = args.time.split(":")
            hour, minute = int(hour_text), int(minute_text)
        except ValueError:
            presenter.show_error(f"Expected HH:MM, got '{args.time}'")
            return 1
        try:
            context.schedule_daily_reminder(hour, minute)
        except BreatheTrainerException as e:
            presenter.show_error(str(e))
            return 1
        return 0

    presenter.show_error("Use 'reminder set HH:MM' or 'reminder cancel'")
    return 1
