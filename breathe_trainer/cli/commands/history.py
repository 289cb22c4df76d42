"""CLI command for showing or clearing session history."""

from breathe_trainer.cli.commands.common import build_context
from breathe_trainer.presenters import ConsolePresenter


def history_command(args) -> int:
    """Execute the history subcommand.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    presenter = ConsolePresenter()
    context = build_context(args, presenter)

    if args.clear:
        if not context.history.clear():
            presenter.show_error("Could not clear history")
            return 1
        presenter.show_success("History cleared")
        return 0

    recent = context.history.get_recent(args.limit)
    if not recent:
        presenter.show_info("No sessions yet. Start one with 'breathe-trainer session box'")
        return 0

    names = {p.id: p.name for p in context.patterns.all_patterns}
    presenter.show_info(f"Last {len(recent)} of {context.history.total_sessions} sessions:")
    for record in recent:
        name = names.get(record.pattern_id, record.pattern_id)
        presenter.show_info(
            f"  {record.started_at:%Y-%m-%d %H:%M}  {name:24s} "
            f"{record.formatted_duration:>6s}  {record.cycles} cycles"
        )
    return 0
