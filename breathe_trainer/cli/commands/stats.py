"""CLI command for showing practice statistics."""

from breathe_trainer.cli.commands.common import build_context
from breathe_trainer.presenters import ConsolePresenter


def stats_command(args) -> int:
    """Execute the stats subcommand.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    presenter = ConsolePresenter()
    context = build_context(args, presenter)
    settings = context.settings.settings

    presenter.show_totals(context.history.totals())
    presenter.show_info(f"  Current streak: {context.progress.current_streak} days")

    daily = context.progress.daily_goal_progress(settings.daily_goal_seconds)
    weekly = context.progress.weekly_goal_progress(settings.weekly_goal_seconds)
    presenter.show_info(f"  Daily goal: {int(daily * 100)}%")
    presenter.show_info(f"  Weekly goal: {int(weekly * 100)}%")

    presenter.show_info("\nSessions per day:")
    for day, count in context.progress.weekly_stats.items():
        presenter.show_info(f"  {day:%a %d %b}  {'#' * count} {count}")
    return 0
