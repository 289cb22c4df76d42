"""CLI command for showing achievements."""

from breathe_trainer.cli.commands.common import build_context
from breathe_trainer.presenters import ConsolePresenter


def achievements_command(args) -> int:
    """Execute the achievements subcommand."""
    presenter = ConsolePresenter()
    context = build_context(args, presenter)
    presenter.show_achievements(context.progress.achievements)
    return 0
