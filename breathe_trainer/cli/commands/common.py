"""Helpers shared by CLI commands."""

from breathe_trainer.config import create_default_config
from breathe_trainer.orchestration import AppContext
from breathe_trainer.presenters import ConsolePresenter


def build_context(args, presenter: ConsolePresenter) -> AppContext:
    """Create the application context, notifying through the console."""
    overrides = {}
    if getattr(args, "data_dir", None):
        overrides["data_dir"] = args.data_dir
    config = create_default_config(**overrides)
    return AppContext.create(config, notifier=presenter)


def find_goal_id(context: AppContext, prefix: str) -> str | None:
    """Resolve a full goal id from an id or unique id prefix."""
    goals = context.goals.active_goals + context.goals.completed_goals
    matches = [g.id for g in goals if g.id.startswith(prefix)]
    if len(matches) == 1:
        return matches[0]
    return None
