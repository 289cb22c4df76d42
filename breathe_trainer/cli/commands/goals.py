"""CLI command for managing goals."""

from breathe_trainer.cli.commands.common import build_context, find_goal_id
from breathe_trainer.exceptions import BreatheTrainerException
from breathe_trainer.models import AchievementType, GoalPeriod
from breathe_trainer.presenters import ConsolePresenter
from breathe_trainer.utils import format_duration

METRIC_CHOICES = {
    "sessions": AchievementType.SESSION_COUNT,
    "time": AchievementType.TOTAL_TIME,
    "cycles": AchievementType.TOTAL_CYCLES,
    "streak": AchievementType.STREAK,
    "mastery": AchievementType.MODE_MASTERY,
}


def goals_command(args) -> int:
    """Execute the goals subcommand.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    presenter = ConsolePresenter()
    context = build_context(args, presenter)
    goals = context.goals
    action = args.goals_command or "list"

    try:
        if action == "list":
            presenter.show_info("Active goals:")
            presenter.show_goals(goals.active_goals)
            presenter.show_info("\nCompleted goals:")
            presenter.show_goals(goals.completed_goals)
            presenter.show_info(f"\nCompletion rate: {int(goals.completion_rate() * 100)}%")
            return 0

        if action == "add":
            goal = goals.create_goal(
                args.title,
                args.target,
                period=GoalPeriod(args.period) if args.period else None,
                duration_days=args.days,
                metric=METRIC_CHOICES[args.metric] if args.metric else None,
            )
            presenter.show_success(f"Created goal '{goal.title}' ({goal.id[:8]})")
            return 0

        if action == "suggest":
            suggestions = goals.suggested_goals()
            if not suggestions:
                presenter.show_info("All suggested goals are already active")
                return 0
            for title, target, period in suggestions:
                presenter.show_info(
                    f"  {title:20s} {format_duration(target):>6s} {period.value}"
                )
            for period in GoalPeriod:
                recommended = goals.recommended_target(period)
                presenter.show_info(
                    f"  Recommended {period.value} target: {format_duration(recommended)}"
                )
            return 0

        if action == "adopt":
            goal = goals.adopt_suggestion(args.title)
            presenter.show_success(f"Created goal '{goal.title}' ({goal.id[:8]})")
            return 0

        goal_id = find_goal_id(context, args.goal_id)
        if goal_id is None:
            presenter.show_error(f"No unique goal matches '{args.goal_id}'")
            return 1

        if action == "delete":
            if not goals.delete_goal(goal_id):
                presenter.show_error("Only active goals can be deleted")
                return 1
            presenter.show_success("Goal deleted")
            return 0

        if action == "reset":
            goal = goals.reset_goal(goal_id)
            presenter.show_success(f"Goal '{goal.title}' restarted")
            return 0

    except BreatheTrainerException as e:
        presenter.show_error(str(e))
        return 1

    presenter.show_error(f"Unknown goals action: {action}")
    return 1
