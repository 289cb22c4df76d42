"""CLI command for listing and managing breathing patterns."""

from breathe_trainer.cli.commands.common import build_context
from breathe_trainer.exceptions import BreatheTrainerException
from breathe_trainer.models import BreathingPattern
from breathe_trainer.presenters import ConsolePresenter
from breathe_trainer.utils import format_duration


def _describe(pattern: BreathingPattern) -> str:
    star = "*" if pattern.is_favorite else " "
    length = (
        format_duration(pattern.total_session_time)
        if pattern.total_session_time is not None
        else "open"
    )
    return f"  {star} {pattern.name:24s} {pattern.signature:12s} {length:>6s}  ({pattern.id[:8]})"


def patterns_command(args) -> int:
    """Execute the patterns subcommand.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    presenter = ConsolePresenter()
    context = build_context(args, presenter)
    catalog = context.patterns
    action = args.patterns_command or "list"

    try:
        if action == "list":
            presenter.show_info("Built-in modes:")
            for pattern in catalog.builtin_patterns:
                presenter.show_info(_describe(pattern))
            custom = catalog.search(args.search)
            if args.favorites:
                custom = [p for p in custom if p.is_favorite]
            presenter.show_info("\nCustom patterns:")
            if not custom:
                presenter.show_info("  (none)")
            for pattern in custom:
                presenter.show_info(_describe(pattern))
            return 0

        if action == "add":
            pattern = catalog.create_custom_pattern(
                args.name,
                args.inhale,
                args.hold1,
                args.exhale,
                args.hold2,
                args.cycles,
                args.description,
            )
            presenter.show_success(f"Created pattern '{pattern.name}' ({pattern.id[:8]})")
            return 0

        pattern = catalog.find_pattern(args.pattern)
        if pattern is None:
            presenter.show_error(f"Unknown pattern: {args.pattern}")
            return 1

        if action == "show":
            presenter.show_info(f"{pattern.name} ({pattern.id})")
            if pattern.description:
                presenter.show_info(f"  {pattern.description}")
            for phase, seconds in pattern.phase_durations.items():
                presenter.show_info(f"  {phase.label:8s} {seconds:g}s")
            presenter.show_info(f"  Cycles: {pattern.cycles or 'until stopped'}")
            if pattern.is_custom:
                presenter.show_info(f"  Difficulty: {pattern.difficulty_level}")
                if pattern.tags:
                    presenter.show_info(f"  Tags: {', '.join(pattern.tags)}")
            return 0

        if not pattern.is_custom:
            presenter.show_error(f"'{pattern.name}' is a built-in mode and cannot be changed")
            return 1

        if action == "delete":
            catalog.delete_custom_pattern(pattern.id)
            presenter.show_success(f"Deleted pattern '{pattern.name}'")
            return 0

        if action == "favorite":
            updated = catalog.toggle_favorite(pattern.id)
            state = "added to" if updated.is_favorite else "removed from"
            presenter.show_success(f"'{updated.name}' {state} favorites")
            return 0

    except BreatheTrainerException as e:
        presenter.show_error(str(e))
        return 1

    presenter.show_error(f"Unknown patterns action: {action}")
    return 1
