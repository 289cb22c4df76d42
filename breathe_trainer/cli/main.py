"""Main CLI entry point for breathe_trainer."""

import argparse
import logging
import sys

from breathe_trainer import __version__
from breathe_trainer.cli.commands import (
    achievements,
    goals,
    history,
    patterns,
    reminder,
    session,
    settings,
    stats,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="breathe-trainer",
        description="Guided breathing sessions with progress tracking",
        epilog="Use 'breathe-trainer <command> --help' for command-specific help",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--data-dir", help="Directory holding the breathe.db database")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # breathe-trainer session <pattern>
    session_parser = subparsers.add_parser(
        "session",
        help="Run a guided breathing session",
        description="Breathe along with a pattern until it finishes or you press Ctrl+C",
    )
    session_parser.add_argument("pattern", help="Pattern id or name (e.g. box, relax)")
    session_parser.add_argument(
        "--speed",
        choices=["slow", "normal", "fast"],
        help="Pace override (default: from settings)",
    )
    session_parser.add_argument(
        "--cycles",
        type=int,
        help="Stop after this many cycles (default: pattern's own limit)",
    )

    # breathe-trainer patterns ...
    patterns_parser = subparsers.add_parser("patterns", help="List and manage breathing patterns")
    patterns_sub = patterns_parser.add_subparsers(dest="patterns_command")
    list_parser = patterns_sub.add_parser("list", help="List all patterns")
    list_parser.add_argument("--search", default="", help="Filter custom patterns by text")
    list_parser.add_argument("--favorites", action="store_true", help="Only favorites")
    show_parser = patterns_sub.add_parser("show", help="Show one pattern in detail")
    show_parser.add_argument("pattern", help="Pattern id or name")
    add_parser = patterns_sub.add_parser("add", help="Create a custom pattern")
    add_parser.add_argument("name")
    add_parser.add_argument("inhale", type=float)
    add_parser.add_argument("hold1", type=float)
    add_parser.add_argument("exhale", type=float)
    add_parser.add_argument("hold2", type=float)
    add_parser.add_argument("--cycles", type=int, default=5)
    add_parser.add_argument("--description", default="")
    delete_parser = patterns_sub.add_parser("delete", help="Delete a custom pattern")
    delete_parser.add_argument("pattern", help="Pattern id or name")
    favorite_parser = patterns_sub.add_parser("favorite", help="Toggle a pattern's favorite flag")
    favorite_parser.add_argument("pattern", help="Pattern id or name")

    # breathe-trainer history
    history_parser = subparsers.add_parser("history", help="Show recent sessions")
    history_parser.add_argument("--limit", type=int, default=20)
    history_parser.add_argument("--clear", action="store_true", help="Delete all sessions")

    # breathe-trainer stats / achievements
    subparsers.add_parser("stats", help="Show totals, streak and weekly activity")
    subparsers.add_parser("achievements", help="Show achievements")

    # breathe-trainer goals ...
    goals_parser = subparsers.add_parser("goals", help="Manage goals")
    goals_sub = goals_parser.add_subparsers(dest="goals_command")
    goals_sub.add_parser("list", help="List active and completed goals")
    goal_add = goals_sub.add_parser("add", help="Create a goal")
    goal_add.add_argument("target", type=float, help="Target value (seconds for titled goals)")
    goal_add.add_argument("--title")
    goal_add.add_argument("--metric", choices=goals.METRIC_CHOICES, help="Track a metric instead")
    window = goal_add.add_mutually_exclusive_group(required=True)
    window.add_argument("--period", choices=["daily", "weekly", "monthly"])
    window.add_argument("--days", type=int)
    goal_delete = goals_sub.add_parser("delete", help="Delete an active goal")
    goal_delete.add_argument("goal_id", help="Goal id or unique prefix")
    goal_reset = goals_sub.add_parser("reset", help="Restart a goal from zero")
    goal_reset.add_argument("goal_id", help="Goal id or unique prefix")
    goals_sub.add_parser("suggest", help="Show suggested goals")
    goal_adopt = goals_sub.add_parser("adopt", help="Create a goal from a suggestion")
    goal_adopt.add_argument("title")

    # breathe-trainer settings ...
    settings_parser = subparsers.add_parser("settings", help="Show or change settings")
    settings_sub = settings_parser.add_subparsers(dest="settings_command")
    settings_sub.add_parser("show", help="Show current settings")
    settings_set = settings_sub.add_parser("set", help="Change one setting")
    settings_set.add_argument("key")
    settings_set.add_argument("value")

    # breathe-trainer reminder ...
    reminder_parser = subparsers.add_parser("reminder", help="Daily practice reminder")
    reminder_sub = reminder_parser.add_subparsers(dest="reminder_command")
    reminder_set = reminder_sub.add_parser("set", help="Set the reminder time")
    reminder_set.add_argument("time", help="Time of day as HH:MM")
    reminder_sub.add_parser("cancel", help="Cancel the reminder")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point with subcommands."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Dispatch to appropriate command
    commands = {
        "session": session.session_command,
        "patterns": patterns.patterns_command,
        "history": history.history_command,
        "stats": stats.stats_command,
        "achievements": achievements.achievements_command,
        "goals": goals.goals_command,
        "settings": settings.settings_command,
        "reminder": reminder.reminder_command,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
