"""CLI command for running a breathing session in the terminal."""

import time

from breathe_trainer.cli.commands.common import build_context
from breathe_trainer.exceptions import BreatheTrainerException
from breathe_trainer.models import BreathingSpeed
from breathe_trainer.presenters import ConsolePresenter


def session_command(args) -> int:
    """Execute the session subcommand.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    presenter = ConsolePresenter()
    context = build_context(args, presenter)

    pattern = context.patterns.find_pattern(args.pattern)
    if pattern is None:
        presenter.show_error(f"Unknown pattern: {args.pattern}")
        presenter.show_info("Run 'breathe-trainer patterns list' to see available patterns")
        return 1

    speed = BreathingSpeed(args.speed).multiplier if args.speed else None
    cycles = args.cycles if args.cycles is not None else pattern.cycles

    presenter.show_info(f"{pattern.name} ({pattern.signature})")
    presenter.show_info("=" * 50)
    if cycles:
        presenter.show_info(f"{cycles} cycles. Press Ctrl+C to stop early.\n")
    else:
        presenter.show_info("Press Ctrl+C to stop.\n")

    if context.settings.settings.show_breathing_guide:
        context.on_tick.subscribe(presenter.show_tick)
    sessions = context.sessions
    try:
        sessions.start(pattern.id, speed, cycles=args.cycles)
        record = sessions.run_until_finished(time.sleep, context.config.tick_interval)
    except KeyboardInterrupt:
        record = sessions.stop()
    except BreatheTrainerException as e:
        presenter.show_error(str(e))
        return 1

    if record is None:
        presenter.show_warning("\nSession too short to record (no full cycle completed)")
        return 0
    presenter.show_session_record(record)
    return 0
