"""CLI command for showing and changing settings."""

from dataclasses import fields

from breathe_trainer.cli.commands.common import build_context
from breathe_trainer.exceptions import BreatheTrainerException
from breathe_trainer.models import BreathingSettings, BreathingSpeed
from breathe_trainer.presenters import ConsolePresenter

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


def parse_setting_value(key: str, raw: str):
    """Convert a command-line string to the type of the named setting.

    Speed also accepts the names slow, normal and fast.

    Raises:
        ValueError: If the string cannot be converted
    """
    defaults = BreathingSettings()
    current = getattr(defaults, key, None)
    if isinstance(current, bool):
        lowered = raw.lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
        raise ValueError(f"expected on/off, got '{raw}'")
    if isinstance(current, float):
        if key == "speed_multiplier" and raw in {s.value for s in BreathingSpeed}:
            return BreathingSpeed(raw).multiplier
        return float(raw)
    return raw


def settings_command(args) -> int:
    """Execute the settings subcommand.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    presenter = ConsolePresenter()
    context = build_context(args, presenter)
    action = args.settings_command or "show"

    if action == "show":
        settings = context.settings.settings
        for f in fields(settings):
            if f.name == "custom_patterns":
                continue
            presenter.show_info(f"  {f.name:24s} {getattr(settings, f.name)}")
        return 0

    if action == "set":
        if args.key == "custom_patterns":
            presenter.show_error("Use 'breathe-trainer patterns' to manage custom patterns")
            return 1
        try:
            value = parse_setting_value(args.key, args.value)
            context.settings.update(**{args.key: value})
        except ValueError as e:
            presenter.show_error(f"{args.key}: {e}")
            return 1
        except BreatheTrainerException as e:
            presenter.show_error(str(e))
            return 1
        presenter.show_success(f"{args.key} = {value}")
        return 0

    presenter.show_error(f"Unknown settings action: {action}")
    return 1
