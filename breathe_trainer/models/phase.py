"""Breath phase and speed enumerations."""

from enum import Enum


class BreathPhase(Enum):
    """One of the four timed segments of a breath cycle, in cyclic order."""

    INHALE = "inhale"
    HOLD_AFTER_INHALE = "hold_after_inhale"
    EXHALE = "exhale"
    HOLD_AFTER_EXHALE = "hold_after_exhale"

    @property
    def label(self) -> str:
        """Short instruction shown to the user."""
        return {
            BreathPhase.INHALE: "Inhale",
            BreathPhase.HOLD_AFTER_INHALE: "Hold",
            BreathPhase.EXHALE: "Exhale",
            BreathPhase.HOLD_AFTER_EXHALE: "Pause",
        }[self]

    @property
    def is_hold(self) -> bool:
        return self in (BreathPhase.HOLD_AFTER_INHALE, BreathPhase.HOLD_AFTER_EXHALE)

    def next(self) -> "BreathPhase":
        """Phase that follows this one (HoldAfterExhale wraps to Inhale)."""
        index = PHASE_ORDER.index(self)
        return PHASE_ORDER[(index + 1) % len(PHASE_ORDER)]


PHASE_ORDER: tuple[BreathPhase, ...] = tuple(BreathPhase)


class BreathingSpeed(Enum):
    """Pace presets; the multiplier scales every phase duration."""

    SLOW = "slow"
    NORMAL = "normal"
    FAST = "fast"

    @property
    def multiplier(self) -> float:
        return {
            BreathingSpeed.SLOW: 1.5,
            BreathingSpeed.NORMAL: 1.0,
            BreathingSpeed.FAST: 0.7,
        }[self]

    @property
    def description(self) -> str:
        return {
            BreathingSpeed.SLOW: "Relaxed pace for deep relaxation",
            BreathingSpeed.NORMAL: "Standard breathing rhythm",
            BreathingSpeed.FAST: "Quick pace for energy boost",
        }[self]

    @classmethod
    def from_multiplier(cls, multiplier: float) -> "BreathingSpeed | None":
        """Find the preset with the given multiplier, or None."""
        for speed in cls:
            if abs(speed.multiplier - multiplier) < 1e-9:
                return speed
        return None


ALLOWED_SPEED_MULTIPLIERS: tuple[float, ...] = tuple(s.multiplier for s in BreathingSpeed)
