"""Protocol for haptic and vibration feedback."""

from typing import Protocol


class HapticFeedback(Protocol):
    """Interface for physical feedback at the start of each breath phase."""

    def pulse(self, phase_id: str) -> None:
        """Give a soft haptic tap.

        Args:
            phase_id: Identifier of the phase that just started
        """
        ...

    def vibrate(self) -> None:
        """Trigger a short vibration, where the device supports one."""
        ...
