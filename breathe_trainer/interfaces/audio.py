"""Protocol for sound playback."""

from typing import Protocol


class AudioPlayer(Protocol):
    """Interface for ambient and cue sound playback."""

    def play_loop(self, sound_id: str, volume: float) -> None:
        """Start looping an ambient sound.

        Args:
            sound_id: Identifier of the ambient sound
            volume: Playback volume in [0, 1]
        """
        ...

    def play_one_shot(self, phase_id: str) -> None:
        """Play the short cue for a breath phase.

        Args:
            phase_id: Identifier of the phase that just started
        """
        ...

    def stop_all(self) -> None:
        """Stop every sound that is playing."""
        ...
