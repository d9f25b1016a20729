"""Port interface for audio feedback."""

from typing import Protocol, runtime_checkable

from pairs.domain.value_objects.sound_effect import SoundEffect


@runtime_checkable
class SoundPlayer(Protocol):
    """Plays feedback sounds on behalf of the presentation layer."""

    def play(self, effect: SoundEffect) -> None:
        """Play effect. Must not block."""
        ...


@runtime_checkable
class SoundCueQueue(SoundPlayer, Protocol):
    """SoundPlayer that queues cues for a remote client to play.

    The host owns the sound toggle; the engine only calls play().
    """

    sound_on: bool

    def drain(self) -> list[SoundEffect]:
        """Return queued cues in order and clear the queue."""
        ...
