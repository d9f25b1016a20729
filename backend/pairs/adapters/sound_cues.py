"""Sound players that relay cues instead of producing audio."""

import logging

from pairs.domain.value_objects.sound_effect import SoundEffect

logger = logging.getLogger(__name__)


class QueuedSoundPlayer:
    """SoundCueQueue implementation: cues are queued for the client.

    The browser plays the actual audio when it polls the game.
    Cues played while sound is off are dropped.
    """

    def __init__(self, sound_on: bool = True, max_queued: int = 32) -> None:
        self.sound_on = sound_on
        self._max_queued = max_queued
        self._queue: list[SoundEffect] = []

    def play(self, effect: SoundEffect) -> None:
        if not self.sound_on:
            return
        self._queue.append(effect)
        if len(self._queue) > self._max_queued:
            # Client stopped polling, keep only the newest cues
            dropped = len(self._queue) - self._max_queued
            del self._queue[:dropped]
            logger.debug(f"Dropped {dropped} stale sound cues")

    def drain(self) -> list[SoundEffect]:
        cues, self._queue = self._queue, []
        return cues
