"""Sound effect value object."""

from enum import StrEnum


class SoundEffect(StrEnum):
    """Feedback sounds the presentation layer can play."""

    SUCCESS = "success"
    FAILURE = "failure"
