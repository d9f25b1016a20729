# Ports layer - Abstract interfaces (Protocols)

from .board_repository import BoardRepository
from .scheduler import ScheduledHandle, Scheduler
from .score_service import ScoreRecord, ScoreService, ScoreSubmissionError
from .sound_player import SoundCueQueue, SoundPlayer

__all__ = [
    "BoardRepository",
    "ScheduledHandle",
    "Scheduler",
    "ScoreRecord",
    "ScoreService",
    "ScoreSubmissionError",
    "SoundCueQueue",
    "SoundPlayer",
]
