# Adapters layer - Concrete implementations (asyncio, local boards, scores)

from .asyncio_scheduler import AsyncioScheduler
from .http_scores import HttpScoreService
from .local_boards import LocalBoardRepository
from .memory_scores import InMemoryScoreService
from .sound_cues import QueuedSoundPlayer

__all__ = [
    "AsyncioScheduler",
    "HttpScoreService",
    "InMemoryScoreService",
    "LocalBoardRepository",
    "QueuedSoundPlayer",
]
