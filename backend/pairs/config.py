"""Application configuration loaded from environment variables.

Provides type-safe access to configuration with sensible defaults.
Production defaults are restrictive for security.
"""

import os

from pairs.domain.constants import REVERT_DELAY_MS


def get_cors_origins() -> list[str]:
    """Get allowed CORS origins from environment.

    Environment variable: CORS_ORIGINS (comma-separated)
    Default: localhost dev server ports
    """
    default_origins = "http://localhost:3000,http://localhost:4321"
    origins_str = os.getenv("CORS_ORIGINS", default_origins)
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


def get_cors_allow_credentials() -> bool:
    """Get CORS allow_credentials setting.

    Environment variable: CORS_ALLOW_CREDENTIALS
    Default: true for development (needed for cookies)
    """
    return os.getenv("CORS_ALLOW_CREDENTIALS", "true").lower() == "true"


# Restricted HTTP methods - only what the API actually uses
CORS_ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]

# Restricted headers - only what's needed for the API
CORS_ALLOWED_HEADERS = [
    "Accept",
    "Accept-Language",
    "Content-Type",
    "X-Requested-With",
]


def is_production() -> bool:
    """Check if running in production environment."""
    return os.getenv("ENVIRONMENT", "development").lower() == "production"


def get_time_limit_sec() -> int | None:
    """Get the default game time limit.

    Environment variable: PAIRS_TIME_LIMIT_SEC
    Default: unset, meaning no limit. Boards may carry their own limit.
    """
    value = os.getenv("PAIRS_TIME_LIMIT_SEC", "").strip()
    if not value:
        return None
    limit = int(value)
    if limit <= 0:
        raise ValueError(f"PAIRS_TIME_LIMIT_SEC must be positive, got {limit}")
    return limit


def get_revert_delay_ms() -> int:
    """Get how long mismatched cards stay face-up.

    Environment variable: PAIRS_REVERT_DELAY_MS
    Default: 800
    """
    return int(os.getenv("PAIRS_REVERT_DELAY_MS", str(REVERT_DELAY_MS)))


def get_max_games() -> int:
    """Get the maximum number of hosted games.

    Environment variable: PAIRS_MAX_GAMES
    Default: 100
    """
    max_games = int(os.getenv("PAIRS_MAX_GAMES", "100"))
    if max_games < 1:
        raise ValueError(f"PAIRS_MAX_GAMES must be at least 1, got {max_games}")
    return max_games


def get_board_source() -> str:
    """Get board source type.

    Options:
        - 'local': Boards from the embedded JSON file (or PAIRS_BOARDS_PATH)
    """
    return os.getenv("BOARD_SOURCE", "local").lower()


def get_boards_path() -> str | None:
    """Get an explicit boards JSON path (BOARD_SOURCE=local)."""
    return os.getenv("PAIRS_BOARDS_PATH") or None


def get_score_service_type() -> str:
    """Get score service type.

    Options:
        - 'memory': Keep scores in memory (default, no external service)
        - 'http': Post scores to the boards API at SCORE_SERVICE_URL
    """
    return os.getenv("SCORE_SERVICE", "memory").lower()


def get_score_service_url() -> str:
    """Get boards API URL for score submission.

    Environment variable: SCORE_SERVICE_URL
    Default: http://localhost:4321 for development
    """
    return os.getenv("SCORE_SERVICE_URL", "http://localhost:4321")


def get_score_service_timeout() -> float:
    """Get score submission request timeout in seconds."""
    return float(os.getenv("SCORE_SERVICE_TIMEOUT", "5.0"))
