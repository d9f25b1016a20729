"""
Shared Domain Constants.

Central location for game thresholds and board rules.
Timing values are in milliseconds unless the name says otherwise.
"""

# =============================================================================
# Timing (milliseconds)
# =============================================================================

TICK_INTERVAL_MS = 1000  # Game clock resolution shown to the player
REVERT_DELAY_MS = 800  # Mismatched cards stay face-up this long


# =============================================================================
# Board Rules
# =============================================================================

ALLOWED_CARD_COUNTS = frozenset([16, 24])
DEFAULT_CARD_COUNT = 16


# =============================================================================
# Notice Messages (Single Source of Truth)
# =============================================================================


class NoticeMessages:
    """Centralized notice texts relayed to the client."""

    SCORE_SAVED_TITLE = "Success"
    SCORE_SAVED = "Score saved"
    SCORE_FAILED_TITLE = "Error"
    SCORE_FAILED = "Could not save score"
    TIMEOUT_TITLE = "Time"
    TIMEOUT = "Time is up"
