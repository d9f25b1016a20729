"""Clock formatting for elapsed game time."""


def format_elapsed_ms(milliseconds: int) -> str:
    """Format milliseconds as mm:ss (minutes are not wrapped at 60)."""
    total_seconds = max(0, milliseconds) // 1000
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


def format_clock(seconds: int) -> str:
    """Format whole seconds as hh:mm:ss for the game clock."""
    seconds = max(0, seconds)
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
