"""Infrastructure layer - cross-cutting technical support."""

from .retry import RetryableError, TransientError, retrying

__all__ = [
    "RetryableError",
    "TransientError",
    "retrying",
]
