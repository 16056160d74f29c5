"""Degrade-to-default policy for optional sub-fetches."""
import logging
from typing import Awaitable, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")


async def degrade_to_default(operation: Awaitable[T], default: T, label: str) -> T:
    """Await an optional operation, substituting `default` on any failure.

    Cancellation is not intercepted.

    Args:
        operation: Awaitable producing the value
        default: Value returned when the operation fails
        label: Name used in the warning log

    Returns:
        The operation's result, or `default`
    """
    try:
        return await operation
    except Exception as e:
        logger.warning(f"{label} unavailable, using default {default!r}: {type(e).__name__}: {e}")
        return default
