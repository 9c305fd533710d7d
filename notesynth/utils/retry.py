"""Retry logic with exponential backoff for model and embedding calls.

Async counterpart of a classic backoff loop: the delay is awaited, so other
tasks in the same event loop keep running while a call waits to be retried.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


async def retry_with_backoff(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    max_attempts: int = 3,
    delays: list[float] = None,
    exceptions: tuple = (Exception,),
    **kwargs: Any,
) -> T:
    """Await ``func(*args, **kwargs)`` with exponential backoff retry logic.

    Args:
        func: Coroutine function to execute
        *args: Positional arguments to pass to func
        max_attempts: Maximum number of attempts (1 disables retrying)
        delays: Delay seconds before each retry [1, 2, 4] (default); the last
            value is reused when there are more retries than delays
        exceptions: Tuple of exception types to catch and retry
        **kwargs: Keyword arguments to pass to func

    Returns:
        Result of the first successful call

    Raises:
        The last exception if all attempts fail; exceptions not listed in
        ``exceptions`` propagate immediately.

    Example:
        note = await retry_with_backoff(
            generate_note,
            chunk_text,
            provider,
            max_attempts=3,
            exceptions=(GenerationTimeout,),
        )
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
    if delays is None:
        delays = [1, 2, 4]

    name = getattr(func, "__name__", repr(func))
    last_exception = None

    for attempt in range(max_attempts):
        try:
            return await func(*args, **kwargs)

        except exceptions as e:
            last_exception = e

            if attempt < max_attempts - 1:
                delay = delays[min(attempt, len(delays) - 1)] if delays else 0
                logger.warning(
                    f"Attempt {attempt + 1}/{max_attempts} failed for {name}: {str(e)}. "
                    f"Retrying in {delay}s..."
                )
                await asyncio.sleep(delay)
            elif max_attempts > 1:
                logger.error(f"All {max_attempts} attempts failed for {name}: {str(e)}")

    raise last_exception
