# ABOUTME: Generation call policy using tenacity: error normalisation, rate limiting, bounded attempts
# ABOUTME: Provider-specific exceptions never escape; callers only see GenerationError subclasses

import asyncio
import time
from collections.abc import Callable
from typing import Any

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from article_forge.errors import GenerationError
from article_forge.utils.logging import get_logger

logger = get_logger(__name__)


class GenerationRateLimitError(GenerationError):
    """Raised when the provider rejects a call because of rate limiting."""

    pass


class GenerationQuotaExceededError(GenerationError):
    """Raised when the provider quota or billing limit is exhausted."""

    pass


class GenerationTimeoutError(GenerationError):
    """Raised when the provider request times out."""

    pass


class GenerationConnectionError(GenerationError):
    """Raised when the provider cannot be reached."""

    pass


# Global rate limiter state
_rate_limiter_state = {
    "calls_per_second": 1.0,
    "last_call_time": 0.0,
}


async def _apply_rate_limiting():
    """Apply rate limiting using simple async sleep."""
    state = _rate_limiter_state

    if state["calls_per_second"] <= 0:
        return

    min_interval = 1.0 / state["calls_per_second"]
    current_time = time.time()
    time_since_last = current_time - state["last_call_time"]

    if time_since_last < min_interval:
        sleep_time = min_interval - time_since_last
        logger.debug("Rate limiting", sleep_time=sleep_time)
        await asyncio.sleep(sleep_time)

    state["last_call_time"] = time.time()


def to_generation_error(e: Exception) -> GenerationError:
    """Convert provider exceptions to generation errors without leaking provider shapes."""
    error_str = str(e).lower()

    if "rate limit" in error_str or "429" in error_str:
        return GenerationRateLimitError(f"Rate limit exceeded: {e}")
    elif "quota" in error_str or "billing" in error_str:
        return GenerationQuotaExceededError(f"Provider quota exceeded: {e}")
    elif "timeout" in error_str or "timed out" in error_str:
        return GenerationTimeoutError(f"Request timeout: {e}")
    elif "connection" in error_str or "network" in error_str:
        return GenerationConnectionError(f"Connection failed: {e}")
    else:
        return GenerationError(f"Generation call failed: {e}")


def generation_retry(
    max_attempts: int = 1,
    min_wait: float = 1.0,
    max_wait: float = 10.0,
    multiplier: float = 2.0,
    with_rate_limiting: bool = True,
):
    """Wrap an async generation call with rate limiting and error normalisation.

    Only rate-limit, timeout and connection errors are retried, and only when
    ``max_attempts`` is greater than one.
    """

    def decorator(func: Callable):
        async def wrapper(*args, **kwargs):
            retrying = AsyncRetrying(
                stop=stop_after_attempt(max(1, max_attempts)),
                wait=wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
                retry=retry_if_exception_type(
                    (
                        GenerationRateLimitError,
                        GenerationTimeoutError,
                        GenerationConnectionError,
                    )
                ),
                reraise=True,
            )

            async for attempt in retrying:
                with attempt:
                    if with_rate_limiting:
                        await _apply_rate_limiting()
                    try:
                        return await func(*args, **kwargs)
                    except GenerationError:
                        raise
                    except Exception as e:
                        raise to_generation_error(e) from e

        return wrapper

    return decorator


def configure_generation_rate_limit(calls_per_second: float = 1.0) -> None:
    """Configure the global generation rate limit."""
    _rate_limiter_state["calls_per_second"] = calls_per_second
    logger.info("Generation rate limit configured", calls_per_second=calls_per_second)


def get_generation_retry_status() -> dict[str, Any]:
    """Get current status of the generation rate limiter."""
    return {
        "rate_limiter": {
            "calls_per_second": _rate_limiter_state["calls_per_second"],
            "last_call_time": _rate_limiter_state["last_call_time"],
        },
    }
