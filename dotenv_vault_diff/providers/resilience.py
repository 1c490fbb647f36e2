"""
Resilience primitives: retry with exponential backoff.

Wraps external calls (vault CLI, GitHub API) so transient failures are retried
before the caller decides whether the failure is fatal or absorbable.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry with exponential backoff."""
    max_retries: int = 3
    base_delay_s: float = 0.5
    max_delay_s: float = 10.0
    backoff_factor: float = 1.5
    retry_on_status_codes: tuple[int, ...] = (429, 500, 502, 503, 504)

    def delay_for(self, attempt: int) -> float:
        """Sleep before the attempt after `attempt` (1-based)."""
        return min(
            self.base_delay_s * (self.backoff_factor ** (attempt - 1)),
            self.max_delay_s,
        )


def resilient_call(
    func: Callable[..., T],
    *args: Any,
    retry_config: Optional[RetryConfig] = None,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], None] = time.sleep,
    **kwargs: Any,
) -> T:
    """
    Execute an external call with retry protection.

    Only exceptions matching `retry_on` are retried; anything else propagates
    immediately. Raises the last exception if all retries are exhausted.
    """
    cfg = retry_config or RetryConfig()

    last_err: Optional[BaseException] = None
    for attempt in range(1, cfg.max_retries + 1):
        try:
            return func(*args, **kwargs)
        except retry_on as exc:
            last_err = exc
            logger.debug(
                "Attempt %d/%d failed: %s: %s",
                attempt, cfg.max_retries, type(exc).__name__, exc,
            )
            if attempt < cfg.max_retries:
                sleep(cfg.delay_for(attempt))

    raise last_err  # type: ignore[misc]
