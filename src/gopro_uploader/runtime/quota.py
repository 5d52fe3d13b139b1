"""
Quota-aware retry policy for rate-limited remote operations.

YouTube quota windows reset on a fixed schedule, so the only sensible reaction
to a quota error is to wait a fixed cooldown and try the same call again.
Every other failure is propagated at once.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from ..infra.exceptions import QuotaExhaustedError
from ..infra.logging import get_logger
from .clock import RealSleeper, Sleeper

logger = get_logger(__name__)

T = TypeVar("T")

QUOTA_REASONS = (
    "quotaExceeded",
    "dailyLimitExceeded",
    "rateLimitExceeded",
    "userRateLimitExceeded",
)


def is_quota_error(error: BaseException) -> bool:
    """
    Return True if ``error`` signals a quota or rate limit condition.

    Structured reasons (``CatalogError.reasons``) are checked first, then the
    error message, which is what the API echoes back for older endpoints.
    """
    reasons = getattr(error, "reasons", None) or []
    if any(reason in QUOTA_REASONS for reason in reasons):
        return True
    message = str(error)
    return any(reason in message for reason in QUOTA_REASONS)


@dataclass
class QuotaRetryPolicy:
    """
    Retry an operation while it fails with quota errors.

    Parameters
    ----------
    cooldown_seconds:
        Fixed wait between attempts.
    max_retries:
        Number of cooldowns allowed before giving up; ``None`` retries forever.
    sleeper:
        Where waits go; swap in a RecordingSleeper for tests.
    classify:
        Predicate deciding whether an exception is a quota condition.
    """

    cooldown_seconds: float = 3600.0
    max_retries: int | None = None
    sleeper: Sleeper = field(default_factory=RealSleeper)
    classify: Callable[[BaseException], bool] = field(default=is_quota_error)

    def __post_init__(self) -> None:
        if self.cooldown_seconds < 0:
            raise ValueError("cooldown_seconds must be non-negative")
        if self.max_retries is not None and self.max_retries < 0:
            raise ValueError("max_retries must be non-negative or None")

    def call(self, operation: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Invoke ``operation`` and retry it after every quota failure."""
        retries = 0
        while True:
            try:
                return operation(*args, **kwargs)
            except Exception as e:
                if not self.classify(e):
                    raise
                if self.max_retries is not None and retries >= self.max_retries:
                    raise QuotaExhaustedError(
                        f"Quota still exceeded after {retries} retries: {e}",
                        status_code=getattr(e, "status_code", None),
                        reasons=getattr(e, "reasons", None),
                    ) from e
                retries += 1
                logger.warning(
                    "quota_wait",
                    operation=getattr(operation, "__name__", repr(operation)),
                    attempt=retries,
                    cooldown_seconds=self.cooldown_seconds,
                    error=str(e),
                )
                self.sleeper.sleep(self.cooldown_seconds)
