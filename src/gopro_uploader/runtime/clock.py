"""Sleep abstractions used by the quota retry policy.

The policy never calls :func:`time.sleep` directly. It asks a sleeper to wait,
so tests can swap in :class:`RecordingSleeper` and run without real delays.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Protocol, runtime_checkable

SleepFn = Callable[[float], None]


@runtime_checkable
class Sleeper(Protocol):
    """Protocol implemented by sleep providers."""

    def sleep(self, seconds: float) -> None:
        """Block for ``seconds``."""


@dataclass
class RealSleeper:
    """Sleeper backed by a real blocking sleep.

    Parameters
    ----------
    sleep_fn:
        Injectable sleep function, defaults to :func:`time.sleep`.
    """

    sleep_fn: SleepFn = field(default=time.sleep)

    def sleep(self, seconds: float) -> None:
        if seconds < 0.0:
            raise ValueError("seconds must be non-negative")
        self.sleep_fn(seconds)


class RecordingSleeper:
    """Deterministic sleeper used for tests.

    Returns immediately and remembers every requested wait.
    """

    def __init__(self) -> None:
        self.waits: list[float] = []

    def sleep(self, seconds: float) -> None:
        if seconds < 0.0:
            raise ValueError("seconds must be non-negative")
        self.waits.append(seconds)
