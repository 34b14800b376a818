from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RetryPolicy:
    """Policy for retrying a command that failed to run

    A command is attempted at most ``retries + 1`` times. Before the n-th
    retry (counting from 1), the runner waits ``delay * backoff ** (n - 1)``
    seconds, but never longer than ``max_delay``.

    A policy is plain configuration. Any state of an ongoing series of
    attempts is kept by the runner, local to a single call.
    """

    retries: int = 2
    delay: float = 0.5
    backoff: float = 2.0
    max_delay: float = 10.0

    def __post_init__(self):
        if self.retries < 0:
            msg = f'number of retries must not be negative, got {self.retries}'
            raise ValueError(msg)
        if self.delay < 0 or self.max_delay < 0:
            msg = 'retry delays must not be negative'
            raise ValueError(msg)
        if self.backoff < 1:
            msg = f'backoff factor must be at least 1, got {self.backoff}'
            raise ValueError(msg)

    @property
    def max_attempts(self) -> int:
        return self.retries + 1

    def delay_for(self, retry: int) -> float:
        """Return the wait time in seconds before the given (1-based) retry"""
        return min(self.delay * self.backoff ** (retry - 1), self.max_delay)


NO_RETRY = RetryPolicy(retries=0, delay=0)
"""Policy for running a command exactly once"""
