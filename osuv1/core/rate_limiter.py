import asyncio
from time import monotonic


class RateLimiter:
    """\
    Token bucket granting `max_calls` acquisitions per `period_seconds`.

    The allowance starts empty and accrues continuously. Waiters queue
    on the lock, so under contention they are admitted in arrival order.
    """

    def __init__(self, max_calls: int, period_seconds: float) -> None:
        if max_calls < 1 or period_seconds <= 0:
            raise ValueError("rate limit needs at least one call per positive period")
        self.max_calls = max_calls
        self.period_seconds = period_seconds
        self.rate = max_calls / period_seconds
        self._allowance = 0.0
        self._last_call = monotonic()
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        async with self._lock:
            now = monotonic()
            self._allowance += (now - self._last_call) * self.rate
            # elapsed time is accrued exactly once, even if the sleep is cancelled
            self._last_call = now

            if self._allowance > self.max_calls:
                # a full bucket pays for this call with its clamp
                self._allowance = float(self.max_calls - 1)
            elif self._allowance >= 1.0:
                self._allowance -= 1.0
            else:
                await asyncio.sleep((1.0 - self._allowance) / self.rate)
                self._allowance = 0.0

            self._last_call = monotonic()
