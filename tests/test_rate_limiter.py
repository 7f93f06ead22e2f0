import asyncio
from time import monotonic

import pytest

from osuv1.core.rate_limiter import RateLimiter


@pytest.mark.asyncio
async def test_sequential_acquisitions_are_paced():
    limiter = RateLimiter(max_calls=10, period_seconds=1.0)

    start = monotonic()
    for _ in range(20):
        await limiter.acquire()
    elapsed = monotonic() - start

    assert elapsed >= 1.0
    assert elapsed <= 3.0


@pytest.mark.asyncio
async def test_window_never_exceeds_capacity():
    limiter = RateLimiter(max_calls=5, period_seconds=0.5)
    completed: list[float] = []

    async def worker():
        await limiter.acquire()
        completed.append(monotonic())

    await asyncio.gather(*(worker() for _ in range(15)))

    completed.sort()
    for index, stamp in enumerate(completed):
        in_window = [other for other in completed[index:] if other - stamp < 0.49]
        assert len(in_window) <= 5


@pytest.mark.asyncio
async def test_idle_time_builds_allowance():
    limiter = RateLimiter(max_calls=10, period_seconds=0.2)
    await asyncio.sleep(0.3)

    start = monotonic()
    for _ in range(5):
        await limiter.acquire()

    assert monotonic() - start < 0.05


@pytest.mark.asyncio
async def test_cancelled_waiter_releases_the_lock():
    limiter = RateLimiter(max_calls=1, period_seconds=10.0)

    waiter = asyncio.create_task(limiter.acquire())
    await asyncio.sleep(0.05)
    waiter.cancel()

    with pytest.raises(asyncio.CancelledError):
        await waiter

    assert not limiter._lock.locked()


@pytest.mark.asyncio
async def test_cancelled_waiters_do_not_create_budget():
    limiter = RateLimiter(max_calls=10, period_seconds=1.0)
    admitted: list[float] = []

    async def worker():
        await limiter.acquire()
        admitted.append(monotonic())

    deadline = monotonic() + 2.0
    while monotonic() < deadline:
        task = asyncio.create_task(worker())
        await asyncio.sleep(0.04)
        if not task.done():
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

    worst = max(
        (len([other for other in admitted if 0 <= other - stamp < 0.99]) for stamp in admitted),
        default=0,
    )
    assert worst <= 10


@pytest.mark.asyncio
async def test_full_bucket_allows_a_burst_of_capacity():
    limiter = RateLimiter(max_calls=5, period_seconds=0.1)
    await asyncio.sleep(0.3)

    start = monotonic()
    for _ in range(5):
        await limiter.acquire()
    assert monotonic() - start < 0.01

    await limiter.acquire()
    assert monotonic() - start >= 0.015


def test_invalid_configuration():
    with pytest.raises(ValueError):
        RateLimiter(max_calls=0, period_seconds=1.0)
