import asyncio
import random
from typing import Awaitable, Callable

Latency = Callable[[], Awaitable[None]]


def simulated_latency(min_ms: int, max_ms: int, rng: random.Random | None = None) -> Latency:
    """
    Build the artificial network delay awaited at the top of every service call.

    The delay is drawn uniformly from [min_ms, max_ms]. With both bounds at
    zero the coroutine still yields to the event loop once.
    """
    if min_ms < 0 or max_ms < min_ms:
        raise ValueError(f"Invalid latency bounds: {min_ms}..{max_ms} ms")
    rng = rng or random.Random()

    async def delay():
        await asyncio.sleep(rng.uniform(min_ms, max_ms) / 1000)

    return delay
