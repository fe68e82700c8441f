import asyncio
from typing import Any, Awaitable, Callable, List

Sleep = Callable[[float], Awaitable[None]]


async def wait_for_all(*aws: Awaitable[Any]) -> List[Any]:
    """
    Await every awaitable and return their results in order.

    The first failure propagates immediately and the others are cancelled.
    """
    tasks = [asyncio.ensure_future(a) for a in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for t in tasks:
            if not t.done():
                t.cancel()
        raise
