"""
Deep resolution of awaitables nested in request arguments.
"""
import asyncio
import inspect
from typing import Any, Iterable, List, Mapping


async def _gather(awaitables: Iterable[Any]) -> List[Any]:
    # On the first failure, cancel and reap the siblings still running
    tasks = [asyncio.ensure_future(aw) for aw in awaitables]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def deep_resolve(value: Any) -> Any:
    """
    Return ``value`` with every nested awaitable replaced by its result.

    Mapping values and list/tuple items are resolved concurrently. Keys,
    key order and item order are preserved; a tuple stays a tuple. The
    result of an awaitable is itself resolved, so an awaitable that yields
    a dict of awaitables is fully materialized. Anything else is returned
    as-is.

    The first exception raised by a nested awaitable propagates unchanged
    and the remaining ones are cancelled.
    """
    if inspect.isawaitable(value):
        return await deep_resolve(await value)

    if isinstance(value, Mapping):
        keys = list(value.keys())
        results = await _gather(deep_resolve(value[key]) for key in keys)
        return dict(zip(keys, results))

    if isinstance(value, (list, tuple)):
        results = await _gather(deep_resolve(item) for item in value)
        return tuple(results) if isinstance(value, tuple) else list(results)

    return value
