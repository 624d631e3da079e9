"""Concurrent resolution of awaitables nested in plain data.

``resolve_all`` walks dicts, lists and tuples, awaits every awaitable it
finds in them concurrently and returns the same structure with each
awaitable replaced by its result. What happens to a failed awaitable is
decided by a ``FailurePolicy``: ``IgnoreFailures`` drops the entry from its
container and logs a warning, ``PropagateFailures`` fails the whole
resolution with the first error and cancels the awaitables still
running beside it.
"""

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

_FAILED = object()


class FailurePolicy(ABC):
    """Base class for failure handling strategies."""

    # Passed through to asyncio.gather; False short-circuits on first error.
    return_exceptions: bool = True

    @abstractmethod
    def on_failure(self, error: Exception) -> None:
        """
        Handle a failed awaitable.

        Returning normally removes the entry from its container; raising
        fails the whole resolution.
        """
        pass


class IgnoreFailures(FailurePolicy):
    """Drop failed entries and log them."""

    return_exceptions = True

    def on_failure(self, error: Exception) -> None:
        logger.warning("Dropping unresolved value: %s", error, exc_info=error)


class PropagateFailures(FailurePolicy):
    """Fail the resolution with the first error."""

    return_exceptions = False

    def on_failure(self, error: Exception) -> None:
        raise error


async def resolve_all(
    value: Any,
    ignore_failures: bool = False,
    policy: Optional[FailurePolicy] = None,
) -> Any:
    """
    Resolve every awaitable nested in ``value`` concurrently.

    Args:
        value: Plain value, list, tuple or dict, possibly nested, with
            awaitables at any position
        ignore_failures: Select ``IgnoreFailures`` instead of
            ``PropagateFailures`` when no policy is given
        policy: Explicit failure policy

    Returns:
        Structure of the same shape with awaitables replaced by their
        results. A failed top-level awaitable resolves to None when ignored.
    """
    if policy is None:
        policy = IgnoreFailures() if ignore_failures else PropagateFailures()

    results = await _gather([value], policy)
    resolved = results[0]
    return None if resolved is _FAILED else resolved


async def _resolve(value: Any, policy: FailurePolicy) -> Any:
    if inspect.isawaitable(value):
        return await value

    if isinstance(value, dict):
        keys = list(value.keys())
        results = await _gather([value[key] for key in keys], policy)
        return {
            key: result
            for key, result in zip(keys, results)
            if result is not _FAILED
        }

    if isinstance(value, (list, tuple)):
        results = await _gather(list(value), policy)
        resolved = [result for result in results if result is not _FAILED]
        return tuple(resolved) if isinstance(value, tuple) else resolved

    return value


async def _gather(children: List[Any], policy: FailurePolicy) -> List[Any]:
    tasks = [asyncio.ensure_future(_resolve(child, policy)) for child in children]
    try:
        results = await asyncio.gather(*tasks, return_exceptions=policy.return_exceptions)
    except BaseException:
        # Siblings must not outlive a failed resolution
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    out = []
    for result in results:
        if isinstance(result, Exception):
            policy.on_failure(result)
            out.append(_FAILED)
        elif isinstance(result, BaseException):
            raise result
        else:
            out.append(result)
    return out
