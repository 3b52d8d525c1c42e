"""Tagged result type for fallible awaitables."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Err:
    """Failed outcome carrying the raised exception."""

    error: Exception

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


async def to_result(awaitable: Any) -> Result[Any]:
    """Await *awaitable* and fold its outcome into a :data:`Result`.

    Only ``Exception`` subclasses are captured; cancellation and other
    ``BaseException`` types propagate.

    Args:
        awaitable: Coroutine, task or future to await.

    Returns:
        Result: ``Ok(value)`` on success, ``Err(exc)`` on failure. A
        non-awaitable argument yields ``Ok(None)`` without being touched.
    """
    if not inspect.isawaitable(awaitable):
        return Ok(None)
    try:
        value = await awaitable
    except Exception as exc:
        return Err(exc)
    return Ok(value)
