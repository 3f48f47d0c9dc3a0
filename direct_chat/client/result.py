"""Explicit success/failure results for backend-calling operations."""
from dataclasses import dataclass
from typing import Awaitable, ClassVar, Generic, TypeVar, Union

from .errors import ChatClientError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class Failure:
    error: ChatClientError
    ok: ClassVar[bool] = False


Result = Union[Ok[T], Failure]


async def attempt(awaitable: Awaitable[T]) -> "Result[T]":
    """Await a backend call and turn client errors into a Failure.

    Anything that is not a ChatClientError is a bug and propagates.
    """
    try:
        value = await awaitable
    except ChatClientError as exc:
        return Failure(exc)
    return Ok(value)
