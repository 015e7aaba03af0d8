"""Trampolined evaluation: continuations reified on the heap instead of the stack.

    def loop(n):
        def inner(i):
            if i == n:
                return Done(n)
            return Continue(lambda: inner(i + 1))

        return trampoline(inner(0))

`loop` is the identity on non-negative integers and uses a constant number
of stack frames regardless of `n`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Union


@dataclass(frozen=True)
class Done:
    """Result of a finished computation."""

    result: Any
    is_done: ClassVar[bool] = True


@dataclass(frozen=True)
class Continue:
    """Suspended step; `thunk` returns the next `Done` or `Continue`."""

    thunk: Callable[[], "Bounce"]
    is_done: ClassVar[bool] = False


Bounce = Union[Done, Continue]


def done(result: Any) -> Done:
    return Done(result)


def cont(thunk: Callable[[], Bounce]) -> Continue:
    return Continue(thunk)


def trampoline(bounce: Bounce) -> Any:
    """Evaluates `Continue` thunks until a `Done` value is reached."""
    while not bounce.is_done:
        bounce = bounce.thunk()
    return bounce.result
