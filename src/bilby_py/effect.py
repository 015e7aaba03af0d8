"""Purely functional IO wrapper.

An `io` value holds a side-effecting, zero-argument `thunk`. Composing
IO values builds new thunks; nothing runs until `perform()` is called.
"""

from __future__ import annotations

from typing import Any, Callable

from .adt import tagged
from .environment import Environment
from .helpers import is_exactly, is_instance_of


class _IOOps:
    """
    * perform() - runs the action; call it a single time per program
    * map(f) - post-composes `f` with the action's result
    * flat_map(g) - runs the action, then the IO returned by `g`
    """

    __slots__ = ()

    def perform(self) -> Any:
        return self.thunk()

    def map(self, f: Callable[[Any], Any]) -> "IO":
        return io(lambda: f(self.thunk()))

    def flat_map(self, g: Callable[[Any], "IO"]) -> "IO":
        return io(lambda: g(self.thunk()).perform())


IO = tagged("IO", ["thunk"], bases=(_IOOps,))
io = IO
is_io = is_instance_of(IO)


def install(env: Environment) -> Environment:
    return (
        env.property("io", io)
        .property("is_io", is_io)
        .method("pure", is_exactly(IO), lambda env, m, a: io(lambda: a))
        .method("map", is_io, lambda env, a, f: a.map(f))
        .method("flat_map", is_io, lambda env, a, g: a.flat_map(g))
    )
