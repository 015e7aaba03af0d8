"""Lenses allow immutable updating of nested data structures."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

from .adt import tagged
from .environment import Environment
from .helpers import compose, extend, is_instance_of, singleton


class _StoreOps:
    __slots__ = ()

    def map(self, f: Callable[[Any], Any]) -> "Store":
        return Store(compose(f, self.setter), self.getter)


Store = tagged("Store", ["setter", "getter"], bases=(_StoreOps,))
"""A combined setter (part -> whole) and getter (current part)."""

is_store = is_instance_of(Store)


class _LensOps:
    __slots__ = ()

    def compose(self, inner: "Lens") -> "Lens":
        """Focuses this lens inside the target of `inner`.

        `outer.compose(inner)` first runs `inner` on the whole value, then
        runs `outer` on what `inner` focuses; setting goes back out through
        both setters.
        """
        outer = self

        def run(whole):
            whole_store = inner.run(whole)
            part_store = outer.run(whole_store.getter)
            return Store(compose(whole_store.setter, part_store.setter), part_store.getter)

        return Lens(run)


Lens = tagged("Lens", ["run"], bases=(_LensOps,))
"""A total lens: `run(whole)` returns the `Store` for `whole`."""

is_lens = is_instance_of(Lens)


def object_lens(key: Any) -> Lens:
    """Creates a total lens over a mapping for `key`.

    Setting returns a new mapping with `key` rebound; the original is
    never modified. A missing key reads as `None`, so the lens laws hold
    only for mappings that contain `key`: setting back what was read from
    a mapping without it binds `key` to `None` instead of returning the
    mapping unchanged.
    """

    def run(o: Mapping[Any, Any]) -> Store:
        return Store(lambda v: extend(o, singleton(key, v)), o.get(key))

    return Lens(run)


def install(env: Environment) -> Environment:
    return (
        env.property("store", Store)
        .property("is_store", is_store)
        .method("map", is_store, lambda env, a, b: a.map(b))
        .property("lens", Lens)
        .property("is_lens", is_lens)
        .property("object_lens", object_lens)
    )
