"""Catalog of algebraic laws the builtin structures are checked against."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Final, Literal

from .environment import Environment
from .helpers import AnyVal, array_of, compose, curry, identity, object_like

Structure = Literal["list", "string", "option", "either", "validation", "io", "lens"]


@dataclass(frozen=True)
class Law:
    id: str
    structure: Structure
    description: str
    build: Callable[[Environment], Callable[..., bool]]
    shapes: tuple[Any, ...]

    def property_for(self, env: Environment) -> Callable[..., bool]:
        return self.build(env)


def _increment(x: float) -> float:
    return x + 1


def _double(x: float) -> float:
    return x * 2


def _functor_identity(wrap: Callable[[Environment, Any], Any]) -> Callable[[Environment], Callable[..., bool]]:
    def build(env: Environment) -> Callable[..., bool]:
        return lambda a: env.equal(env.map(wrap(env, a), identity), wrap(env, a))

    return build


def _functor_composition(wrap: Callable[[Environment, Any], Any]) -> Callable[[Environment], Callable[..., bool]]:
    def build(env: Environment) -> Callable[..., bool]:
        def law(a):
            composed = env.map(wrap(env, a), compose(_increment, _double))
            chained = env.map(env.map(wrap(env, a), _double), _increment)
            return env.equal(composed, chained)

        return law

    return build


def _left_identity(
    monad: Callable[[Environment], Any], f: Callable[[Environment], Callable[[Any], Any]]
) -> Callable[[Environment], Callable[..., bool]]:
    def build(env: Environment) -> Callable[..., bool]:
        return lambda a: env.equal(env.flat_map(env.pure(monad(env), a), f(env)), f(env)(a))

    return build


def _right_identity(
    monad: Callable[[Environment], Any], wrap: Callable[[Environment, Any], Any]
) -> Callable[[Environment], Callable[..., bool]]:
    def build(env: Environment) -> Callable[..., bool]:
        return lambda a: env.equal(env.flat_map(wrap(env, a), env.pure(monad(env))), wrap(env, a))

    return build


def _associativity(wrap: Callable[[Environment, Any], Any]) -> Callable[[Environment], Callable[..., bool]]:
    def build(env: Environment) -> Callable[..., bool]:
        def law(a, b, c):
            x, y, z = wrap(env, a), wrap(env, b), wrap(env, c)
            return env.equal(env.append(env.append(x, y), z), env.append(x, env.append(y, z)))

        return law

    return build


def _as_list(env: Environment, a: Any) -> Any:
    return a


def _as_some(env: Environment, a: Any) -> Any:
    return env.some(a)


def _as_right(env: Environment, a: Any) -> Any:
    return env.right(a)


def _validation_accumulates(env: Environment) -> Callable[..., bool]:
    def law(a, b):
        both = env.ap(env.map(env.failure([a]), curry(lambda x, y: (x, y))), env.failure([b]))
        return env.equal(both, env.failure([a, b]))

    return law


def _validation_success(env: Environment) -> Callable[..., bool]:
    def law(a, b):
        both = env.ap(env.map(env.success(a), curry(lambda x, y: x + y)), env.success(b))
        return env.equal(both, env.success(a + b))

    return law


def _io_identity(env: Environment) -> Callable[..., bool]:
    return lambda a: env.equal(env.map(env.io(lambda: a), identity).perform(), a)


def _io_flat_map(env: Environment) -> Callable[..., bool]:
    def law(a):
        action = env.flat_map(env.io(lambda: a), lambda x: env.pure(env.io, _increment(x)))
        return env.equal(action.perform(), a + 1)

    return law


def _lens_get_set(env: Environment) -> Callable[..., bool]:
    def law(o):
        store = env.object_lens("a").run(o)
        return env.equal(store.setter(store.getter), o)

    return law


def _lens_set_get(env: Environment) -> Callable[..., bool]:
    def law(o, v):
        lens = env.object_lens("a")
        return env.equal(lens.run(lens.run(o).setter(v)).getter, v)

    return law


def _lens_compose(env: Environment) -> Callable[..., bool]:
    def law(o, v):
        before = dict(o)
        nested = {"outer": o}
        lens = env.object_lens("a").compose(env.object_lens("outer"))
        updated = lens.run(nested).setter(v)
        return env.equal(updated["outer"]["a"], v) and env.equal(nested["outer"], before)

    return law


# The lens laws only hold when "a" is present; get-then-set on a missing key adds it.
_RECORD: Final = object_like({"a": float})

LAWS: Final[tuple[Law, ...]] = (
    Law(
        id="list_functor_identity",
        structure="list",
        description="map(a, identity) == a",
        build=_functor_identity(_as_list),
        shapes=(array_of(AnyVal),),
    ),
    Law(
        id="list_functor_composition",
        structure="list",
        description="map(a, compose(f, g)) == map(map(a, g), f)",
        build=_functor_composition(_as_list),
        shapes=(array_of(float),),
    ),
    Law(
        id="list_monad_left_identity",
        structure="list",
        description="flat_map(pure(list, a), f) == f(a)",
        build=_left_identity(lambda env: list, lambda env: lambda x: [x, x]),
        shapes=(AnyVal,),
    ),
    Law(
        id="list_monad_right_identity",
        structure="list",
        description="flat_map(a, pure(list)) == a",
        build=_right_identity(lambda env: list, _as_list),
        shapes=(array_of(AnyVal),),
    ),
    Law(
        id="list_semigroup_associativity",
        structure="list",
        description="append(append(a, b), c) == append(a, append(b, c))",
        build=_associativity(_as_list),
        shapes=(list, list, list),
    ),
    Law(
        id="string_semigroup_associativity",
        structure="string",
        description="append(append(a, b), c) == append(a, append(b, c))",
        build=_associativity(_as_list),
        shapes=(str, str, str),
    ),
    Law(
        id="option_functor_identity",
        structure="option",
        description="map(some(a), identity) == some(a)",
        build=_functor_identity(_as_some),
        shapes=(AnyVal,),
    ),
    Law(
        id="option_functor_composition",
        structure="option",
        description="map(some(a), compose(f, g)) == map(map(some(a), g), f)",
        build=_functor_composition(_as_some),
        shapes=(float,),
    ),
    Law(
        id="option_monad_left_identity",
        structure="option",
        description="flat_map(pure(Option, a), f) == f(a)",
        build=_left_identity(lambda env: env.Option, lambda env: lambda x: env.some(_increment(x))),
        shapes=(float,),
    ),
    Law(
        id="option_semigroup_associativity",
        structure="option",
        description="append over some values is associative",
        build=_associativity(_as_some),
        shapes=(str, str, str),
    ),
    Law(
        id="either_monad_right_identity",
        structure="either",
        description="flat_map(right(a), pure(Either)) == right(a)",
        build=_right_identity(lambda env: env.Either, _as_right),
        shapes=(AnyVal,),
    ),
    Law(
        id="either_semigroup_associativity",
        structure="either",
        description="append over right values is associative",
        build=_associativity(_as_right),
        shapes=(array_of(AnyVal), array_of(AnyVal), array_of(AnyVal)),
    ),
    Law(
        id="validation_failure_accumulation",
        structure="validation",
        description="ap of two failures appends their errors",
        build=_validation_accumulates,
        shapes=(str, str),
    ),
    Law(
        id="validation_success_ap",
        structure="validation",
        description="ap of two successes applies the function",
        build=_validation_success,
        shapes=(float, float),
    ),
    Law(
        id="io_functor_identity",
        structure="io",
        description="map(io(a), identity).perform() == a",
        build=_io_identity,
        shapes=(AnyVal,),
    ),
    Law(
        id="io_flat_map",
        structure="io",
        description="flat_map runs both actions in order",
        build=_io_flat_map,
        shapes=(float,),
    ),
    Law(
        id="lens_get_set",
        structure="lens",
        description="setting the value just read changes nothing",
        build=_lens_get_set,
        shapes=(_RECORD,),
    ),
    Law(
        id="lens_set_get",
        structure="lens",
        description="reading after setting returns the value set",
        build=_lens_set_get,
        shapes=(_RECORD, float),
    ),
    Law(
        id="lens_compose_set",
        structure="lens",
        description="composed lenses update the nested value without touching the original",
        build=_lens_compose,
        shapes=(_RECORD, float),
    ),
)


def default_laws() -> tuple[Law, ...]:
    return LAWS


def laws_for(structure: Structure) -> tuple[Law, ...]:
    return tuple(law for law in LAWS if law.structure == structure)
