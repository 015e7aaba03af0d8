"""Registrations for Python's own values: functions, lists, numbers, strings, dicts.

Lists are the reference semigroup and monad; functions get composition as
`map`, the S combinator as `ap`, and Kleisli composition.
"""

from __future__ import annotations

import functools
from typing import Any, Callable

from .adt import tagged, tagged_sum
from .environment import Environment, environmental
from .helpers import (
    AnyVal,
    Char,
    add,
    and_,
    array_of,
    compose,
    constant,
    curry,
    either_of,
    error,
    extend,
    flip,
    function_length,
    function_name,
    identity,
    is_array,
    is_array_of,
    is_boolean,
    is_exactly,
    is_function,
    is_instance_of,
    is_mapping,
    is_number,
    is_object_like,
    is_string,
    object_like,
    or_,
    singleton,
    strict_equals,
    zip_pairs,
)
from .trampoline import cont, done, trampoline


def lift_a2(env: Environment, f: Callable[[Any], Callable[[Any], Any]], a: Any, b: Any) -> Any:
    """Lifts a curried binary function `f` into the applicative of `a` and `b`."""
    return env.ap(env.map(a, f), b)


def sequence(env: Environment, m: Any, values: list[Any]) -> Any:
    """Sequences a list of values belonging to the monad `m`.

        bilby.sequence(list, [[1, 2], [3], [4, 5]])
            == [[1, 3, 4], [1, 3, 5], [2, 3, 4], [2, 3, 5]]
    """
    if not values:
        return env.pure(m, [])
    head, rest = values[0], values[1:]
    return env.flat_map(
        head,
        lambda x: env.flat_map(sequence(env, m, rest), lambda ys: env.pure(m, [x, *ys])),
    )


def _function_ap(env: Environment, a: Callable[..., Any], b: Callable[..., Any]) -> Callable[[Any], Any]:
    return lambda x: a(x)(b(x))


def _kleisli(env: Environment, a: Callable[..., Any], b: Callable[..., Any]) -> Callable[[Any], Any]:
    return lambda x: env.flat_map(a(x), b)


def _same_kind_equal(kind: Callable[[Any], bool]) -> Callable[[Environment, Any, Any], bool]:
    def equal(env, a, b):
        return kind(b) and a == b

    return equal


def _list_equal(env: Environment, a: list[Any], b: Any) -> bool:
    if not is_array(b) or len(a) != len(b):
        return False
    return env.fold(zip_pairs(a, b), True, lambda acc, pair: acc and env.equal(pair[0], pair[1]))


def _mapping_equal(env: Environment, a: Any, b: Any) -> bool:
    if not is_mapping(b) or a.keys() != b.keys():
        return False
    return all(env.equal(a[key], b[key]) for key in a)


def _list_fold(env: Environment, a: list[Any], seed: Any, f: Callable[[Any, Any], Any]) -> Any:
    return functools.reduce(f, a, seed)


def _list_flat_map(env: Environment, a: list[Any], f: Callable[[Any], Any]) -> list[Any]:
    accum: list[Any] = []
    for x in a:
        accum.extend(f(x))
    return accum


def _list_ap(env: Environment, fs: list[Any], xs: list[Any]) -> list[Any]:
    return [f(x) for f in fs for x in xs]


def install(env: Environment) -> Environment:
    env = (
        env.property("environment", Environment)
        .property("environmental", environmental)
        .property("function_name", function_name)
        .property("function_length", function_length)
        .property("curry", curry)
        .property("flip", flip)
        .property("identity", identity)
        .property("constant", constant)
        .property("compose", compose)
        .property("tagged", tagged)
        .property("tagged_sum", tagged_sum)
        .property("error", error)
        .property("zip", zip_pairs)
        .property("extend", extend)
        .property("singleton", singleton)
        .property("is_array", is_array)
        .property("is_boolean", is_boolean)
        .property("is_function", is_function)
        .property("is_number", is_number)
        .property("is_string", is_string)
        .property("is_mapping", is_mapping)
        .property("is_instance_of", is_instance_of)
        .property("is_exactly", is_exactly)
        .property("AnyVal", AnyVal)
        .property("Char", Char)
        .property("array_of", array_of)
        .property("is_array_of", is_array_of)
        .property("object_like", object_like)
        .property("is_object_like", is_object_like)
        .property("or_", curry(or_))
        .property("and_", curry(and_))
        .property("add", curry(add))
        .property("strict_equals", curry(strict_equals))
        .property("lift_a2", environmental(lift_a2))
        .property("sequence", environmental(sequence))
        .property("done", done)
        .property("cont", cont)
        .property("trampoline", trampoline)
    )

    return (
        env.method("map", is_function, lambda env, a, b: compose(b, a))
        .method("ap", is_function, _function_ap)
        .method("kleisli", is_function, _kleisli)
        .method("equal", is_boolean, _same_kind_equal(is_boolean))
        .method("equal", is_number, _same_kind_equal(is_number))
        .method("equal", is_string, _same_kind_equal(is_string))
        .method("equal", is_array, _list_equal)
        .method("equal", is_mapping, _mapping_equal)
        .method("fold", is_array, _list_fold)
        .method("flat_map", is_array, _list_flat_map)
        .method("map", is_array, lambda env, a, f: [f(x) for x in a])
        .method("ap", is_array, _list_ap)
        .method("append", is_array, lambda env, a, b: a + b)
        .method("pure", is_exactly(list), lambda env, m, a: [a])
        .method("append", either_of(is_number, is_string), lambda env, a, b: a + b)
        .method("append", is_mapping, lambda env, a, b: extend(a, b))
    )
