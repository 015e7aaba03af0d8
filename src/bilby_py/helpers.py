"""Function combinators, structural predicates and generator shape tokens."""

from __future__ import annotations

import functools
import inspect
import numbers
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .errors import BilbyError

_POSITIONAL_KINDS = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def function_name(f: Callable[..., Any]) -> str | None:
    """Returns the name of function `f`."""
    name = getattr(f, "_bilby_name", None)
    if name is None:
        name = getattr(f, "__name__", None)
    return name if isinstance(name, str) else None


def function_length(f: Callable[..., Any]) -> int:
    """Returns the number of required positional parameters of `f`.

    Curried and composed functions carry an explicit `_bilby_length`;
    callables without an inspectable signature count as nullary.
    """
    length = getattr(f, "_bilby_length", None)
    if isinstance(length, int):
        return length
    try:
        signature = inspect.signature(f)
    except (TypeError, ValueError):
        return 0
    return sum(
        1
        for param in signature.parameters.values()
        if param.kind in _POSITIONAL_KINDS and param.default is inspect.Parameter.empty
    )


def accepts_varargs(f: Callable[..., Any]) -> bool:
    try:
        signature = inspect.signature(f)
    except (TypeError, ValueError):
        return True
    return any(param.kind is inspect.Parameter.VAR_POSITIONAL for param in signature.parameters.values())


def curry(f: Callable[..., Any], arity: int | None = None) -> Callable[..., Any]:
    """Allows partial application of the positional arguments of `f`.

        add = curry(lambda a, b: a + b)
        add(15)(27) == add(15, 27) == 42

    `f` runs as soon as at least `arity` arguments have been supplied.
    """
    length = function_length(f) if arity is None else arity

    @functools.wraps(f, updated=())
    def curried(*args):
        if len(args) >= length:
            return f(*args)
        return curry(functools.partial(f, *args), length - len(args))

    curried._bilby_length = length
    return curried


def flip(f: Callable[[Any, Any], Any]) -> Callable[[Any], Callable[[Any], Any]]:
    """Flips the order of arguments to `f`: flip(f)(a)(b) == f(b, a)."""

    def flipped(a):
        return lambda b: f(b, a)

    return flipped


def identity(o: Any) -> Any:
    return o


def constant(c: Any) -> Callable[..., Any]:
    """Creates a function that always returns `c`, no matter the arguments."""

    def constant_fn(*_args):
        return c

    return constant_fn


def compose(f: Callable[[Any], Any], g: Callable[..., Any]) -> Callable[..., Any]:
    """compose(f, g)(x) == f(g(x))"""

    def composed(*args):
        return f(g(*args))

    composed._bilby_length = function_length(g)
    return composed


def error(message: str) -> Callable[..., Any]:
    """Turns raising a `BilbyError` into an expression."""

    def raiser(*_args):
        raise BilbyError(message)

    return raiser


def zip_pairs(a, b) -> list[tuple[Any, Any]]:
    """Pairs the values of two sequences, stopping at the shorter one."""
    return list(zip(a, b))


def singleton(k: Any, v: Any) -> dict[Any, Any]:
    return {k: v}


def extend(a: Mapping[Any, Any], b: Mapping[Any, Any]) -> dict[Any, Any]:
    """Right-biased key-value append: extend({a: 1, b: 2}, {b: 3}) == {a: 1, b: 3}."""
    out = dict(a)
    out.update(b)
    return out


def strict_equals(a: Any, b: Any) -> bool:
    """Equality that never crosses value kinds (True does not equal 1)."""
    if a is b:
        return True
    return type(a) is type(b) and a == b


def is_instance_of(c: type) -> Callable[[Any], bool]:
    def predicate(o):
        return isinstance(o, c)

    predicate._bilby_name = f"is_instance_of({getattr(c, '__name__', c)})"
    return predicate


def is_exactly(token: Any) -> Callable[[Any], bool]:
    """Predicate matching one token (a shape or a monad constructor) by identity."""

    def predicate(o):
        return o is token

    return predicate


def is_function(a: Any) -> bool:
    return callable(a) and not isinstance(a, type)


def is_boolean(a: Any) -> bool:
    return isinstance(a, bool)


def is_number(a: Any) -> bool:
    return isinstance(a, numbers.Number) and not isinstance(a, bool)


def is_string(a: Any) -> bool:
    return isinstance(a, str)


def is_array(a: Any) -> bool:
    return isinstance(a, list)


def is_mapping(a: Any) -> bool:
    return isinstance(a, Mapping)


def or_(a: Any, b: Any) -> Any:
    return a or b


def and_(a: Any, b: Any) -> Any:
    return a and b


def add(a: Any, b: Any) -> Any:
    return a + b


def either_of(*predicates: Callable[[Any], bool]) -> Callable[[Any], bool]:
    """Predicate satisfied when any of `predicates` is."""

    def predicate(o):
        return any(p(o) for p in predicates)

    return predicate


class _ShapeSentinel:
    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return self.name


AnyVal = _ShapeSentinel("AnyVal")
"""Shape token for any primitive value (bool, float or str)."""

Char = _ShapeSentinel("Char")
"""Shape token for a single printable character string."""


@dataclass(frozen=True)
class ArrayOf:
    """Shape token for a list whose items have shape `type`."""

    type: Any


@dataclass(frozen=True, eq=False)
class ObjectLike:
    """Shape token for a dict with the given keys, each with its own shape."""

    props: Mapping[str, Any]


def array_of(shape: Any) -> ArrayOf:
    return ArrayOf(shape)


def object_like(props: Mapping[str, Any]) -> ObjectLike:
    return ObjectLike(dict(props))


is_array_of = is_instance_of(ArrayOf)
is_object_like = is_instance_of(ObjectLike)
