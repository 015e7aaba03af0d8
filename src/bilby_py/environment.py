"""Immutable environments of multimethods and properties.

An environment maps names either to an ordered tuple of registrations
(a multimethod) or to a plain value (a property). Every extension returns
a new environment; older environments keep resolving calls exactly as
they did before.

    env = Environment().method("negate", is_number, lambda env, n: -n)
    env2 = env.method("negate", is_boolean, lambda env, b: not b)

    env2.negate(100) == -100
    env2.negate(True) is False
    env.negate(True)  # NoImplementationError

Dispatch is a linear scan: the first registration whose predicate accepts
the arguments wins, so earlier registrations shadow later ones.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .errors import DuplicateRegistrationError, NoImplementationError
from .helpers import accepts_varargs, curry, extend, function_length, singleton


@dataclass(frozen=True)
class Registration:
    """One (predicate, implementation) entry of a multimethod.

    Implementations take the dispatching environment as their first
    parameter. Predicates see only as many leading arguments as they
    declare positional parameters, unless they accept `*args`.
    """

    predicate: Callable[..., bool]
    implementation: Callable[..., Any]
    predicate_arity: int | None = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        arity = None if accepts_varargs(self.predicate) else function_length(self.predicate)
        object.__setattr__(self, "predicate_arity", arity)

    def matches(self, args: Sequence[Any]) -> bool:
        arity = self.predicate_arity
        if arity is None:
            return bool(self.predicate(*args))
        if len(args) < arity:
            return False
        return bool(self.predicate(*args[:arity]))


@dataclass(frozen=True)
class EnvironmentFunction:
    """Property value that receives the environment it is looked up in."""

    function: Callable[..., Any]

    def bind(self, env: "Environment") -> Callable[..., Any]:
        return functools.partial(self.function, env)


def environmental(function: Callable[..., Any]) -> EnvironmentFunction:
    return EnvironmentFunction(function)


class Multimethod:
    """A curried view of one method name resolved against one environment."""

    __slots__ = ("name", "registrations", "env")

    def __init__(self, name: str, registrations: tuple[Registration, ...], env: "Environment") -> None:
        self.name = name
        self.registrations = registrations
        self.env = env

    @property
    def arity(self) -> int:
        if not self.registrations:
            return 0
        return max(function_length(self.registrations[0].implementation) - 1, 0)

    def __call__(self, *args):
        arity = self.arity
        if len(args) >= arity:
            return self.dispatch(*args)
        return curry(self.dispatch, arity)(*args)

    def resolve(self, *args) -> Registration:
        for registration in self.registrations:
            if registration.matches(args):
                return registration
        raise NoImplementationError(method=self.name, arg_count=len(args))

    def dispatch(self, *args):
        return self.resolve(*args).implementation(self.env, *args)

    def __repr__(self) -> str:
        return f"<multimethod {self.name} arity={self.arity} registrations={len(self.registrations)}>"


MethodTable = Mapping[str, Sequence[Registration]]


class Environment:
    """Immutable registry of multimethods and properties."""

    __slots__ = ("_methods", "_properties")

    def __init__(self, methods: MethodTable | None = None, properties: Mapping[str, Any] | None = None) -> None:
        method_table = {} if methods is None else {name: tuple(regs) for name, regs in methods.items()}
        property_table = {} if properties is None else dict(properties)

        for name in method_table:
            _check_name(name, "method")
        for name in property_table:
            _check_name(name, "property")
            if name in method_table:
                raise DuplicateRegistrationError(name=name, existing="method", attempted="property")

        object.__setattr__(self, "_methods", MappingProxyType(method_table))
        object.__setattr__(self, "_properties", MappingProxyType(property_table))

    # Defined before `property` below shadows the builtin inside this class body.
    @property
    def methods(self) -> Mapping[str, tuple[Registration, ...]]:
        return self._methods

    @property
    def properties(self) -> Mapping[str, Any]:
        return self._properties

    def method(self, name: str, predicate: Callable[..., bool], implementation: Callable[..., Any]) -> "Environment":
        """Returns a new environment with `(predicate, implementation)` appended to `name`."""
        if name in self._properties:
            raise DuplicateRegistrationError(name=name, existing="property", attempted="method")
        registrations = self._methods.get(name, ()) + (Registration(predicate, implementation),)
        return Environment(extend(self._methods, singleton(name, registrations)), self._properties)

    def property(self, name: str, value: Any) -> "Environment":
        """Returns a new environment with `name` bound to `value`."""
        if name in self._methods:
            raise DuplicateRegistrationError(name=name, existing="method", attempted="property")
        return Environment(self._methods, extend(self._properties, singleton(name, value)))

    def env_concat(self, extra_methods: MethodTable, extra_properties: Mapping[str, Any]) -> "Environment":
        """Adds methods and properties.

        Extra registrations are tried after this environment's own; extra
        properties replace this environment's properties of the same name.
        """
        new_methods = {name: regs + tuple(extra_methods.get(name, ())) for name, regs in self._methods.items()}
        for name, regs in extra_methods.items():
            if name not in new_methods:
                new_methods[name] = tuple(regs)
        return Environment(new_methods, extend(self._properties, extra_properties))

    def env_append(self, other: "Environment") -> "Environment":
        """Combines two environments, biased to `other`."""
        return other.env_concat(self._methods, self._properties)

    def merge(self, other: "Environment", biased_to_other: bool = True) -> "Environment":
        """Combines two environments; `other`'s properties always win.

        `biased_to_other` only decides method priority: when true, `other`'s
        registrations are tried before this environment's.
        """
        if biased_to_other:
            methods = other.env_concat(self._methods, {}).methods
        else:
            methods = self.env_concat(other.methods, {}).methods
        return Environment(methods, extend(self._properties, other.properties))

    def __getitem__(self, name: str) -> Any:
        if name in self._properties:
            value = self._properties[name]
            if isinstance(value, EnvironmentFunction):
                return value.bind(self)
            return value
        if name in self._methods:
            return Multimethod(name, self._methods[name], self)
        raise KeyError(name)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(f"environment has no method or property {name!r}") from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Environment is immutable; extend it with method() or property()")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Environment is immutable")

    def __contains__(self, name: object) -> bool:
        return name in self._methods or name in self._properties

    def __iter__(self) -> Iterator[str]:
        yield from self._methods
        yield from self._properties

    def __len__(self) -> int:
        return len(self._methods) + len(self._properties)

    def __dir__(self) -> list[str]:
        return sorted(set(object.__dir__(self)) | set(self))

    def __repr__(self) -> str:
        return f"Environment(methods={len(self._methods)}, properties={len(self._properties)})"


_RESERVED_NAMES = frozenset(name for name in vars(Environment) if not name.startswith("_"))


def _check_name(name: object, kind: str) -> None:
    if not isinstance(name, str):
        raise TypeError(f"{kind} name must be a string, got {type(name).__name__}")
    if name in _RESERVED_NAMES:
        raise DuplicateRegistrationError(name=name, existing="environment attribute", attempted=kind)
