"""Tagged records and disjoint sums of them with exhaustive catamorphisms.

    List = tagged_sum({"cons": ["car", "cdr"], "nil": []}, name="List")

    def list_length(l):
        return l.cata({
            "cons": lambda car, cdr: 1 + list_length(cdr),
            "nil": lambda: 0,
        })

    list_length(List.cons(1, List.cons(2, List.nil()))) == 2

Values compare by identity; register an `equal` implementation in an
environment for structural comparison.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import FrozenInstanceError
from types import MappingProxyType
from typing import Any, ClassVar

from .errors import ArityMismatchError, ExhaustivenessError


class Tagged:
    """Base of every record class built by `tagged`."""

    __slots__ = ()
    _name: ClassVar[str] = "Tagged"
    _fields: ClassVar[tuple[str, ...]] = ()
    _bilby_length: ClassVar[int] = 0

    def __init__(self, *args: Any) -> None:
        cls = type(self)
        if len(args) != len(cls._fields):
            raise ArityMismatchError(name=cls._name, expected=len(cls._fields), got=len(args))
        for field_name, value in zip(cls._fields, args):
            object.__setattr__(self, field_name, value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise FrozenInstanceError(f"cannot assign to field {name!r}")

    def __delattr__(self, name: str) -> None:
        raise FrozenInstanceError(f"cannot delete field {name!r}")

    def _field_values(self) -> tuple[Any, ...]:
        return tuple(getattr(self, field_name) for field_name in type(self)._fields)

    def __repr__(self) -> str:
        args = ", ".join(repr(value) for value in self._field_values())
        return f"{type(self)._name}({args})"


def tagged(name: str, fields: Iterable[str], *, bases: tuple[type, ...] = ()) -> type:
    """Creates a constructor for a tagged record.

        Tuple = tagged("Tuple", ["a", "b"])
        x = Tuple(1, 2)
        isinstance(x, Tuple) and x.b == 2
    """
    return _make_record(name, tuple(fields), bases, {})


def _make_record(name: str, fields: tuple[str, ...], bases: tuple[type, ...], extra: Mapping[str, Any]) -> type:
    for field_name in fields:
        if not field_name.isidentifier():
            raise ValueError(f"{name}: field name {field_name!r} is not a valid identifier")
    if len(set(fields)) != len(fields):
        raise ValueError(f"{name}: duplicate field names in {fields!r}")

    parents = tuple(bases) if any(issubclass(base, Tagged) for base in bases) else (*bases, Tagged)
    namespace = {
        "__slots__": fields,
        "_name": name,
        "_fields": fields,
        "_bilby_length": len(fields),
        **extra,
    }
    return type(name, parents, namespace)


class SumMember(Tagged):
    """Base of the variants of a tagged sum; provides `cata`."""

    __slots__ = ()
    _sum_name: ClassVar[str] = "TaggedSum"
    _variants: ClassVar[tuple[str, ...]] = ()
    _tag: ClassVar[str] = ""

    @property
    def tag(self) -> str:
        return type(self)._tag

    def cata(self, dispatches: Mapping[str, Callable[..., Any]]) -> Any:
        """Applies the handler named after this value's variant to its fields.

        `dispatches` must name every variant of the sum and nothing else;
        this is checked before any handler runs.
        """
        cls = type(self)
        missing = tuple(key for key in cls._variants if key not in dispatches)
        extra = tuple(key for key in dispatches if key not in cls._variants)
        if missing or extra:
            raise ExhaustivenessError(sum_name=cls._sum_name, missing=missing, extra=extra)
        return dispatches[cls._tag](*self._field_values())


class TaggedSum:
    """A closed set of tagged record constructors sharing one base class."""

    __slots__ = ("name", "base", "variants")

    def __init__(self, name: str, base: type, variants: Mapping[str, type]) -> None:
        self.name = name
        self.base = base
        self.variants = MappingProxyType(dict(variants))

    def is_member(self, value: Any) -> bool:
        return isinstance(value, self.base)

    def __getattr__(self, name: str) -> type:
        if name.startswith("_") or name in TaggedSum.__slots__:
            raise AttributeError(name)
        try:
            return self.variants[name]
        except KeyError:
            raise AttributeError(f"{self.name} has no variant {name!r}") from None

    def __getitem__(self, name: str) -> type:
        return self.variants[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.variants)

    def __len__(self) -> int:
        return len(self.variants)

    def __repr__(self) -> str:
        return f"TaggedSum({self.name}: {' | '.join(self.variants)})"


def tagged_sum(
    constructors: Mapping[str, Iterable[str]],
    *,
    name: str = "TaggedSum",
    bases: tuple[type, ...] = (),
) -> TaggedSum:
    """Creates a disjoint union of tagged records, each with a `cata`.

    `bases` are mixed into every variant, which is how behavior shared by
    all variants (usually written as a `cata` over the variants) is
    attached.
    """
    if not constructors:
        raise ValueError("tagged_sum requires at least one constructor")
    variant_names = tuple(constructors)
    base = type(name, (*bases, SumMember), {"__slots__": (), "_sum_name": name, "_variants": variant_names})
    variants = {
        key: _make_record(key, tuple(fields), (base,), {"_tag": key})
        for key, fields in constructors.items()
    }
    return TaggedSum(name, base, variants)


def is_tagged(value: Any) -> bool:
    return isinstance(value, Tagged)
