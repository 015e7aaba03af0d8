"""Structured error types for dispatch, construction and elimination failures."""

from __future__ import annotations

from dataclasses import dataclass


class BilbyError(Exception):
    """Base class for structured bilby-py errors."""


@dataclass(frozen=True)
class NoImplementationError(BilbyError):
    """No registration of a multimethod accepted the given arguments."""

    method: str
    arg_count: int

    def __str__(self) -> str:
        plural = "" if self.arg_count == 1 else "s"
        return f"Method {self.method!r} not implemented for this input ({self.arg_count} argument{plural})"


@dataclass(frozen=True)
class ArityMismatchError(BilbyError):
    """A tagged record constructor received the wrong number of arguments."""

    name: str
    expected: int
    got: int

    def __str__(self) -> str:
        return f"{self.name}: expected {self.expected} arguments, got {self.got}"


@dataclass(frozen=True)
class ExhaustivenessError(BilbyError):
    """A cata dispatch table does not name exactly the variants of its sum."""

    sum_name: str
    missing: tuple[str, ...] = ()
    extra: tuple[str, ...] = ()

    def __str__(self) -> str:
        parts = []
        if self.missing:
            parts.append(f"constructors define {', '.join(self.missing)} but not supplied to cata")
        if self.extra:
            parts.append(f"found extra constructors supplied to cata: {', '.join(self.extra)}")
        return f"{self.sum_name}: {'; '.join(parts)}"


@dataclass(frozen=True)
class DuplicateRegistrationError(BilbyError):
    """A name was registered as one kind while already bound as another."""

    name: str
    existing: str
    attempted: str

    def __str__(self) -> str:
        return f"Cannot add {self.attempted} {self.name!r}: already in environment as {self.existing}"
