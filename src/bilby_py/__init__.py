"""bilby-py public API."""

import logging

from .adt import Tagged, TaggedSum, is_tagged, tagged, tagged_sum
from .data import Either, Option, is_either, is_option, left, none, right, some
from .effect import IO, io, is_io
from .environment import Environment, Multimethod, Registration, environmental
from .errors import (
    ArityMismatchError,
    BilbyError,
    DuplicateRegistrationError,
    ExhaustivenessError,
    NoImplementationError,
)
from .helpers import (
    AnyVal,
    Char,
    array_of,
    compose,
    constant,
    curry,
    flip,
    identity,
    object_like,
)
from .lens import Lens, Store, object_lens
from .prelude import build_environment
from .trampoline import cont, done, trampoline
from .validation import Validation, failure, is_validation, success

logging.getLogger(__name__).addHandler(logging.NullHandler())

try:
    from .quickcheck import FailureReport, check, for_all
except ModuleNotFoundError as exc:
    if exc.name and exc.name.startswith("jax"):
        _jax_import_error = exc
        _JAX_AVAILABLE = False

        def for_all(*_args, **_kwargs):
            raise ModuleNotFoundError(
                "jax is required for for_all(). Install runtime deps first."
            ) from _jax_import_error

        def check(*_args, **_kwargs):
            raise ModuleNotFoundError(
                "jax is required for check(). Install runtime deps first."
            ) from _jax_import_error

        class FailureReport:  # pragma: no cover - import-time fallback
            def __init__(self, *_args, **_kwargs) -> None:
                raise ModuleNotFoundError(
                    "jax is required for FailureReport(). Install runtime deps first."
                ) from _jax_import_error

    else:
        raise
else:
    _JAX_AVAILABLE = True

bilby = build_environment(with_quickcheck=_JAX_AVAILABLE)
"""The default environment holding every builtin method and property."""

__all__ = [
    "bilby",
    "build_environment",
    "Environment",
    "Multimethod",
    "Registration",
    "environmental",
    "tagged",
    "tagged_sum",
    "is_tagged",
    "Tagged",
    "TaggedSum",
    "Option",
    "some",
    "none",
    "is_option",
    "Either",
    "left",
    "right",
    "is_either",
    "Validation",
    "success",
    "failure",
    "is_validation",
    "IO",
    "io",
    "is_io",
    "Lens",
    "Store",
    "object_lens",
    "done",
    "cont",
    "trampoline",
    "curry",
    "flip",
    "identity",
    "constant",
    "compose",
    "AnyVal",
    "Char",
    "array_of",
    "object_like",
    "for_all",
    "check",
    "FailureReport",
    "BilbyError",
    "NoImplementationError",
    "ArityMismatchError",
    "ExhaustivenessError",
    "DuplicateRegistrationError",
]
