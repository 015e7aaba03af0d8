"""Validation: a success value or a semigroup of failure errors.

    Validation e v = failure(e) + success(v)

The applicative instance collects the errors of every failure instead of
stopping at the first one:

    def non_empty(field, string):
        return success(string) if string else failure([f"{field} must be non-empty"])

    bilby.ap(
        bilby.map(non_empty("First-name", first), curry(lambda f, l: f"{f} {l}")),
        non_empty("Last-name", last),
    )

gives `success("Brian McKenna")` for two non-empty names, and
`failure(["First-name must be non-empty", "Last-name must be non-empty"])`
when both are empty. `errors` must have an `append` implementation in the
environment (lists and strings do).
"""

from __future__ import annotations

from typing import Any, Callable

from .adt import tagged_sum
from .environment import Environment


class _ValidationOps:
    __slots__ = ()

    def map(self, f: Callable[[Any], Any]) -> Any:
        return self.cata({"success": lambda value: success(f(value)), "failure": lambda _: self})

    def ap(self, v: Any, append: Callable[[Any, Any], Any]) -> Any:
        """Applies the wrapped function to `v`, accumulating failures with `append`."""
        return self.cata(
            {
                "success": lambda f: v.map(f),
                "failure": lambda errors: v.cata(
                    {
                        "success": lambda _: self,
                        "failure": lambda other: failure(append(errors, other)),
                    }
                ),
            }
        )

    @property
    def is_success(self) -> bool:
        return self.cata({"success": lambda _: True, "failure": lambda _: False})

    @property
    def is_failure(self) -> bool:
        return not self.is_success


Validation = tagged_sum({"success": ["value"], "failure": ["errors"]}, name="Validation", bases=(_ValidationOps,))
success = Validation.success
failure = Validation.failure


def is_validation(a: Any) -> bool:
    return Validation.is_member(a)


def _validation_equal(env: Environment, a: Any, b: Any) -> bool:
    if not is_validation(b):
        return False
    return a.cata(
        {
            "success": lambda x: b.cata({"success": lambda y: env.equal(x, y), "failure": lambda _: False}),
            "failure": lambda e: b.cata({"success": lambda _: False, "failure": lambda f: env.equal(e, f)}),
        }
    )


def install(env: Environment) -> Environment:
    return (
        env.property("Validation", Validation)
        .property("success", success)
        .property("failure", failure)
        .property("is_validation", is_validation)
        .method("map", is_validation, lambda env, v, f: v.map(f))
        .method("ap", is_validation, lambda env, vf, v: vf.ap(v, env.append))
        .method("equal", is_validation, _validation_equal)
    )
