"""Property-based testing: generate inputs, run a property, shrink failures.

Instead of hand-picking cases:

    assert 0 + 1 == 1
    assert 1 + 1 == 2

state the property once and let the environment generate inputs:

    bilby.for_all(lambda n: n + n == 2 * n, [float]).fold(
        lambda fail: f"Failed after {fail.tries} tries: {fail.inputs}",
        "All tests passed!",
    )

Input shapes are `bool`, `float`, `int`, `str`, `Char`, `AnyVal`, `list`,
`dict`, `array_of(shape)` and `object_like({key: shape})`. Generation is
the `arb` multimethod and shrinking is `shrink`, so new shapes and value
kinds are added by registering more implementations.

The number of trials is the environment's `goal` property (default 100,
override with `env.property("goal", n)`). The `BILBY_PY_GOAL` environment
variable only changes that default; it is read once at import and must
hold an integer.
"""

from __future__ import annotations

import logging
import math
import numbers
import os
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Final

from .adt import tagged
from .data import none, some
from .environment import Environment, environmental
from .helpers import (
    AnyVal,
    Char,
    array_of,
    is_array,
    is_array_of,
    is_boolean,
    is_exactly,
    is_mapping,
    is_number,
    is_object_like,
    is_string,
)
from .rng import RandomSource, fresh_seed
from .trampoline import Bounce, Continue, Done, trampoline

logger = logging.getLogger(__name__)


def _default_goal(environ: Mapping[str, str] = os.environ) -> int:
    raw = environ.get("BILBY_PY_GOAL", "100")
    try:
        return max(1, int(raw))
    except ValueError:
        raise ValueError(f"BILBY_PY_GOAL must be an integer, got {raw!r}") from None


_DEFAULT_GOAL: Final[int] = _default_goal()
# Half the exponent bits of the largest double, so magnitudes stay finite.
_FLOAT_BITS: Final[int] = 511
_INT_BITS: Final[int] = 63
_PRIMITIVE_SHAPES: Final[tuple[type, ...]] = (bool, float, str)

FailureReport = tagged("FailureReport", ["inputs", "tries"])
"""`inputs`: the (shrunk) arguments that falsified the property; `tries`:
the number of passing trials before the failure."""


def _goal(env: Environment) -> int:
    goal = env.goal
    if isinstance(goal, bool) or not isinstance(goal, int) or goal < 1:
        raise ValueError(f"goal must be a positive integer, got {goal!r}")
    return goal


def _arb_array_of(env: Environment, shape: Any, size: float, rng: RandomSource) -> list[Any]:
    length = math.ceil(rng.random_range(0, size))
    return [env.arb(shape.type, size - 1, rng) for _ in range(length)]


def _arb_object_like(env: Environment, shape: Any, size: float, rng: RandomSource) -> dict[str, Any]:
    return {key: env.arb(prop, size - 1, rng) for key, prop in shape.props.items()}


def _arb_any_val(env: Environment, shape: Any, size: float, rng: RandomSource) -> Any:
    return env.arb(rng.one_of(_PRIMITIVE_SHAPES), size - 1, rng)


def _arb_list(env: Environment, shape: Any, size: float, rng: RandomSource) -> list[Any]:
    return env.arb(array_of(AnyVal), size - 1, rng)


def _arb_bool(env: Environment, shape: Any, size: float, rng: RandomSource) -> bool:
    return rng.uniform() < 0.5


def _arb_char(env: Environment, shape: Any, size: float, rng: RandomSource) -> str:
    return chr(math.floor(rng.random_range(32, 127)))


def _arb_float(env: Environment, shape: Any, size: float, rng: RandomSource) -> float:
    variance = 2.0 ** (size * _FLOAT_BITS / _goal(env))
    return rng.random_range(-variance, variance)


def _arb_int(env: Environment, shape: Any, size: float, rng: RandomSource) -> int:
    variance = 2.0 ** (size * _INT_BITS / _goal(env))
    return int(rng.random_range(-variance, variance))


def _arb_dict(env: Environment, shape: Any, size: float, rng: RandomSource) -> dict[str, Any]:
    length = math.ceil(rng.random_range(0, size))
    return {env.arb(str, size - 1, rng): env.arb(array_of(AnyVal), size - 1, rng) for _ in range(length)}


def _arb_str(env: Environment, shape: Any, size: float, rng: RandomSource) -> str:
    return "".join(env.arb(array_of(Char), size - 1, rng))


def _is_real(a: Any) -> bool:
    return is_number(a) and isinstance(a, numbers.Real)


def _halve_toward_zero(x: Any) -> int:
    if isinstance(x, int):
        return x // 2 if x >= 0 else -(-x // 2)
    return math.trunc(x / 2)


def _shrink_bool(env: Environment, b: bool) -> list[bool]:
    return [False] if b else []


def _shrink_number(env: Environment, n: Any) -> list[Any]:
    accum: list[Any] = [0]
    if n < 0:
        accum.append(-n)
    if not math.isfinite(n):
        return accum

    x = n
    while x:
        x = _halve_toward_zero(x)
        if x:
            accum.append(n - x)
    return accum


def _prefixes(seq: Sequence[Any], empty: Any) -> list[Any]:
    """`empty` followed by `seq` with a trailing half dropped, repeatedly halved."""
    accum = [empty]
    x = len(seq)
    while x:
        x //= 2
        if x:
            accum.append(seq[: len(seq) - x])
    return accum


def _shrink_string(env: Environment, s: str) -> list[str]:
    return _prefixes(s, "")


def _shrink_list(env: Environment, a: list[Any]) -> list[list[Any]]:
    return _prefixes(a, [])


def _shrink_mapping(env: Environment, o: Any) -> list[dict[Any, Any]]:
    return [dict(items) for items in _prefixes(list(o.items()), [])]


def generate_inputs(env: Environment, shapes: Sequence[Any], size: float, rng: RandomSource) -> list[Any]:
    return env.map(list(shapes), lambda shape: env.arb(shape, size, rng))


def find_smallest(env: Environment, property: Callable[..., bool], inputs: Sequence[Any]) -> list[Any]:
    """Shrinks each argument position in turn, left to right, in a single pass.

    Candidates for a position are tried in order; each one that still
    falsifies the property becomes that position's value, and the first
    one that satisfies it ends the search for that position.
    """
    shrunken = [env.shrink(value) for value in inputs]

    def position(i: int, smallest: list[Any]) -> Bounce:
        if i == len(shrunken):
            return Done(smallest)
        return Continue(lambda: candidate(i, 0, smallest))

    def candidate(i: int, j: int, smallest: list[Any]) -> Bounce:
        if j == len(shrunken[i]):
            return Continue(lambda: position(i + 1, smallest))
        args = list(smallest)
        args[i] = shrunken[i][j]
        if property(*args):
            return Continue(lambda: position(i + 1, smallest))
        return Continue(lambda: candidate(i, j + 1, args))

    return trampoline(position(0, list(inputs)))


def for_all(env: Environment, property: Callable[..., bool], shapes: Sequence[Any], *, seed: int | None = None) -> Any:
    """Runs `property` on generated inputs up to `goal` times.

    Trial `i` generates its inputs with size `i`. Returns `none` if every
    trial passes, otherwise `some(FailureReport(inputs, tries))` with the
    inputs shrunk. Exceptions raised by `property` propagate.
    """
    goal = _goal(env)
    rng = RandomSource(seed)
    for tries in range(goal):
        inputs = generate_inputs(env, shapes, tries, rng)
        if not property(*inputs):
            logger.debug("property falsified after %d tries (seed=%d): %r", tries, rng.seed, inputs)
            smallest = find_smallest(env, property, inputs)
            logger.debug("shrunk counterexample to %r", smallest)
            return some(FailureReport(smallest, tries))
    return none


def check(env: Environment, property: Callable[..., bool], shapes: Sequence[Any], *, seed: int | None = None) -> None:
    """Like `for_all`, but raises `AssertionError` describing any counterexample."""
    if seed is None:
        seed = fresh_seed()
    report = for_all(env, property, shapes, seed=seed)
    message = report.fold(
        lambda fail: f"Failed after {fail.tries} tries (seed={seed}): {fail.inputs!r}",
        None,
    )
    if message is not None:
        raise AssertionError(message)


def install(env: Environment) -> Environment:
    return (
        env.property("goal", _DEFAULT_GOAL)
        .property("FailureReport", FailureReport)
        .property("RandomSource", RandomSource)
        .method("arb", is_array_of, _arb_array_of)
        .method("arb", is_object_like, _arb_object_like)
        .method("arb", is_exactly(AnyVal), _arb_any_val)
        .method("arb", is_exactly(list), _arb_list)
        .method("arb", is_exactly(bool), _arb_bool)
        .method("arb", is_exactly(Char), _arb_char)
        .method("arb", is_exactly(float), _arb_float)
        .method("arb", is_exactly(int), _arb_int)
        .method("arb", is_exactly(dict), _arb_dict)
        .method("arb", is_exactly(str), _arb_str)
        .method("shrink", is_boolean, _shrink_bool)
        .method("shrink", _is_real, _shrink_number)
        .method("shrink", is_string, _shrink_string)
        .method("shrink", is_array, _shrink_list)
        .method("shrink", is_mapping, _shrink_mapping)
        .property("for_all", environmental(for_all))
        .property("check", environmental(check))
    )
