"""Option and Either: closed sums whose operations are pattern matches.

    Option a   = some(a) + none
    Either a b = left(a) + right(b)

Either is right-biased: `map`, `flat_map` and `ap` act on `right` values
and pass `left` values through untouched.
"""

from __future__ import annotations

from typing import Any, Callable

from .adt import tagged_sum
from .environment import Environment
from .helpers import identity, is_exactly


class _OptionOps:
    """Operations shared by `some` and `none`.

    * fold(f, default) - applies `f` to the value if `some`, else `default`
    * get_or_else(default) - the value if `some`, else `default`
    * is_some / is_none
    * to_left(r) - `left(x)` if `some(x)`, `right(r)` if `none`
    * to_right(l) - `right(x)` if `some(x)`, `left(l)` if `none`
    * flat_map(f), map(f), ap(s), append(s, plus)
    """

    __slots__ = ()

    def fold(self, on_some: Callable[[Any], Any], on_none: Any) -> Any:
        return self.cata({"some": on_some, "none": lambda: on_none})

    def get_or_else(self, default: Any) -> Any:
        return self.cata({"some": identity, "none": lambda: default})

    @property
    def is_some(self) -> bool:
        return self.cata({"some": lambda _: True, "none": lambda: False})

    @property
    def is_none(self) -> bool:
        return not self.is_some

    def to_left(self, r: Any) -> "Either":
        return self.cata({"some": left, "none": lambda: right(r)})

    def to_right(self, l: Any) -> "Either":
        return self.cata({"some": right, "none": lambda: left(l)})

    def flat_map(self, f: Callable[[Any], Any]) -> Any:
        return self.cata({"some": f, "none": lambda: self})

    def map(self, f: Callable[[Any], Any]) -> Any:
        return self.cata({"some": lambda x: some(f(x)), "none": lambda: self})

    def ap(self, s: Any) -> Any:
        return self.cata({"some": lambda f: s.map(f), "none": lambda: self})

    def append(self, s: Any, plus: Callable[[Any, Any], Any]) -> Any:
        return self.cata({"some": lambda x: s.map(lambda y: plus(x, y)), "none": lambda: self})


Option = tagged_sum({"some": ["value"], "none": []}, name="Option", bases=(_OptionOps,))
some = Option.some
none = Option.none()


def is_option(a: Any) -> bool:
    return Option.is_member(a)


class _EitherOps:
    """Operations shared by `left` and `right`.

    * fold(on_left, on_right)
    * swap() - turns `left` into `right` and vice-versa
    * is_left / is_right
    * to_option() - `none` if `left`, `some` value of `right`
    * to_list() - `[]` if `left`, singleton list if `right`
    * flat_map(f), map(f), ap(e), append(e, plus)
    """

    __slots__ = ()

    def fold(self, on_left: Callable[[Any], Any], on_right: Callable[[Any], Any]) -> Any:
        return self.cata({"left": on_left, "right": on_right})

    def swap(self) -> "Either":
        return self.cata({"left": right, "right": left})

    @property
    def is_left(self) -> bool:
        return self.cata({"left": lambda _: True, "right": lambda _: False})

    @property
    def is_right(self) -> bool:
        return not self.is_left

    def to_option(self) -> Any:
        return self.cata({"left": lambda _: none, "right": some})

    def to_list(self) -> list[Any]:
        return self.cata({"left": lambda _: [], "right": lambda x: [x]})

    def flat_map(self, f: Callable[[Any], Any]) -> Any:
        return self.cata({"left": lambda _: self, "right": f})

    def map(self, f: Callable[[Any], Any]) -> Any:
        return self.cata({"left": lambda _: self, "right": lambda x: right(f(x))})

    def ap(self, e: Any) -> Any:
        return self.cata({"left": lambda _: self, "right": lambda f: e.map(f)})

    def append(self, e: Any, plus: Callable[[Any, Any], Any]) -> Any:
        return self.cata(
            {
                "left": lambda x: e.fold(lambda y: left(plus(x, y)), lambda _: self),
                "right": lambda x: e.fold(left, lambda y: right(plus(x, y))),
            }
        )


Either = tagged_sum({"left": ["value"], "right": ["value"]}, name="Either", bases=(_EitherOps,))
left = Either.left
right = Either.right


def is_either(a: Any) -> bool:
    return Either.is_member(a)


def _option_equal(env: Environment, a: Any, b: Any) -> bool:
    if not is_option(b):
        return False
    return a.cata(
        {
            "some": lambda x: b.cata({"some": lambda y: env.equal(x, y), "none": lambda: False}),
            "none": lambda: b.is_none,
        }
    )


def _either_equal(env: Environment, a: Any, b: Any) -> bool:
    return is_either(b) and a.tag == b.tag and env.equal(a.value, b.value)


def install(env: Environment) -> Environment:
    return (
        env.property("Option", Option)
        .property("some", some)
        .property("none", none)
        .property("is_option", is_option)
        .method("fold", is_option, lambda env, a, b, c: a.fold(b, c))
        .method("flat_map", is_option, lambda env, a, b: a.flat_map(b))
        .method("map", is_option, lambda env, a, b: a.map(b))
        .method("ap", is_option, lambda env, a, b: a.ap(b))
        .method("append", is_option, lambda env, a, b: a.append(b, env.append))
        .method("equal", is_option, _option_equal)
        .method("pure", is_exactly(Option), lambda env, m, a: some(a))
        .property("Either", Either)
        .property("left", left)
        .property("right", right)
        .property("is_either", is_either)
        .method("fold", is_either, lambda env, a, b, c: a.fold(b, c))
        .method("flat_map", is_either, lambda env, a, b: a.flat_map(b))
        .method("map", is_either, lambda env, a, b: a.map(b))
        .method("ap", is_either, lambda env, a, b: a.ap(b))
        .method("append", is_either, lambda env, a, b: a.append(b, env.append))
        .method("equal", is_either, _either_equal)
        .method("pure", is_exactly(Either), lambda env, m, a: right(a))
    )
