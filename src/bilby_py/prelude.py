"""Composition of the default environment from every builtin module."""

from __future__ import annotations

from . import data, effect, lens, primitives, validation
from .environment import Environment

_CORE_INSTALLERS = (
    primitives.install,
    data.install,
    validation.install,
    lens.install,
    effect.install,
)


def build_environment(*, with_quickcheck: bool = True) -> Environment:
    """Builds a fresh environment holding every builtin method and property.

    The property-testing registrations (`arb`, `shrink`, `for_all`, ...)
    need jax; pass `with_quickcheck=False` to build without them.
    """
    env = Environment()
    for install in _CORE_INSTALLERS:
        env = install(env)
    if with_quickcheck:
        from .quickcheck import install as install_quickcheck

        env = install_quickcheck(env)
    return env
