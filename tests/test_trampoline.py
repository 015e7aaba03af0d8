from __future__ import annotations

import sys
import unittest

from bilby_py import bilby, cont, done, trampoline
from bilby_py.trampoline import Continue, Done


def _count_to(n: int):
    def inner(i):
        if i == n:
            return done(n)
        return cont(lambda: inner(i + 1))

    return trampoline(inner(0))


class TrampolineTests(unittest.TestCase):
    def test_done_is_returned_immediately(self) -> None:
        self.assertEqual(trampoline(Done(5)), 5)

    def test_loop_is_identity_on_non_negative_integers(self) -> None:
        for n in (0, 1, 17):
            with self.subTest(n=n):
                self.assertEqual(_count_to(n), n)

    def test_deep_loop_runs_in_constant_stack(self) -> None:
        n = max(100_000, sys.getrecursionlimit() * 10)
        self.assertEqual(_count_to(n), n)

    def test_mutual_recursion(self) -> None:
        def is_even(n):
            return done(True) if n == 0 else Continue(lambda: is_odd(n - 1))

        def is_odd(n):
            return done(False) if n == 0 else Continue(lambda: is_even(n - 1))

        self.assertTrue(trampoline(is_even(50_000)))
        self.assertFalse(trampoline(is_even(50_001)))

    def test_environment_exposes_trampoline_helpers(self) -> None:
        self.assertEqual(bilby.trampoline(bilby.cont(lambda: bilby.done("x"))), "x")


if __name__ == "__main__":
    unittest.main()
