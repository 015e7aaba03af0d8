from __future__ import annotations

import importlib.util
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for property-check tests")
class ArbitraryValueTests(unittest.TestCase):
    def _rng(self, seed: int = 7):
        from bilby_py.rng import RandomSource

        return RandomSource(seed)

    def test_primitive_shapes(self) -> None:
        from bilby_py import AnyVal, Char, bilby

        rng = self._rng()
        self.assertIsInstance(bilby.arb(bool, 5, rng), bool)
        self.assertIsInstance(bilby.arb(float, 5, rng), float)
        self.assertIsInstance(bilby.arb(int, 5, rng), int)
        self.assertIsInstance(bilby.arb(str, 5, rng), str)
        self.assertIn(type(bilby.arb(AnyVal, 5, rng)), (bool, float, str))

        for _ in range(50):
            ch = bilby.arb(Char, 5, rng)
            self.assertEqual(len(ch), 1)
            self.assertTrue(32 <= ord(ch) < 127)

    def test_magnitude_grows_with_size(self) -> None:
        from bilby_py import bilby

        rng = self._rng()
        for _ in range(50):
            self.assertLessEqual(abs(bilby.arb(float, 0, rng)), 1.0)
            self.assertIn(bilby.arb(int, 0, rng), (-1, 0))

    def test_size_zero_collections_are_empty(self) -> None:
        from bilby_py import bilby

        rng = self._rng()
        self.assertEqual(bilby.arb(str, 0, rng), "")
        self.assertEqual(bilby.arb(list, 0, rng), [])
        self.assertEqual(bilby.arb(dict, 0, rng), {})

    def test_container_shapes(self) -> None:
        from bilby_py import array_of, bilby, object_like

        rng = self._rng()
        ints = bilby.arb(array_of(int), 10, rng)
        self.assertIsInstance(ints, list)
        self.assertLessEqual(len(ints), 10)
        self.assertTrue(all(isinstance(x, int) for x in ints))

        record = bilby.arb(object_like({"name": str, "ok": bool}), 10, rng)
        self.assertEqual(set(record), {"name", "ok"})
        self.assertIsInstance(record["name"], str)
        self.assertIsInstance(record["ok"], bool)

        mapping = bilby.arb(dict, 10, rng)
        self.assertTrue(all(isinstance(k, str) for k in mapping))
        self.assertTrue(all(isinstance(v, list) for v in mapping.values()))

    def test_same_seed_generates_same_values(self) -> None:
        from bilby_py import array_of, bilby

        first = bilby.arb(array_of(float), 20, self._rng(3))
        second = bilby.arb(array_of(float), 20, self._rng(3))
        self.assertEqual(first, second)

    def test_random_source_bounds(self) -> None:
        from bilby_py.rng import RandomSource

        rng = RandomSource(11, block_size=4)
        draws = [rng.uniform() for _ in range(20)]
        self.assertTrue(all(0.0 <= d < 1.0 for d in draws))
        self.assertIn(rng.one_of(["a", "b"]), {"a", "b"})
        with self.assertRaises(ValueError):
            rng.one_of([])
        with self.assertRaises(ValueError):
            RandomSource(1, block_size=0)


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for property-check tests")
class ShrinkTests(unittest.TestCase):
    def test_shrink_candidates(self) -> None:
        from bilby_py import bilby

        cases = [
            (True, [False]),
            (False, []),
            (10, [0, 5, 8, 9]),
            (-10, [0, 10, -5, -8, -9]),
            (10.0, [0, 5.0, 8.0, 9.0]),
            (0, [0]),
            ("abcd", ["", "ab", "abc"]),
            ("", [""]),
            ([1, 2, 3, 4], [[], [1, 2], [1, 2, 3]]),
            ({"a": 1, "b": 2}, [{}, {"a": 1}]),
        ]
        for value, want in cases:
            with self.subTest(value=value):
                self.assertEqual(bilby.shrink(value), want)

    def test_non_finite_numbers_shrink_to_zero(self) -> None:
        from bilby_py import bilby

        self.assertEqual(bilby.shrink(float("inf")), [0])
        self.assertEqual(bilby.shrink(float("-inf")), [0, float("inf")])

    def test_find_smallest_keeps_last_failing_candidate(self) -> None:
        from bilby_py import bilby
        from bilby_py.quickcheck import find_smallest

        self.assertEqual(find_smallest(bilby, lambda a: a == 1, [10]), [9])
        self.assertEqual(find_smallest(bilby, lambda a, s: False, [10, "abcd"]), [9, "abc"])

    def test_find_smallest_stops_at_first_passing_candidate(self) -> None:
        from bilby_py import bilby
        from bilby_py.quickcheck import find_smallest

        # 0 passes, so position 0 keeps its original value; position 1 still shrinks.
        self.assertEqual(find_smallest(bilby, lambda a, s: a == 0 or len(s) > 4, [10, "abcd"]), [10, "abc"])


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for property-check tests")
class ForAllTests(unittest.TestCase):
    def test_passing_property_returns_none(self) -> None:
        from bilby_py import bilby

        report = bilby.for_all(lambda n: n + n == 2 * n, [float], seed=1)
        self.assertTrue(report.is_none)
        self.assertEqual(report.fold(lambda fail: "failed", "All tests passed!"), "All tests passed!")

    def test_falsified_property_reports_inputs_and_tries(self) -> None:
        from bilby_py import bilby

        report = bilby.for_all(lambda n: n == n + 1, [float], seed=1)
        self.assertTrue(report.is_some)
        failure = report.get_or_else(None)
        self.assertEqual(len(failure.inputs), 1)
        self.assertIsInstance(failure.inputs, list)
        self.assertTrue(0 <= failure.tries < bilby.goal)

    def test_goal_bounds_number_of_trials(self) -> None:
        from bilby_py import bilby

        calls = []
        env = bilby.property("goal", 7)
        report = env.for_all(lambda b: calls.append(b) or True, [bool], seed=2)
        self.assertTrue(report.is_none)
        self.assertEqual(len(calls), 7)

    def test_goal_default_reads_environment_variable(self) -> None:
        from bilby_py.quickcheck import _DEFAULT_GOAL, _default_goal
        from bilby_py import bilby

        self.assertEqual(bilby.goal, _DEFAULT_GOAL)
        self.assertEqual(_default_goal({}), 100)
        self.assertEqual(_default_goal({"BILBY_PY_GOAL": "7"}), 7)
        self.assertEqual(_default_goal({"BILBY_PY_GOAL": "0"}), 1)
        with self.assertRaises(ValueError) as cm:
            _default_goal({"BILBY_PY_GOAL": "many"})
        self.assertIn("BILBY_PY_GOAL", str(cm.exception))

    def test_invalid_goal_is_rejected(self) -> None:
        from bilby_py import bilby

        for goal in (0, -1, 2.5, True):
            with self.subTest(goal=goal):
                with self.assertRaises(ValueError):
                    bilby.property("goal", goal).for_all(lambda x: True, [bool])

    def test_same_seed_gives_same_report(self) -> None:
        from bilby_py import bilby

        def short(s):
            return len(s) < 5

        first = bilby.for_all(short, [str], seed=5).get_or_else(None)
        second = bilby.for_all(short, [str], seed=5).get_or_else(None)
        self.assertIsNotNone(first)
        self.assertEqual((first.inputs, first.tries), (second.inputs, second.tries))

    def test_property_exceptions_propagate(self) -> None:
        from bilby_py import bilby

        def explode(_):
            raise RuntimeError("boom")

        with self.assertRaises(RuntimeError):
            bilby.for_all(explode, [bool], seed=1)

    def test_check_raises_assertion_error(self) -> None:
        from bilby_py import bilby

        self.assertIsNone(bilby.check(lambda b: b or not b, [bool], seed=3))
        with self.assertRaises(AssertionError) as cm:
            bilby.check(lambda n: n == n + 1, [float], seed=3)
        self.assertIn("Failed after", str(cm.exception))
        self.assertIn("seed=3", str(cm.exception))

    def test_new_shapes_plug_in_through_arb(self) -> None:
        from bilby_py import bilby, some
        from bilby_py.helpers import is_exactly

        class OptionOfBool:
            pass

        env = bilby.method("arb", is_exactly(OptionOfBool), lambda env, shape, size, rng: some(env.arb(bool, size, rng)))
        report = env.for_all(lambda o: o.is_some, [OptionOfBool], seed=4)
        self.assertTrue(report.is_none)


if __name__ == "__main__":
    unittest.main()
