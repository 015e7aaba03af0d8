from __future__ import annotations

import unittest

from bilby_py import Lens, Store, bilby, object_lens


class LensTests(unittest.TestCase):
    def test_object_lens_gets_and_sets_without_mutation(self) -> None:
        record = {"a": 1, "b": 2}
        store = object_lens("a").run(record)

        self.assertEqual(store.getter, 1)
        self.assertEqual(store.setter(10), {"a": 10, "b": 2})
        self.assertEqual(record, {"a": 1, "b": 2})

    def test_missing_key_reads_as_none(self) -> None:
        store = object_lens("z").run({})
        self.assertIsNone(store.getter)
        self.assertEqual(store.setter(3), {"z": 3})

    def test_get_then_set_is_identity_only_for_present_keys(self) -> None:
        lens = object_lens("z")
        present = {"z": 1, "y": 2}
        store = lens.run(present)
        self.assertEqual(store.setter(store.getter), present)

        store = lens.run({})
        self.assertEqual(store.setter(store.getter), {"z": None})
        self.assertNotEqual(store.setter(store.getter), {})

    def test_round_trip_laws(self) -> None:
        lens = object_lens("a")
        record = {"a": 1}
        for value in (0, -5, "text", None):
            with self.subTest(value=value):
                self.assertEqual(lens.run(lens.run(record).setter(value)).getter, value)
        self.assertEqual(lens.run(record).setter(lens.run(record).getter), record)

    def test_compose_focuses_inside_outer_target(self) -> None:
        nested = {"outer": {"a": 1, "keep": True}, "other": 0}
        lens = object_lens("a").compose(object_lens("outer"))

        store = lens.run(nested)
        self.assertEqual(store.getter, 1)
        self.assertEqual(store.setter(9), {"outer": {"a": 9, "keep": True}, "other": 0})
        self.assertEqual(nested["outer"]["a"], 1)

    def test_store_map_post_composes_setter(self) -> None:
        store = object_lens("a").run({"a": 1}).map(lambda whole: sorted(whole))
        self.assertEqual(store.setter(2), ["a"])

        mapped = bilby.map(Store(lambda v: v * 2, 3), lambda x: x + 1)
        self.assertEqual(mapped.setter(5), 11)
        self.assertEqual(mapped.getter, 3)

    def test_environment_predicates(self) -> None:
        self.assertTrue(bilby.is_lens(object_lens("a")))
        self.assertTrue(bilby.is_store(Store(lambda v: v, 0)))
        self.assertFalse(bilby.is_lens(Lens))
        self.assertIs(bilby.lens, Lens)


if __name__ == "__main__":
    unittest.main()
