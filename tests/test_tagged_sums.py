from __future__ import annotations

from dataclasses import FrozenInstanceError
import unittest

from bilby_py import ArityMismatchError, ExhaustivenessError, is_tagged, tagged, tagged_sum


List = tagged_sum({"cons": ["car", "cdr"], "nil": []}, name="List")


def _list_length(xs) -> int:
    return xs.cata({"cons": lambda car, cdr: 1 + _list_length(cdr), "nil": lambda: 0})


class TaggedRecordTests(unittest.TestCase):
    def test_fields_and_instance_check(self) -> None:
        Tuple = tagged("Tuple", ["a", "b"])
        x = Tuple(1, 2)

        self.assertIsInstance(x, Tuple)
        self.assertEqual((x.a, x.b), (1, 2))
        self.assertTrue(is_tagged(x))
        self.assertEqual(repr(x), "Tuple(1, 2)")

    def test_wrong_argument_count_raises(self) -> None:
        Tuple = tagged("Tuple", ["a", "b"])
        with self.assertRaises(ArityMismatchError) as cm:
            Tuple(1)
        self.assertEqual((cm.exception.expected, cm.exception.got), (2, 1))
        self.assertIn("Tuple", str(cm.exception))

    def test_records_are_immutable(self) -> None:
        Point = tagged("Point", ["x"])
        p = Point(1)
        with self.assertRaises(FrozenInstanceError):
            p.x = 2
        self.assertEqual(p.x, 1)

    def test_records_compare_by_identity(self) -> None:
        Point = tagged("Point", ["x"])
        p = Point(1)
        self.assertEqual(p, p)
        self.assertNotEqual(p, Point(1))

    def test_invalid_field_names_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            tagged("Bad", ["not valid"])
        with self.assertRaises(ValueError):
            tagged("Bad", ["a", "a"])

    def test_mixin_bases_attach_behavior(self) -> None:
        class Norm:
            __slots__ = ()

            def norm(self):
                return abs(self.x) + abs(self.y)

        Vec = tagged("Vec", ["x", "y"], bases=(Norm,))
        self.assertEqual(Vec(3, -4).norm(), 7)


class TaggedSumTests(unittest.TestCase):
    def test_cata_dispatches_on_variant(self) -> None:
        xs = List.cons(1, List.cons(2, List.nil()))
        self.assertEqual(_list_length(xs), 2)
        self.assertEqual(xs.tag, "cons")

    def test_variants_are_members_of_the_sum(self) -> None:
        self.assertTrue(List.is_member(List.nil()))
        self.assertFalse(List.is_member(object()))
        self.assertEqual(list(List), ["cons", "nil"])
        self.assertEqual(len(List), 2)
        self.assertIs(List["cons"], List.cons)

    def test_missing_cata_handler_raises_before_dispatch(self) -> None:
        calls = []
        with self.assertRaises(ExhaustivenessError) as cm:
            List.nil().cata({"nil": lambda: calls.append("nil")})
        self.assertEqual(cm.exception.missing, ("cons",))
        self.assertEqual(calls, [])
        self.assertIn("cons", str(cm.exception))

    def test_extra_cata_handler_raises(self) -> None:
        with self.assertRaises(ExhaustivenessError) as cm:
            List.nil().cata({"cons": lambda car, cdr: 1, "nil": lambda: 0, "snoc": lambda: 2})
        self.assertEqual(cm.exception.extra, ("snoc",))

    def test_variant_arity_is_checked(self) -> None:
        with self.assertRaises(ArityMismatchError):
            List.cons(1)

    def test_unknown_variant_raises_attribute_error(self) -> None:
        with self.assertRaises(AttributeError):
            List.snoc

    def test_empty_sum_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            tagged_sum({})


if __name__ == "__main__":
    unittest.main()
