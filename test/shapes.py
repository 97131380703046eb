"""
Destination binding tests (Ref, Attr, Item) and shape classification.

Scope
- Every supported shape classifies to its Kind, from values and from type hints.
- Unsupported shapes (bool lists, empty untyped lists, None, mappings, unions) fail
  with UnsupportedDestinationError.
- Bindings read and write the caller's storage; sequences append in place.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import typing
import unittest
from dataclasses import dataclass, field
from types import SimpleNamespace
from unittest import TestCase

from longopts import Attr, Item, Kind, Ref, Type, destination
from longopts.destinations import classify, infer
from longopts.faults import FaultCode, UnsupportedDestinationError


@dataclass
class Settings:
    verbose: bool = False
    jobs: int = 1
    ratio: float = 0.5
    name: str = ""
    include: list[str] = field(default_factory=list)
    loose: object = None


class Pending:
    jobs: int


class TestKind(TestCase):
    """Behavioral tests for the Kind tagged variant."""

    def testElementTypeAndSequence(self):
        self.assertIs(Kind.INTEGER_SEQUENCE.type, Type.INTEGER)
        self.assertTrue(Kind.INTEGER_SEQUENCE.sequence)
        self.assertFalse(Kind.TEXT.sequence)

    def testZeroValues(self):
        self.assertIs(Kind.BOOLEAN.zero, False)
        self.assertEqual(Kind.INTEGER.zero, 0)
        self.assertEqual(Kind.FLOAT.zero, 0.0)
        self.assertEqual(Kind.TEXT.zero, "")

    def testSequenceZeroIsFresh(self):
        self.assertEqual(Kind.TEXT_SEQUENCE.zero, [])
        self.assertIsNot(Kind.TEXT_SEQUENCE.zero, Kind.TEXT_SEQUENCE.zero)

    def testSevenKinds(self):
        self.assertEqual(len(Kind), 7)


class TestClassification(TestCase):
    """Behavioral tests for classify() and infer()."""

    def testClassifyScalars(self):
        self.assertIs(classify(bool), Kind.BOOLEAN)
        self.assertIs(classify(int), Kind.INTEGER)
        self.assertIs(classify(float), Kind.FLOAT)
        self.assertIs(classify(str), Kind.TEXT)

    def testClassifySequences(self):
        self.assertIs(classify(list[int]), Kind.INTEGER_SEQUENCE)
        self.assertIs(classify(typing.List[float]), Kind.FLOAT_SEQUENCE)
        self.assertIs(classify(list[str]), Kind.TEXT_SEQUENCE)

    def testClassifyUnsupported(self):
        for hint in (list[bool], list, dict, bytes, int | None, typing.Optional[str], object):
            with self.subTest(hint=hint):
                self.assertIsNone(classify(hint))

    def testInferBoolBeforeInt(self):
        self.assertIs(infer(True), Kind.BOOLEAN)
        self.assertIs(infer(3), Kind.INTEGER)

    def testInferLists(self):
        self.assertIs(infer([1, 2]), Kind.INTEGER_SEQUENCE)
        self.assertIs(infer([1.5]), Kind.FLOAT_SEQUENCE)
        self.assertIs(infer(["a"]), Kind.TEXT_SEQUENCE)

    def testInferUnsupported(self):
        for value in ([], [True], [1, "a"], None, {}, b"x", (1, 2)):
            with self.subTest(value=value):
                self.assertIsNone(infer(value))


class TestRef(TestCase):
    """Behavioral tests for the standalone Ref cell."""

    def testInferredFromValue(self):
        ref = Ref(24)
        self.assertIs(ref.kind, Kind.INTEGER)
        self.assertEqual(ref.value, 24)

    def testDeclaredStartsAtZero(self):
        self.assertEqual(Ref(int).value, 0)
        self.assertEqual(Ref(str).value, "")
        self.assertIs(Ref(bool).value, False)
        self.assertEqual(Ref(list[int]).value, [])

    def testDeclaredWithValue(self):
        ref = Ref(list[int], [1, 2])
        self.assertIs(ref.kind, Kind.INTEGER_SEQUENCE)
        self.assertEqual(ref.get(), [1, 2])

    def testDeclaredValueMustMatch(self):
        for hint, value in ((list[str], "abc"), (int, "x"), (list[int], ["a"]), (bool, 1), (float, 1)):
            with self.subTest(hint=hint, value=value):
                with self.assertRaises(UnsupportedDestinationError) as context:
                    Ref(hint, value)
                self.assertIn("declared type", context.exception.hint)

    def testDeclaredSequenceAcceptsEmptyList(self):
        items = []
        self.assertIs(Ref(list[float], items).value, items)

    def testDeclaredValueMayBeNone(self):
        ref = Ref(int, None)
        self.assertIsNone(ref.value)
        self.assertEqual(ref.get(), 0)

    def testValueWithoutTypeRejected(self):
        with self.assertRaises(TypeError):
            Ref(3, 4)

    def testEmptyListNeedsType(self):
        with self.assertRaises(UnsupportedDestinationError) as context:
            Ref([])
        self.assertIn("Ref(list[int])", context.exception.hint)

    def testUnsupported(self):
        for source in (None, {}, [True, False], list[bool], list):
            with self.subTest(source=source):
                with self.assertRaises(UnsupportedDestinationError) as context:
                    Ref(source)
                self.assertEqual(context.exception.code, FaultCode.UNSUPPORTED_DESTINATION)

    def testAppendKeepsIdentity(self):
        values = [1]
        ref = Ref(values)
        ref.append(2)
        self.assertIs(ref.value, values)
        self.assertEqual(values, [1, 2])

    def testEquality(self):
        self.assertEqual(Ref(3), Ref(int, 3))
        self.assertNotEqual(Ref(3), Ref(3.0))


class TestAttr(TestCase):
    """Behavioral tests for attribute bindings."""

    def testAnnotationsWin(self):
        settings = Settings()
        self.assertIs(Attr(settings, "verbose").kind, Kind.BOOLEAN)
        self.assertIs(Attr(settings, "ratio").kind, Kind.FLOAT)
        self.assertIs(Attr(settings, "include").kind, Kind.TEXT_SEQUENCE)

    def testUnsupportedAnnotation(self):
        with self.assertRaises(UnsupportedDestinationError):
            Attr(Settings(), "loose")

    def testValueFallback(self):
        namespace = SimpleNamespace(jobs=4)
        self.assertIs(Attr(namespace, "jobs").kind, Kind.INTEGER)

    def testMissingAttribute(self):
        with self.assertRaises(UnsupportedDestinationError):
            Attr(SimpleNamespace(), "jobs")

    def testMissingAttributeWithHint(self):
        namespace = SimpleNamespace()
        binding = Attr(namespace, "jobs", hint=int)
        binding.set(3)
        self.assertEqual(namespace.jobs, 3)

    def testWrites(self):
        settings = Settings()
        Attr(settings, "name").set("x")
        Attr(settings, "include").append("a")
        self.assertEqual(settings.name, "x")
        self.assertEqual(settings.include, ["a"])

    def testAnnotationMustMatchValue(self):
        settings = Settings()
        settings.jobs = "four"
        with self.assertRaises(UnsupportedDestinationError):
            Attr(settings, "jobs")

    def testUnsetAttributeReadsAsZero(self):
        binding = Attr(Pending(), "jobs")
        self.assertIs(binding.kind, Kind.INTEGER)
        self.assertEqual(binding.get(), 0)

    def testNameMustBeString(self):
        with self.assertRaises(TypeError):
            Attr(Settings(), 1)


class TestItem(TestCase):
    """Behavioral tests for mapping entry bindings."""

    def testInferredFromValue(self):
        config = {"jobs": 2}
        binding = Item(config, "jobs")
        self.assertIs(binding.kind, Kind.INTEGER)
        binding.set(5)
        self.assertEqual(config, {"jobs": 5})

    def testHintForMissingKey(self):
        config = {}
        binding = Item(config, "tags", hint=list[str])
        binding.append("x")
        self.assertEqual(config, {"tags": ["x"]})

    def testHintMustMatchValue(self):
        with self.assertRaises(UnsupportedDestinationError):
            Item({"jobs": "four"}, "jobs", hint=int)

    def testMissingKeyReadsAsZero(self):
        config = {}
        self.assertEqual(Item(config, "jobs", hint=int).get(), 0)
        self.assertEqual(Item(config, "ratio", hint=float).get(), 0.0)
        self.assertEqual(config, {})

    def testMissingKeyWithoutHint(self):
        with self.assertRaises(UnsupportedDestinationError):
            Item({}, "tags")


class TestDestination(TestCase):
    """Behavioral tests for destination() coercion."""

    def testPassThrough(self):
        ref = Ref(1)
        self.assertIs(destination(ref), ref)

    def testBareValuesRejected(self):
        for value in (1, [1], None, "x"):
            with self.subTest(value=value):
                with self.assertRaises(UnsupportedDestinationError):
                    destination(value)


if __name__ == "__main__":
    unittest.main()
