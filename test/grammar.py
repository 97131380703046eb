"""
Descriptor grammar tests.

Scope
- Valid descriptors map to the expected (name, type, modifier).
- Malformed descriptors are rejected before any type check, with grammar-only messages.
- Unsupported Getopt::Long forms (aliases, hashes, counts, defaults, short options)
  are rejected, never silently accepted.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from longopts import Descriptor, Modifier, Type, parse
from longopts.faults import FaultCode, MalformedDescriptorError


class TestValidDescriptors(TestCase):
    """Behavioral tests for descriptors the grammar accepts."""

    def testPlainName(self):
        self.assertEqual(parse("verbose"), Descriptor("verbose", None, Modifier.NONE))

    def testNameCharacters(self):
        self.assertEqual(parse("dry-run_2").name, "dry-run_2")

    def testRequiredTyped(self):
        for letter, type in (("b", Type.BOOLEAN), ("i", Type.INTEGER), ("f", Type.FLOAT), ("s", Type.TEXT)):
            with self.subTest(letter=letter):
                self.assertEqual(parse("value=" + letter), Descriptor("value", type, Modifier.NONE))

    def testOptionalTyped(self):
        self.assertEqual(parse("level:i"), Descriptor("level", Type.INTEGER, Modifier.OPTIONAL))

    def testOptionalBooleanIsGrammatical(self):
        # rejected later by reconciliation, not by the grammar
        self.assertEqual(parse("flag:b").modifier, Modifier.OPTIONAL)

    def testModifiers(self):
        self.assertEqual(parse("flag!").modifier, Modifier.NEGATABLE)
        self.assertEqual(parse("count+").modifier, Modifier.COUNTING)
        self.assertEqual(parse("value@").modifier, Modifier.SEQUENCE)

    def testTypedSequence(self):
        self.assertEqual(parse("include=s@"), Descriptor("include", Type.TEXT, Modifier.SEQUENCE))

    def testNegatedName(self):
        self.assertEqual(parse("flag!").negated, "noflag")
        self.assertIsNone(parse("flag").negated)

    def testCanonicalString(self):
        for source in ("verbose", "flag!", "count+", "length=i", "level:f", "include=s@", "value@"):
            with self.subTest(source=source):
                self.assertEqual(str(parse(source)), source)

    def testDescriptorIsImmutable(self):
        with self.assertRaises(AttributeError):
            parse("verbose").name = "quiet"


class TestMalformedDescriptors(TestCase):
    """Behavioral tests for descriptors the grammar rejects."""

    def assertMalformed(self, source):
        with self.assertRaises(MalformedDescriptorError) as context:
            parse(source)
        self.assertEqual(context.exception.code, FaultCode.MALFORMED_DESCRIPTOR)
        self.assertEqual(context.exception.descriptor, source)
        self.assertNotIn("mismatch", str(context.exception))
        return context.exception

    def testEmpty(self):
        self.assertMalformed("")

    def testBadCharacters(self):
        self.assertMalformed("bad name")
        self.assertMalformed("name.ext")

    def testUnknownTypeLetter(self):
        self.assertMalformed("value=x")

    def testMarkerWithoutType(self):
        self.assertMalformed("value=")
        self.assertMalformed("value:")

    def testTypeWithNegatable(self):
        self.assertMalformed("flag=b!")

    def testTypeWithCounting(self):
        self.assertMalformed("count=i+")

    def testOptionalSequence(self):
        self.assertMalformed("value:i@")

    def testBooleanSequence(self):
        self.assertMalformed("flag=b@")

    def testTwoModifiers(self):
        self.assertMalformed("flag!+")

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            parse(42)


class TestUnsupportedForms(TestCase):
    """Getopt::Long features outside the supported grammar."""

    def assertUnsupported(self, source, feature):
        with self.assertRaises(MalformedDescriptorError) as context:
            parse(source)
        self.assertIn(feature, context.exception.message)

    def testAliases(self):
        self.assertUnsupported("verbose|v", "alternate names")

    def testHash(self):
        self.assertUnsupported("define=s%", "hash")

    def testRepeatCounts(self):
        self.assertUnsupported("point=i{3}", "repeat counts")
        self.assertUnsupported("point=i{1,3}", "repeat counts")

    def testDeclaredDefault(self):
        self.assertUnsupported("level:10", "default values")

    def testShortOption(self):
        self.assertUnsupported("-v", "short options")

    def testShortOptionWithSuffix(self):
        for source in ("-v=i", "-v!", "-v@", "-vx", "-1"):
            with self.subTest(source=source):
                self.assertUnsupported(source, "short options")

    def testInnerDashesAreNames(self):
        self.assertEqual(parse("dry-run").name, "dry-run")


if __name__ == "__main__":
    unittest.main()
