"""
Utilities behavioral tests (sentinel, coalesce, mirror, name derivation).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from bindery.utils import *


class TestFlagify(TestCase):

    def testShortAndLongNames(self):
        self.assertEqual(flagify("f force"), ["-f", "--force"])

    def testSingleShortName(self):
        self.assertEqual(flagify("x"), ["-x"])

    def testOrderIsPreserved(self):
        self.assertEqual(flagify("verbose v"), ["--verbose", "-v"])

    def testExtraWhitespaceIsIgnored(self):
        self.assertEqual(flagify("  n   dry-run "), ["-n", "--dry-run"])

    def testSingleCharacterIsCountedByCharacter(self):
        self.assertEqual(flagify("é"), ["-é"])


class TestSplitNames(TestCase):

    def testSplitsOnWhitespace(self):
        self.assertEqual(split_names(" APP_HOME  HOME\t"), ["APP_HOME", "HOME"])

    def testEmpty(self):
        self.assertEqual(split_names(""), [])

    def testRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            split_names(["A"])


class TestUnset(TestCase):

    def testSingletonAndFalsy(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testFinalClass(self):
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})

    def testCoalescePreservesFalseyValues(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)


class TestMirror(TestCase):

    def testReturnsFreshContainers(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = [1, 2]

        holder = Holder()
        items = holder.items
        items.append(3)
        self.assertEqual(holder.items, [1, 2])

    def testIsReadOnly(self):
        class Holder:
            name = mirror("name")
            _name = "x"

        with self.assertRaises(AttributeError):
            Holder().name = "y"


if __name__ == "__main__":
    unittest.main()
