"""
Utility tests (sentinel, interpolation, module globbing).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from helmsman.utils import Unset, UnsetType, coalesce, expand, interpolate


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce("", "fallback"), "")


class TestInterpolate(TestCase):

    def testSubstitutesKnownNames(self):
        self.assertEqual(interpolate("'{cmd}' failed", {"cmd": "site list"}), "'site list' failed")

    def testLeavesUnknownAndLiteralBraces(self):
        self.assertEqual(interpolate("{a} {b} {}", {"a": 1}), "1 {b} {}")
        self.assertEqual(interpolate("{json: true}", {"json": 1}), "{json: true}")

    def testNoReplacements(self):
        self.assertEqual(interpolate("{cmd}"), "{cmd}")

    def testTypeChecks(self):
        with self.assertRaises(TypeError):
            interpolate(1, {})
        with self.assertRaises(TypeError):
            interpolate("{a}", [("a", 1)])


class TestExpand(TestCase):

    def testWildcardChildren(self):
        self.assertEqual(expand("helmsman.commands.*"), ["helmsman.commands.cli", "helmsman.commands.help"])

    def testCharacterClass(self):
        self.assertEqual(expand("helmsman.commands.[h]*"), ["helmsman.commands.help"])
        self.assertEqual(expand("helmsman.commands.[!h]*"), ["helmsman.commands.cli"])

    def testDoubleStar(self):
        self.assertEqual(expand("helmsman.**.help"), ["helmsman.commands.help"])

    def testConcreteNameIsReturnedAsIs(self):
        self.assertEqual(expand("  some.module "), ["some.module"])

    def testUnimportablePrefix(self):
        self.assertEqual(expand("no_such_package_for_helmsman.*"), [])

    def testInvalidPatterns(self):
        with self.assertRaises(ValueError):
            expand("*.commands")
        with self.assertRaises(ValueError):
            expand("   ")
        with self.assertRaises(TypeError):
            expand(None)


if __name__ == "__main__":
    unittest.main()
