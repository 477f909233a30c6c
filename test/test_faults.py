"""
Fault tests (messages, replacements, exit codes, rich rendering).

Conventions
- Test method names follow CamelCase per project convention.
"""
import io
import unittest
from unittest import TestCase

from rich.console import Console

from helmsman.faults import (
    CommandException,
    ConfigurationError,
    DuplicateCommandError,
    FaultCode,
    PluginLoadError,
    UnknownCommandError,
)


class TestCommandException(TestCase):

    def testRenderAppliesReplacements(self):
        error = CommandException("Site {site} is frozen.", {"site": "alpha"}, 3)
        self.assertEqual(error.render(), "Site alpha is frozen.")
        self.assertEqual(str(error), "Site alpha is frozen.")
        self.assertEqual(error.message, "Site {site} is frozen.")
        self.assertEqual(error.code, 3)

    def testReplacementsAreReadOnly(self):
        error = CommandException("x", {"site": "alpha"})
        with self.assertRaises(TypeError):
            error.replacements["site"] = "beta"  # type: ignore[index]

    def testCodeMustBeNonZeroInteger(self):
        for code in (0, True, "1", 1.0):
            with self.subTest(code=code):
                with self.assertRaises(ValueError):
                    CommandException("x", code=code)

    def testMessageMustBeString(self):
        with self.assertRaises(TypeError):
            CommandException(42)

    def testDefaults(self):
        error = CommandException("plain")
        self.assertEqual((error.code, dict(error.replacements), error.hint), (1, {}, None))
        self.assertIs(error.fault, FaultCode.DELEGATED_ERROR)

    def testRichRendering(self):
        stream = io.StringIO()
        Console(file=stream, width=120).print(CommandException("Site {site} is frozen.", {"site": "alpha"}, hint="unfreeze it"))
        output = stream.getvalue()
        self.assertIn("11901", output)
        self.assertIn("Command Error", output)
        self.assertIn("Site alpha is frozen.", output)
        self.assertIn("unfreeze it", output)


class TestConcreteFaults(TestCase):

    def testUnknownCommand(self):
        error = UnknownCommandError(["site", "nope"], ["note"])
        self.assertEqual(error.render(), "'site nope' is not a registered command. See 'helmsman help'.")
        self.assertEqual(error.path, ("site", "nope"))
        self.assertEqual(error.code, 1)
        self.assertIs(error.fault, FaultCode.UNKNOWN_COMMAND)
        self.assertIn("did you mean 'note'?", error.hint)

    def testUnknownCommandUsesProgramName(self):
        error = UnknownCommandError(["nope"], root="terminus")
        self.assertIn("See 'terminus help'", error.render())
        self.assertEqual(error.hint, "run 'terminus help' to see available commands")

    def testDuplicateCommand(self):
        error = DuplicateCommandError(("site", "list"))
        self.assertEqual(error.render(), "'site list' is already registered.")
        self.assertIs(error.fault, FaultCode.DUPLICATE_COMMAND)

    def testFaultsShareTheBase(self):
        for kind in (UnknownCommandError, DuplicateCommandError, ConfigurationError, PluginLoadError):
            with self.subTest(kind=kind):
                self.assertTrue(issubclass(kind, CommandException))

    def testFaultCodesAreUnique(self):
        self.assertEqual(len({code.value for code in FaultCode}), len(FaultCode))


if __name__ == "__main__":
    unittest.main()
