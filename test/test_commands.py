"""
Built-in command tests (help, cli version, cli info).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from helmsman import __version__
from helmsman.loader import include
from helmsman.nodes import composite, leaf
from helmsman.registry import CommandTree
from helmsman.runner import Runner


class RecordingLogger:
    def __init__(self):
        self.records = []

    def debug(self, message, replacements=None, /):
        self.records.append(("debug", message, replacements))

    def info(self, message, replacements=None, /):
        self.records.append(("info", message, replacements))

    def error(self, message, replacements=None, /):
        self.records.append(("error", message, dict(replacements) if replacements is not None else None))


class RecordingOutputter:
    def __init__(self):
        self.values = []

    def output(self, value, /, human_label=None):
        self.values.append((value, human_label))


class TestBuiltinCommands(TestCase):

    def setUp(self):
        self.tree = CommandTree()
        include(self.tree, "helmsman.commands.*")
        self.tree.register(("site",), composite("site", "Site commands.", (
            leaf(lambda args, assoc_args: None, name="list", descr="List the sites.", synopsis="[--org=<id>]"),
        )))
        self.tree.freeze()
        self.logger = RecordingLogger()
        self.outputter = RecordingOutputter()

    def _run(self, *args, config=None):
        return Runner(self.tree, self.logger, self.outputter, args, config=config).run()

    def _infos(self):
        return [message for level, message, _ in self.logger.records if level == "info"]

    def testHelpShowsRootUsage(self):
        self.assertEqual(self._run("help"), 0)
        usage, = self._infos()
        self.assertTrue(usage.startswith("usage: helmsman <command>"))
        for name in ("cli", "help", "site"):
            with self.subTest(name=name):
                self.assertIn(f"  {name}", usage)

    def testNoArgumentsShowRootUsage(self):
        self.assertEqual(self._run(), 0)
        self.assertEqual(self._infos(), [self.tree.root.usage()])

    def testHelpForNamespace(self):
        self.assertEqual(self._run("help", "site"), 0)
        self.assertEqual(self._infos(), [self.tree.find_child(self.tree.root, "site").usage()])

    def testHelpForLeaf(self):
        self.assertEqual(self._run("help", "site", "list"), 0)
        self.assertEqual(self._infos(), ["usage: helmsman site list [--org=<id>]\n\nList the sites."])

    def testHelpForUnknownCommand(self):
        self.assertEqual(self._run("help", "nope"), 1)
        errors = [record for record in self.logger.records if record[0] == "error"]
        self.assertEqual(errors[0][2], {"cmd": "nope"})

    def testCliVersion(self):
        self.assertEqual(self._run("cli", "version"), 0)
        self.assertEqual(self._infos(), ["helmsman %s" % __version__])

    def testCliInfoUsesOutputter(self):
        self.assertEqual(self._run("cli", "info", config={"format": "json", "debug": False}), 0)
        self.assertEqual(self.outputter.values, [({"format": "json", "debug": False}, "Configuration")])
        self.assertEqual(self._infos(), [])


if __name__ == "__main__":
    unittest.main()
