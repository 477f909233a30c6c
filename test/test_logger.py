"""
Logger tests (levels, replacements, rich console rendering).

Conventions
- Test method names follow CamelCase per project convention.
- Output is captured through a rich Console writing to a StringIO.
"""
import io
import logging
import unittest
from unittest import TestCase

from rich.console import Console

from helmsman.logger import Logger


class TestLogger(TestCase):

    def _logger(self, config=None):
        stream = io.StringIO()
        logger = Logger(config, console=Console(file=stream, width=200))
        self.addCleanup(logger.close)
        return logger, stream

    def testInfoIsRendered(self):
        logger, stream = self._logger()
        logger.info("usage: helmsman <command>")
        self.assertIn("usage: helmsman <command>", stream.getvalue())

    def testReplacementsAreInterpolated(self):
        logger, stream = self._logger()
        logger.error("'{cmd}' is not a registered command.", {"cmd": "site nope"})
        output = stream.getvalue()
        self.assertIn("'site nope' is not a registered command.", output)
        self.assertIn("ERROR", output)

    def testUnknownPlaceholdersStayVerbatim(self):
        logger, stream = self._logger()
        logger.warning("keep {this} as is", {"other": 1})
        self.assertIn("keep {this} as is", stream.getvalue())

    def testDebugIsHiddenByDefault(self):
        logger, stream = self._logger()
        self.assertEqual(logger.level, logging.INFO)
        logger.debug("pre-check note")
        self.assertNotIn("pre-check note", stream.getvalue())

    def testDebugIsShownInDebugMode(self):
        logger, stream = self._logger({"debug": True})
        self.assertEqual(logger.level, logging.DEBUG)
        logger.debug("pre-check note")
        self.assertIn("pre-check note", stream.getvalue())

    def testMarkupIsNotInterpreted(self):
        logger, stream = self._logger()
        logger.info("[bold]literal[/bold]")
        self.assertIn("[bold]literal[/bold]", stream.getvalue())

    def testInstancesAreIndependent(self):
        first, first_stream = self._logger()
        second, second_stream = self._logger()
        first.info("only in first")
        self.assertIn("only in first", first_stream.getvalue())
        self.assertNotIn("only in first", second_stream.getvalue())

    def testCloseSilences(self):
        logger, stream = self._logger()
        logger.close()
        logger.info("after close")
        self.assertNotIn("after close", stream.getvalue())


if __name__ == "__main__":
    unittest.main()
