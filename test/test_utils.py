"""
Utility and diagnostics tests.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import logging
import os
import unittest
from types import MappingProxyType
from unittest import TestCase, mock

from rich.logging import RichHandler

from arglet.diagnostics import configure_logging
from arglet.utils import Unset, UnsetType, coalesce, mirror, rename, wrap


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Sub", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertIsNone(coalesce(Unset))


class TestRename(TestCase):

    def testDirectAndDecorator(self):
        def function():
            pass

        self.assertEqual(rename(function, "other").__name__, "other")

        @rename("decorated")
        def another():
            pass

        self.assertEqual((another.__name__, another.__qualname__), ("decorated", "decorated"))

    def testInvalidArguments(self):
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(42, "name")
        with self.assertRaises(TypeError):
            rename(1)


class TestMirror(TestCase):

    def testFreezesContainers(self):
        class Holder:
            items = mirror("items")
            table = mirror("table")

            def __init__(self):
                self._items = ["a"]
                self._table = {"k": "v"}

        holder = Holder()
        self.assertEqual(holder.items, ("a",))
        self.assertIsInstance(holder.table, MappingProxyType)
        with self.assertRaises(AttributeError):
            holder.items = ()


class TestWrap(TestCase):

    def testIndentAndWidth(self):
        self.assertEqual(wrap("alpha beta gamma", 14, 4), ["    alpha beta", "    gamma"])

    def testPrefixReplacesFirstIndent(self):
        self.assertEqual(wrap("one two three", 12, 4, "ab: "), ["ab: one two", "    three"])

    def testLongWordKeptWhole(self):
        self.assertEqual(wrap("a-very-long-word", 10, 2), ["  a-very-long-word"])

    def testEmptyText(self):
        self.assertEqual(wrap("", 80, 8), [])


class TestDiagnostics(TestCase):

    def tearDown(self):
        logger = logging.getLogger("arglet")
        for handler in [h for h in logger.handlers if isinstance(h, RichHandler)]:
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

    def testExplicitLevel(self):
        logger = configure_logging("debug")
        self.assertEqual(logger.name, "arglet")
        self.assertEqual(logger.level, logging.DEBUG)

    def testEnvironmentLevel(self):
        with mock.patch.dict(os.environ, {"ARGLET_LOG_LEVEL": "info"}):
            self.assertEqual(configure_logging().level, logging.INFO)

    def testUnknownLevelFallsBack(self):
        with mock.patch.dict(os.environ, {"ARGLET_LOG_LEVEL": "chatty"}):
            self.assertEqual(configure_logging().level, logging.WARNING)

    def testHandlerInstalledOnce(self):
        configure_logging()
        logger = configure_logging()
        self.assertEqual(sum(isinstance(h, RichHandler) for h in logger.handlers), 1)


if __name__ == "__main__":
    unittest.main()
