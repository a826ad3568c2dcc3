"""
Fault tests (messages, structured fields, codes, triggering and rendering).

Scope
- Validate the exact one-sentence messages of each fault kind.
- Validate copy.replace()/pickle round trips and trigger() in both modes.
- Validate the rich rendering (header, hint, panel).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import contextlib
import copy
import io
import pickle
import unittest
from unittest import TestCase

from rich.console import Console

from arglet import (
    ArgumentFault,
    DuplicateArgumentError,
    FaultCode,
    InvalidArgumentError,
    InvalidValueError,
    MissingValueError,
    getdoc,
    trigger,
)


def _render(fault):
    buffer = io.StringIO()
    Console(file=buffer, width=100, color_system=None).print(fault)
    return buffer.getvalue()


class TestMessages(TestCase):

    def testInvalidArgument(self):
        self.assertEqual(str(InvalidArgumentError("x")), 'argument "x" does not exist')

    def testInvalidValue(self):
        self.assertEqual(str(InvalidValueError("x", "v")), 'no value named "v" for argument "x"')

    def testMissingValue(self):
        self.assertEqual(str(MissingValueError("x")), 'no value provided for argument "x"')

    def testDuplicateArgument(self):
        self.assertEqual(str(DuplicateArgumentError("x")), 'argument "x" already exists')

    def testCodes(self):
        self.assertEqual(InvalidArgumentError.code, FaultCode.INVALID_ARGUMENT)
        self.assertEqual(DuplicateArgumentError.code, FaultCode.DUPLICATE_ARGUMENT)
        self.assertEqual(MissingValueError.code, FaultCode.MISSING_VALUE)
        self.assertEqual(InvalidValueError.code, FaultCode.INVALID_VALUE)
        self.assertEqual(FaultCode.INVALID_ARGUMENT.normalize(), "11112")

    def testHierarchy(self):
        for cls in (InvalidArgumentError, InvalidValueError, MissingValueError, DuplicateArgumentError):
            with self.subTest(cls=cls.__name__):
                self.assertTrue(issubclass(cls, ArgumentFault))

    def testNameMustBeString(self):
        with self.assertRaises(TypeError):
            InvalidArgumentError(None)
        with self.assertRaises(TypeError):
            InvalidValueError("x", None)


class TestStructure(TestCase):

    def testFieldsAndArgs(self):
        fault = InvalidValueError("mode", "medium", allowed=("fast", "slow"))
        self.assertEqual((fault.name, fault.value), ("mode", "medium"))
        self.assertEqual(fault.args, ("mode", "medium"))
        self.assertEqual(fault.options["allowed"], ("fast", "slow"))

    def testOptionsAreReadOnly(self):
        fault = MissingValueError("x", prog="tool")
        with self.assertRaises(TypeError):
            fault.options["prog"] = "other"

    def testReplaceMergesOptions(self):
        fault = InvalidValueError("mode", "medium", prog="tool")
        replaced = copy.replace(fault, shell=True)
        self.assertIsInstance(replaced, InvalidValueError)
        self.assertEqual((replaced.name, replaced.value), ("mode", "medium"))
        self.assertEqual(dict(replaced.options), {"prog": "tool", "shell": True})
        self.assertNotIn("shell", fault.options)

    def testPickleRoundTrip(self):
        fault = pickle.loads(pickle.dumps(InvalidArgumentError("nope", suggestions=("--name",))))
        self.assertIsInstance(fault, InvalidArgumentError)
        self.assertEqual(fault.name, "nope")
        self.assertEqual(fault.suggestions, ("--name",))


class TestTrigger(TestCase):

    def testRaisesOutsideShell(self):
        with self.assertRaises(MissingValueError) as context:
            trigger(MissingValueError("x"), prog="tool")
        self.assertEqual(context.exception.options["prog"], "tool")

    def testShellPrintsAndExits(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            trigger(InvalidArgumentError("nope"), shell=True, prog="tool")
        self.assertEqual(context.exception.code, 1)
        self.assertIn('argument "nope" does not exist', stderr.getvalue())

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("x"))

    def testGetdoc(self):
        self.assertIsNone(getdoc(FaultCode.MISSING_VALUE))
        with self.assertRaises(TypeError):
            getdoc(11117)


class TestRendering(TestCase):

    def testHeaderAndMessage(self):
        output = _render(InvalidArgumentError("nope", prog="tool"))
        self.assertIn("tool", output)
        self.assertIn("11112", output)
        self.assertIn("Unknown Argument", output)
        self.assertIn('argument "nope" does not exist', output)

    def testSuggestionHint(self):
        output = _render(InvalidArgumentError("verbos", suggestions=("--verbose",)))
        self.assertIn("did you mean '--verbose'?", output)

    def testAllowedValuesHint(self):
        output = _render(InvalidValueError("mode", "medium", allowed=("fast", "slow")))
        self.assertIn("choose one of 'fast', 'slow'", output)

    def testExplicitHintWins(self):
        output = _render(MissingValueError("x", hint="try --x=1"))
        self.assertIn("try --x=1", output)

    def testFancyUsesPanel(self):
        output = _render(DuplicateArgumentError("x", fancy=True, colorful=True))
        self.assertIn("╭", output)
        self.assertIn('argument "x" already exists', output)


if __name__ == "__main__":
    unittest.main()
