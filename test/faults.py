"""
Faults module behavioral tests (codes, hierarchy, trigger, rendering).

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is captured through a plain (uncolored) rich console.
"""
import unittest
from unittest import TestCase

from rich.console import Console

from bindery.faults import *


class TestFaultCodes(TestCase):

    def testNormalizeWithoutHostMapping(self):
        self.assertEqual(FaultCode.COERCION.normalize(), "21101")

    def testCodesAreUnique(self):
        self.assertEqual(len({code.value for code in FaultCode}), len(FaultCode))

    def testGetdocWithoutHostMapping(self):
        self.assertIsNone(getdoc(FaultCode.INVALID_VALUE))

    def testGetdocRejectsPlainIntegers(self):
        with self.assertRaises(TypeError):
            getdoc(21101)


class TestFaultHierarchy(TestCase):

    def testCoercionFaultsAreValueErrors(self):
        for cls in (CoercionError, BatchCoercionError, InvalidValueError):
            with self.subTest(cls=cls):
                self.assertTrue(issubclass(cls, ValueError))
                self.assertTrue(issubclass(cls, ParamException))

    def testLookupFaultsAreLookupErrors(self):
        self.assertTrue(issubclass(UnknownOptionError, LookupError))
        self.assertTrue(issubclass(UnknownArgumentError, LookupError))

    def testCodeComesFromClass(self):
        self.assertIs(BatchCoercionError("boom").code, FaultCode.BATCH_COERCION)

    def testCodeCanBeOverridden(self):
        self.assertIs(CoercionError("boom", code=FaultCode.INVALID_VALUE).code, FaultCode.INVALID_VALUE)

    def testOptionsAreReadOnly(self):
        fault = CoercionError("boom", raw="x")
        with self.assertRaises(TypeError):
            fault.options["raw"] = "y"

    def testMessageIsExceptionText(self):
        self.assertEqual(str(CoercionError("invalid integer literal 'x'")), "invalid integer literal 'x'")


class TestTrigger(TestCase):

    def testRaisesOutsideShell(self):
        with self.assertRaises(CoercionError) as context:
            trigger(CoercionError("boom", raw="x"), prog="tool")
        self.assertEqual(context.exception.options["prog"], "tool")
        self.assertEqual(context.exception.options["raw"], "x")

    def testReplaceKeepsCause(self):
        cause = ValueError("inner")
        fault = InvalidValueError("outer")
        fault.__cause__ = cause
        replaced = fault.__replace__(shell=False)
        self.assertIs(replaced.__cause__, cause)
        self.assertIsInstance(replaced, InvalidValueError)
        self.assertIsNot(replaced, fault)

    def testRaisedFaultIsChained(self):
        cause = CoercionError("inner")
        fault = InvalidValueError("outer")
        fault.__cause__ = cause
        with self.assertRaises(InvalidValueError) as context:
            trigger(fault)
        self.assertIs(context.exception.__cause__, cause)

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(object())


class TestRendering(TestCase):

    def render(self, fault):
        console = Console(color_system=None, force_terminal=False, width=120)
        with console.capture() as capture:
            console.print(fault)
        return capture.get()

    def testPlainHeaderMessageAndHint(self):
        output = self.render(CoercionError("invalid integer literal 'x'", hint="use 42", colorful=False))
        self.assertIn("[ bindery — 21101 | Coercion Error ]", output)
        self.assertIn("invalid integer literal 'x'", output)
        self.assertIn(" → use 42", output)

    def testProgramNameFromOptions(self):
        output = self.render(UnknownOptionError("unknown option '--x'", prog="tool", colorful=False))
        self.assertIn("[ tool — 21121 | Unknown Option ]", output)

    def testFancyUsesPanel(self):
        output = self.render(CoercionError("boom", fancy=True, colorful=False))
        self.assertIn("boom", output)
        self.assertIn("Coercion Error", output)


if __name__ == "__main__":
    unittest.main()
