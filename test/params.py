"""
Params module behavioral tests (coercion, storage, capabilities, display).

Scope
- Validate every parameter kind: literal grammars, cell mutation, failure atomicity.
- Validate repeated kinds: set() accumulates, set_multi() replaces a trimmed batch.
- Validate capability queries and the fatal ContractViolation path.
- Validate VarParam delegation to caller-supplied values.

Conventions
- Test method names follow CamelCase per project convention.
- Storage is always observed through the Cell handed to the parameter.
"""
import unittest
from unittest import TestCase

from bindery.faults import CoercionError, BatchCoercionError, ContractViolation, ParamException
from bindery.params import *


class Level:
    """Caller-supplied value accepting 'low' or 'high'."""

    def __init__(self):
        self.level = "low"

    def set(self, raw):
        if raw not in ("low", "high"):
            raise ValueError(f"unknown level {raw!r}")
        self.level = raw

    def __str__(self):
        return self.level


class Switch(Level):
    """Caller-supplied value that presents itself as a toggle."""

    def is_toggle(self):
        return True


class Csv:
    """Caller-supplied batch-capable value."""

    def __init__(self):
        self.items = []

    def set(self, raw):
        self.items.append(raw)

    def is_batch(self):
        return True

    def set_multi(self, raws):
        self.items = [raw.strip() for raw in raws]

    def __str__(self):
        return ",".join(self.items)


class TestParamKind(TestCase):
    """Capabilities carried by the tagged variant."""

    def testToggleOnlyForBool(self):
        self.assertEqual([kind for kind in ParamKind if kind.toggle], [ParamKind.BOOL])

    def testBatchOnlyForRepeatedKinds(self):
        self.assertEqual([kind for kind in ParamKind if kind.batch], [ParamKind.STRINGS, ParamKind.INTS])

    def testBuildDispatchesOnKind(self):
        self.assertIsInstance(build(ParamKind.BOOL, Cell(False)), BoolParam)
        self.assertIsInstance(build(ParamKind.STRING, Cell("")), StringParam)
        self.assertIsInstance(build(ParamKind.INT, Cell(0)), IntParam)
        self.assertIsInstance(build(ParamKind.STRINGS, Cell([])), StringsParam)
        self.assertIsInstance(build(ParamKind.INTS, Cell([])), IntsParam)
        self.assertIsInstance(build(ParamKind.VAR, Level()), VarParam)

    def testBuildRejectsUnknownKind(self):
        with self.assertRaises(TypeError):
            build("bool", Cell(False))


class TestBoolParam(TestCase):
    """Behavioral tests for the boolean kind."""

    def setUp(self):
        self.cell = Cell(False)
        self.param = BoolParam(self.cell)

    def testCapabilities(self):
        self.assertTrue(self.param.is_toggle())
        self.assertFalse(self.param.is_batch())
        self.assertIs(self.param.kind, ParamKind.BOOL)

    def testTrueLiterals(self):
        for raw in ("1", "t", "T", "TRUE", "true", "True"):
            with self.subTest(raw=raw):
                self.cell.value = False
                self.param.set(raw)
                self.assertIs(self.cell.value, True)
                self.assertEqual(str(self.param), "true")

    def testFalseLiterals(self):
        for raw in ("0", "f", "F", "FALSE", "false", "False"):
            with self.subTest(raw=raw):
                self.cell.value = True
                self.param.set(raw)
                self.assertIs(self.cell.value, False)
                self.assertEqual(str(self.param), "false")

    def testInvalidLiteralsLeaveStorageUnchanged(self):
        self.cell.value = True
        for raw in ("123", "", "yes", "tRuE", " true"):
            with self.subTest(raw=raw):
                with self.assertRaises(CoercionError):
                    self.param.set(raw)
                self.assertIs(self.cell.value, True)

    def testCoercionErrorIsValueError(self):
        with self.assertRaises(ValueError):
            self.param.set("maybe")

    def testSetMultiIsContractViolation(self):
        with self.assertRaises(ContractViolation):
            self.param.set_multi(["true"])

    def testStorageMustBeCell(self):
        with self.assertRaises(TypeError):
            BoolParam(False)


class TestStringParam(TestCase):
    """Behavioral tests for the string kind."""

    def testStoresVerbatimAndQuotes(self):
        cell = Cell("")
        param = StringParam(cell)
        for raw, display in (("a", '"a"'), ("", '""'), ('say "hi"', '"say \\"hi\\""'), (" b ", '" b "')):
            with self.subTest(raw=raw):
                param.set(raw)
                self.assertEqual(cell.value, raw)
                self.assertEqual(str(param), display)

    def testCapabilities(self):
        param = StringParam(Cell(""))
        self.assertFalse(param.is_toggle())
        self.assertFalse(param.is_batch())


class TestIntParam(TestCase):
    """Behavioral tests for the integer kind."""

    def setUp(self):
        self.cell = Cell(0)
        self.param = IntParam(self.cell)

    def testValidLiterals(self):
        for raw, result, display in (
                ("12", 12, "12"),
                ("0", 0, "0"),
                ("01", 1, "1"),
                ("-7", -7, "-7"),
                ("+5", 5, "5"),
                ("9223372036854775807", 9223372036854775807, "9223372036854775807"),
        ):
            with self.subTest(raw=raw):
                self.param.set(raw)
                self.assertEqual(self.cell.value, result)
                self.assertEqual(str(self.param), display)

    def testInvalidLiteralsLeaveStorageUnchanged(self):
        self.cell.value = 42
        for raw in ("", "abc", " 1", "1_000", "1.5", "0x10", "9223372036854775808", "٣"):
            with self.subTest(raw=raw):
                with self.assertRaises(CoercionError):
                    self.param.set(raw)
                self.assertEqual(self.cell.value, 42)

    def testCoercionErrorCarriesRawText(self):
        with self.assertRaises(CoercionError) as context:
            self.param.set("abc")
        self.assertEqual(context.exception.options["raw"], "abc")

    def testRepr(self):
        self.param.set("3")
        self.assertEqual(repr(self.param), "IntParam(3)")


class TestStringsParam(TestCase):
    """Behavioral tests for the repeated string kind."""

    def testSetMultiReplacesThenSetAppends(self):
        cell = Cell([])
        param = StringsParam(cell)

        self.assertTrue(param.is_batch())
        self.assertFalse(param.is_toggle())

        param.set_multi(["a", " b "])
        self.assertEqual(cell.value, ["a", "b"])

        param.set("c")
        param.set("d")

        self.assertEqual(cell.value, ["a", "b", "c", "d"])
        self.assertEqual(str(param), '["a", "b", "c", "d"]')

    def testSetMultiKeepsEmptyStrings(self):
        cell = Cell(["old"])
        StringsParam(cell).set_multi([" x", "  ", ""])
        self.assertEqual(cell.value, ["x", "", ""])

    def testSetAppendsVerbatim(self):
        cell = Cell([])
        StringsParam(cell).set(" padded ")
        self.assertEqual(cell.value, [" padded "])

    def testSetMultiRejectsNonStrings(self):
        cell = Cell(["old"])
        with self.assertRaises(TypeError):
            StringsParam(cell).set_multi(["a", 1])
        self.assertEqual(cell.value, ["old"])

    def testEmptyDisplay(self):
        self.assertEqual(str(StringsParam(Cell([]))), "[]")


class TestIntsParam(TestCase):
    """Behavioral tests for the repeated integer kind."""

    def testBatchAtomicityAndAccumulation(self):
        cell = Cell([])
        param = IntsParam(cell)

        self.assertTrue(param.is_batch())

        with self.assertRaises(BatchCoercionError):
            param.set_multi(["1", "a"])
        self.assertEqual(cell.value, [], "a failed set_multi must not modify the cell")

        param.set_multi(["1", "  ", "2"])
        self.assertEqual(cell.value, [1, 2])

        with self.assertRaises(CoercionError):
            param.set("c")
        self.assertEqual(cell.value, [1, 2])

        param.set("3")
        self.assertEqual(cell.value, [1, 2, 3])

        self.assertEqual(str(param), "[1, 2, 3]")

    def testBatchErrorLocatesOffendingElement(self):
        param = IntsParam(Cell([7]))
        with self.assertRaises(BatchCoercionError) as context:
            param.set_multi([" 4 ", "", " x "])
        self.assertEqual(context.exception.options["index"], 2)
        self.assertEqual(context.exception.options["raw"], "x")
        self.assertIsInstance(context.exception.__cause__, CoercionError)
        self.assertEqual(param.value, [7])

    def testSetMultiRejectsNonStrings(self):
        cell = Cell([7])
        with self.assertRaises(TypeError):
            IntsParam(cell).set_multi(["1", 2])
        self.assertEqual(cell.value, [7])

    def testSetMultiReplacesExistingSequence(self):
        cell = Cell([9, 9])
        IntsParam(cell).set_multi([" 01", "-2 "])
        self.assertEqual(cell.value, [1, -2])


class TestVarParam(TestCase):
    """Behavioral tests for the user-extensible kind."""

    def testDelegatesSetAndDisplay(self):
        level = Level()
        param = VarParam(level)
        param.set("high")
        self.assertEqual(level.level, "high")
        self.assertEqual(str(param), "high")
        self.assertIs(param.value, level)
        self.assertIs(param.kind, ParamKind.VAR)

    def testValueErrorsBecomeCoercionErrors(self):
        level = Level()
        with self.assertRaises(CoercionError) as context:
            VarParam(level).set("medium")
        self.assertIsInstance(context.exception.__cause__, ValueError)
        self.assertEqual(level.level, "low")

    def testCapabilitiesDefaultToFalse(self):
        param = VarParam(Level())
        self.assertFalse(param.is_toggle())
        self.assertFalse(param.is_batch())

    def testCapabilitiesAskTheValue(self):
        self.assertTrue(VarParam(Switch()).is_toggle())
        self.assertTrue(VarParam(Csv()).is_batch())

    def testSetMultiForwardsToBatchValue(self):
        csv = Csv()
        VarParam(csv).set_multi([" a", "b "])
        self.assertEqual(csv.items, ["a", "b"])

    def testSetMultiOnNonBatchValueIsFatal(self):
        with self.assertRaises(ContractViolation):
            VarParam(Level()).set_multi(["low"])

    def testContractViolationIsNotRecoverable(self):
        self.assertFalse(issubclass(ContractViolation, ParamException))
        self.assertFalse(issubclass(ContractViolation, ValueError))
        self.assertTrue(issubclass(ContractViolation, AssertionError))

    def testValueMustBeSettable(self):
        with self.assertRaises(TypeError):
            VarParam(object())

    def testWrapsBuiltinParams(self):
        cell = Cell([])
        param = VarParam(IntsParam(cell))
        self.assertTrue(param.is_batch())
        param.set_multi(["4", "5"])
        self.assertEqual(cell.value, [4, 5])


if __name__ == "__main__":
    unittest.main()
