"""
Bindery parameter kinds: typed coercion units bound to caller-owned storage.

Overview
- Cell[_T]: the storage handle returned to callers at registration time.
  A parameter keeps a reference to its cell (never a copy), so every successful
  set()/set_multi() is immediately visible through cell.value.
- ParamKind: the closed set of parameter kinds (tagged variant). Each member
  answers the two capability questions explicitly:
  • toggle: the parameter consumes no following token (boolean kind).
  • batch: the parameter accepts a whole list of raw tokens atomically (repeated kinds).
- Param: the shared contract.
  • set(raw): coerce one token into the cell; raise CoercionError and leave the
    cell untouched on bad input.
  • set_multi(raws): batch replacement, only for batch-capable kinds; every other
    kind raises ContractViolation.
  • is_toggle() / is_batch(): capability queries.
  • str(param): display form for help text.
- Concrete kinds: BoolParam, StringParam, IntParam, StringsParam, IntsParam.
- VarParam: wraps a caller-supplied value exposing set(raw) and __str__, and
  forwards the capability queries to it when it has them.

Literal grammars
- booleans: 1 t T TRUE true True / 0 f F FALSE false False
- integers: optional sign followed by ASCII decimal digits (leading zeros allowed),
  within the signed 64-bit range.

Display
- strings are double-quoted with standard escaping ("a\\"b"),
- repeated kinds render as a bracketed, comma-space separated list,
- booleans render as true/false and integers as their decimal literal.
"""
import json
import re
from abc import ABC, abstractmethod
from enum import Enum

from .faults import CoercionError, BatchCoercionError, ContractViolation
from .utils import Unset

_TRUTHS = frozenset(("1", "t", "T", "TRUE", "true", "True"))
_FALSEHOODS = frozenset(("0", "f", "F", "FALSE", "false", "False"))

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(1 << 63)
_INT_MAX = (1 << 63) - 1


class ParamKind(Enum):
    """
    closed set of parameter kinds.

    the owning command dispatches declaration records through this enumeration
    instead of probing concrete types; toggle/batch are the capability markers.
    """
    BOOL = "bool"
    STRING = "string"
    INT = "int"
    STRINGS = "strings"
    INTS = "ints"
    VAR = "var"

    @property
    def toggle(self):
        """
        true for kinds that consume no following token.

        VAR answers False here; a VarParam asks its wrapped value instead.
        """
        return self is ParamKind.BOOL

    @property
    def batch(self):
        """
        true for kinds that accept an atomic batch through set_multi().
        """
        return self in (ParamKind.STRINGS, ParamKind.INTS)


class Cell[_T]:
    """
    uniquely-referenced storage slot handed back to the declaring code.
    """
    __slots__ = ("value",)

    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return f"cell({self.value!r})"


def _parse_bool(raw, /):
    if not isinstance(raw, str):
        raise TypeError("boolean parameter value must be a string")
    if raw in _TRUTHS:
        return True
    if raw in _FALSEHOODS:
        return False
    raise CoercionError(
        "invalid boolean literal %r" % raw,
        raw=raw,
        hint="use one of: true · false · 1 · 0 · t · f",
    )


def _parse_int(raw, /):
    if not isinstance(raw, str):
        raise TypeError("integer parameter value must be a string")
    if not _INTEGER.fullmatch(raw):
        raise CoercionError(
            "invalid integer literal %r" % raw,
            raw=raw,
            hint="use a base-10 integer such as 42 or -7",
        )
    value = int(raw, 10)
    if not _INT_MIN <= value <= _INT_MAX:
        raise CoercionError(
            "integer literal %r is out of range" % raw,
            raw=raw,
            hint="use a value between %d and %d" % (_INT_MIN, _INT_MAX),
        )
    return value


def _quote(value, /):
    return json.dumps(value, ensure_ascii=False)


def _listing(values, render, /):
    return "[" + ", ".join(map(render, values)) + "]"


class Param(ABC):
    """
    shared contract of every parameter kind.

    a parameter owns a reference to exactly one Cell; it is created when an
    option/argument is registered and lives as long as the owning command.
    """
    __kind__ = Unset
    __slots__ = ("_cell",)

    def __init__(self, cell, /):
        if not isinstance(cell, Cell):
            raise TypeError(f"{type(self).__name__} storage must be a Cell")
        self._cell = cell

    @property
    def kind(self):
        return type(self).__kind__

    @property
    def cell(self):
        return self._cell

    @property
    def value(self):
        return self._cell.value

    @abstractmethod
    def set(self, raw, /):
        """
        coerce a single raw token into the cell.
        """

    @abstractmethod
    def __str__(self):
        """
        render the current storage for help text.
        """

    def is_toggle(self):
        return self.kind.toggle

    def is_batch(self):
        return self.kind.batch

    def set_multi(self, raws, /):
        raise ContractViolation(f"{self.kind.value} parameter does not accept batches")

    def __repr__(self):
        return f"{type(self).__name__}({self})"


class BoolParam(Param):
    __kind__ = ParamKind.BOOL
    __slots__ = ()

    def set(self, raw, /):
        self._cell.value = _parse_bool(raw)

    def __str__(self):
        return "true" if self._cell.value else "false"


class StringParam(Param):
    __kind__ = ParamKind.STRING
    __slots__ = ()

    def set(self, raw, /):
        if not isinstance(raw, str):
            raise TypeError("string parameter value must be a string")
        self._cell.value = raw

    def __str__(self):
        return _quote(self._cell.value)


class IntParam(Param):
    __kind__ = ParamKind.INT
    __slots__ = ()

    def set(self, raw, /):
        self._cell.value = _parse_int(raw)

    def __str__(self):
        return str(self._cell.value)


class StringsParam(Param):
    """
    repeated string parameter.

    set() appends one element; set_multi() replaces the whole sequence with the
    trimmed batch (empty elements are kept as empty strings) and never fails.
    """
    __kind__ = ParamKind.STRINGS
    __slots__ = ()

    def set(self, raw, /):
        if not isinstance(raw, str):
            raise TypeError("strings parameter value must be a string")
        self._cell.value.append(raw)

    def set_multi(self, raws, /):
        raws = list(raws)
        if not all(isinstance(raw, str) for raw in raws):
            raise TypeError("strings parameter batch elements must be strings")
        self._cell.value = [raw.strip() for raw in raws]

    def __str__(self):
        return _listing(self._cell.value, _quote)


class IntsParam(Param):
    """
    repeated integer parameter.

    set() parses and appends one element. set_multi() trims every element, skips
    the ones left empty, parses the rest, and replaces the sequence only if all
    of them parse: a single bad element rejects the batch and the cell keeps its
    previous sequence.
    """
    __kind__ = ParamKind.INTS
    __slots__ = ()

    def set(self, raw, /):
        value = _parse_int(raw)
        self._cell.value.append(value)

    def set_multi(self, raws, /):
        values = []
        for index, raw in enumerate(raws):
            if not isinstance(raw, str):
                raise TypeError("ints parameter batch elements must be strings")
            if not (raw := raw.strip()):
                continue
            try:
                values.append(_parse_int(raw))
            except CoercionError as exception:
                raise BatchCoercionError(
                    "invalid integer literal %r at batch index %d" % (raw, index),
                    index=index,
                    raw=raw,
                    hint="every non-empty element must be a base-10 integer",
                ) from exception
        self._cell.value = values

    def __str__(self):
        return _listing(self._cell.value, str)


def _ask(value, capability, /):
    # capability hooks are optional on user values; absent means "no"
    hook = getattr(value, capability, None)
    return bool(hook()) if callable(hook) else False


class VarParam(Param):
    """
    user-extensible parameter.

    the wrapped value is its own storage: it must expose set(raw) and __str__,
    and may expose is_toggle(), is_batch() and set_multi(raws). ValueErrors
    raised by the value are reported as CoercionError so callers handle every
    kind uniformly.
    """
    __kind__ = ParamKind.VAR
    __slots__ = ()

    def __init__(self, value, /):
        if not (hasattr(value, "set") and callable(value.set)):
            raise TypeError("var parameter value must have a callable 'set' method")
        super().__init__(Cell(value))

    def set(self, raw, /):
        try:
            self._cell.value.set(raw)
        except CoercionError:
            raise
        except ValueError as exception:
            raise CoercionError(str(exception), raw=raw) from exception

    def is_toggle(self):
        return _ask(self._cell.value, "is_toggle")

    def is_batch(self):
        return _ask(self._cell.value, "is_batch")

    def set_multi(self, raws, /):
        if not self.is_batch():
            raise ContractViolation(
                f"{type(self._cell.value).__name__} value does not accept batches"
            )
        try:
            self._cell.value.set_multi(raws)
        except CoercionError:
            raise
        except ValueError as exception:
            raise BatchCoercionError(str(exception)) from exception

    def __str__(self):
        return str(self._cell.value)


def build(kind, object, /):
    """
    build the parameter of the given kind around a cell (or, for VAR, a user value).
    """
    match kind:
        case ParamKind.BOOL:
            return BoolParam(object)
        case ParamKind.STRING:
            return StringParam(object)
        case ParamKind.INT:
            return IntParam(object)
        case ParamKind.STRINGS:
            return StringsParam(object)
        case ParamKind.INTS:
            return IntsParam(object)
        case ParamKind.VAR:
            return VarParam(object)
        case _:
            raise TypeError(f"unknown parameter kind {kind!r}")


__all__ = (
    # Types
    "ParamKind",
    "Cell",
    "Param",
    "BoolParam",
    "StringParam",
    "IntParam",
    "StringsParam",
    "IntsParam",
    "VarParam",

    # Functions
    "build",
)
