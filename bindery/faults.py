"""
Bindery faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain to keep copy consistent and logs searchable.
- ParamException: base type that carries a message + options and knows how to
  render itself in a friendly, lowercased, and actionable way.
- CoercionError / BatchCoercionError: raw text did not match the literal grammar
  of a parameter (single token, or one element of an atomic batch).
- ContractViolation: a capability was used on a parameter that does not have it.
  This is a programming error in the caller's classification logic and is never
  rendered nor swallowed.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Integration
- Parameters raise CoercionError from set()/set_multi().
- Environment fallback swallows coercion errors and tries the next candidate.
- Command.assign() wraps them into an InvalidValueError naming the parameter
  and calls trigger(fault, **ctx). In non-shell mode faults are raised; in
  shell mode they are rendered via rich and the process exits.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the package (stable identifiers).

    grouping (by high-level domain)
    - coercion (2110x)
      • COERCION, BATCH_COERCION
    - assignment (2111x)
      • INVALID_VALUE
    - lookup (2112x)
      • UNKNOWN_OPTION, UNKNOWN_ARGUMENT

    codes are normalized to a string via normalize() so hosts can remap them.
    """
    # --- coercion errors (21xxx) ---
    COERCION                    = 21101
    BATCH_COERCION              = 21102

    # --- assignment errors (21xxx) ---
    INVALID_VALUE               = 21111

    # --- lookup errors (21xxx) ---
    UNKNOWN_OPTION              = 21121
    UNKNOWN_ARGUMENT            = 21122

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParamException(Exception):
    """
    base of every recoverable fault raised by this package.

    options are free-form context (code, title, hint, param, raw, prog, shell,
    fancy, colorful, ...) frozen into a read-only mapping; renderers treat every
    key as optional.
    """
    __code__ = Unset
    __title__ = "error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code", self.__code__)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        code = self.code
        prog = text(getattr(main, "__prog__", self.options.get("prog", "bindery")), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else "-", styler("code")),
            " | ",
            text(self.options.get("title", self.__title__).title(), styler("error-title")),
            " ]"
        )
        message = text(self.message or "", styler("error-message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left", width=console.width - 4)

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from self.__cause__
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        fault = type(self)(self.message, **{**self.options, **overrides})
        fault.__cause__ = self.__cause__
        return fault


class CoercionError(ParamException, ValueError):
    """
    raw text does not match the literal grammar a parameter expects.

    the parameter's storage is left untouched by the failed call.
    """
    __code__ = FaultCode.COERCION
    __title__ = "coercion error"


class BatchCoercionError(CoercionError):
    """
    one element of a set_multi() batch failed to parse; the whole batch was rejected.

    options
    - index: position of the offending element in the batch.
    - raw: the offending element after trimming.
    """
    __code__ = FaultCode.BATCH_COERCION
    __title__ = "batch coercion error"


class InvalidValueError(CoercionError):
    """
    a command-line value for a named parameter could not be coerced.
    """
    __code__ = FaultCode.INVALID_VALUE
    __title__ = "invalid value"


class UnknownOptionError(ParamException, LookupError):
    __code__ = FaultCode.UNKNOWN_OPTION
    __title__ = "unknown option"


class UnknownArgumentError(ParamException, LookupError):
    __code__ = FaultCode.UNKNOWN_ARGUMENT
    __title__ = "unknown argument"


class ContractViolation(AssertionError):
    """
    a capability was used on a parameter that does not support it.

    this signals a bug in the caller's classification logic (e.g. the tokenizer
    handing a batch to a non-batch parameter), not a user-facing condition, so it
    derives from AssertionError and must never be caught by coercion handlers.
    """


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParamException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode members and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ParamException",
    "CoercionError",
    "BatchCoercionError",
    "InvalidValueError",
    "UnknownOptionError",
    "UnknownArgumentError",
    "ContractViolation",
    "FaultCode",
    "trigger",
    "getdoc",
)
