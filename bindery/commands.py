"""
Bindery command layer: register options and arguments and own their parameters.

What this module provides
- Command: the registration owner of a set of options and arguments.
  • declare(record): bind a declaration record to a fresh storage cell, seed it
    from the environment, and index it (options by every derived spelling,
    arguments by bare name). Returns the cell.
  • bool_option(...), ints_argument(...), ...: one-call helpers that build the
    record and declare it.
  • option(spelling) / argument(name): lookups used by the tokenizer.
  • assign(key, *raws): hand raw command-line text to a registered parameter,
    turning coercion failures into a parameter-named fault.
  • trigger(fault): surface a fault with this command's runtime flags.

Core ideas
- Precedence: command-line text > environment variables > declared default.
  Registration applies the environment immediately, so anything the tokenizer
  assigns afterwards always wins.
- Storage is explicit: every declaration hands back a Cell whose .value is
  the live parameter value.
- Styling that adapts: faults render through rich; color and panel chrome are
  configurable per command (shell/fancy/colorful).

Quick start
    from bindery import Command

    command = Command("tool")
    force = command.bool_option("f force", False, "overwrite existing files")
    jobs = command.ints_option("j jobs", [], "job ids", env_var="TOOL_JOBS")
    path = command.string_argument("PATH", ".", "where to work")

    # the (external) tokenizer then feeds what it found on the command line
    command.assign("--force", "true")
    command.assign("PATH", "/tmp")
    print(force.value, jobs.value, path.value)

Design notes
- The argv tokenizer, sub-command routing, and help rendering are not part of
  this module; they consume Command through the lookups and assign().
"""
import difflib
import logging
import os.path
import sys

from .arguments import *
from .environ import setfromenv
from .faults import *
from .params import Cell, ParamKind, build
from .utils import *

logger = logging.getLogger(__name__)


def _bind(record, /):
    """
    Build the parameter of a record around a fresh cell seeded with its default.

    Repeated defaults are copied into a new list so appends never reach the
    record (or the caller's original sequence). Var records wrap their value.
    """
    match record.kind:
        case ParamKind.VAR:
            return build(record.kind, record._value)
        case ParamKind.STRINGS | ParamKind.INTS:
            return build(record.kind, Cell(list(record.value)))
        case _:
            return build(record.kind, Cell(record.value))


class Command:
    """
    Registration owner of options and arguments.

    Responsibilities
    - Registration: derive option spellings, bind parameters, apply the
      environment fallback, and keep ordered tables plus lookup indexes.
    - Lookup: resolve a spelling or an argument name to its record.
    - Assignment: forward command-line text to the right parameter operation.
    - Faults: render or raise faults according to the runtime flags.

    Runtime flags
    - shell: when True, faults are printed (rich) and the process exits with
      status 1; otherwise they are raised.
    - fancy: render faults inside a panel.
    - colorful: style faults (see __styles__ in __main__ for overrides).
    - environ: mapping read by the environment fallback (os.environ by default).
    """

    def __init__(self, name=Unset, /, *, shell=False, fancy=False, colorful=True, environ=None):
        name = coalesce(name, os.path.basename(sys.argv[0]))
        if not isinstance(name, str):
            raise TypeError("command 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError("command 'name' cannot be empty")

        self._name = name
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._environ = environ
        self._options = []
        self._options_index = {}
        self._arguments = []
        self._arguments_index = {}

    name = mirror("name")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")
    options = mirror("options")
    options_index = mirror("options_index")
    arguments = mirror("arguments")
    arguments_index = mirror("arguments_index")

    def __repr__(self):
        return "command(name=%r, options=%r, arguments=%r)" % (
            self.name,
            [option.names for option in self._options],
            [argument.name for argument in self._arguments],
        )

    def __rich_repr__(self):
        yield "name", self.name
        yield "options", self.options
        yield "arguments", self.arguments

    def declare(self, record, /):
        """
        Register a declaration record on this command.

        Steps
        1. options only: derive the dash-prefixed spellings from the name list
           and check that none of them is already in use;
           arguments only: check that the bare name is free.
        2. bind a parameter to a fresh cell seeded with the record's default.
        3. apply the environment fallback (first usable variable wins).
        4. index the record.

        Returns
        - the Cell holding the live value (for Var records, the wrapped value
          object itself, which is its own storage).

        Raises
        - TypeError: when `record` is not an option/argument record, or is
          already registered.
        - ValueError: when a spelling or argument name is already in use.
        """
        if hasattr(record, "__option__") and callable(record.__option__):
            record, option = record.__option__(), True
        elif hasattr(record, "__argument__") and callable(record.__argument__):
            record, option = record.__argument__(), False
        else:
            raise TypeError("declare() argument must be an option or an argument record")

        if record.registered:
            raise TypeError(f"{type(record).__typename__} {record.name!r} is already registered")

        if option:
            names = flagify(record.name)
            for name in names:
                if name in self._options_index:
                    raise ValueError(f"command option name {name!r} is already in use")
        elif record.name in self._arguments_index:
            raise ValueError(f"command argument name {record.name!r} is already in use")

        param = _bind(record)
        if source := setfromenv(param, record.env_var, environ=self._environ):
            logger.debug("%s %r initialized from %s", type(record).__typename__, record.name, source)

        record._param = param
        if option:
            record._names = tuple(names)
            self._options.append(record)
            self._options_index.update(dict.fromkeys(names, record))
        else:
            self._arguments.append(record)
            self._arguments_index[record.name] = record

        return param.value if record.kind is ParamKind.VAR else param.cell

    def bool_option(self, name, value=False, desc=Unset, /, **options):
        """
        Declare a boolean option named `name` ("f force") with initial `value`.

        Keyword options (env_var, hide_value) are forwarded to BoolOpt.
        Returns the Cell holding the live value.
        """
        return self.declare(BoolOpt(name, value, desc, **options))

    def string_option(self, name, value="", desc=Unset, /, **options):
        return self.declare(StringOpt(name, value, desc, **options))

    def int_option(self, name, value=0, desc=Unset, /, **options):
        return self.declare(IntOpt(name, value, desc, **options))

    def strings_option(self, name, value=(), desc=Unset, /, **options):
        return self.declare(StringsOpt(name, value, desc, **options))

    def ints_option(self, name, value=(), desc=Unset, /, **options):
        return self.declare(IntsOpt(name, value, desc, **options))

    def var_option(self, name, value, desc=Unset, /, **options):
        """
        Declare an option bound to a caller-supplied value object; returns that object.
        """
        return self.declare(VarOpt(name, value, desc, **options))

    def bool_argument(self, name, value=False, desc=Unset, /, **options):
        return self.declare(BoolArg(name, value, desc, **options))

    def string_argument(self, name, value="", desc=Unset, /, **options):
        return self.declare(StringArg(name, value, desc, **options))

    def int_argument(self, name, value=0, desc=Unset, /, **options):
        return self.declare(IntArg(name, value, desc, **options))

    def strings_argument(self, name, value=(), desc=Unset, /, **options):
        return self.declare(StringsArg(name, value, desc, **options))

    def ints_argument(self, name, value=(), desc=Unset, /, **options):
        return self.declare(IntsArg(name, value, desc, **options))

    def var_argument(self, name, value, desc=Unset, /, **options):
        return self.declare(VarArg(name, value, desc, **options))

    def option(self, spelling, /):
        """
        Return the option record registered under `spelling` ("-f", "--force").

        Unknown spellings trigger UnknownOptionError with the closest match as hint.
        """
        try:
            return self._options_index[spelling]
        except KeyError:
            pass
        suggestions = difflib.get_close_matches(spelling, self._options_index.keys(), 5)
        try:
            hint = "did you mean %r? you can also run '%s --help' to see all options" % (suggestions[0], self.name)
        except IndexError:
            hint = "try '%s --help' to see all available options" % self.name
        return self.trigger(UnknownOptionError(
            "unknown option %r" % spelling,
            input=spelling,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_OPTION),
        ))

    def argument(self, name, /):
        """
        Return the argument record registered under its bare `name`.
        """
        try:
            return self._arguments_index[name]
        except KeyError:
            pass
        return self.trigger(UnknownArgumentError(
            "unknown argument %r" % name,
            input=name,
            hint="try '%s --help' to see all available arguments" % self.name,
            docs=getdoc(FaultCode.UNKNOWN_ARGUMENT),
        ))

    def assign(self, key, /, *raws):
        """
        Forward command-line text to the parameter registered under `key`.

        parameters
        - key: str
          an option spelling (starts with '-') or a bare argument name.
        - raws: str
          none → only for toggles, same as "true";
          one raw token → param.set(raw) (repeated kinds append);
          several raw tokens → param.set_multi(raws) (batch replace; only valid
          for batch-capable parameters).

        behavior
        - coercion failures are re-surfaced as InvalidValueError naming the
          option/argument, chained to the original CoercionError.
        - ContractViolation (a batch handed to a non-batch parameter) propagates
          untouched: it is a bug in the caller, not a user error.

        returns
        - the record that received the value.
        """
        if isinstance(key, str) and key.startswith("-"):
            record, typeof = self.option(key), "option"
        else:
            record, typeof = self.argument(key), "argument"

        if not raws:
            # a toggle present without a value means "on"
            if not record.param.is_toggle():
                raise TypeError(f"assign() expects at least one raw value for {typeof} {key!r}")
            raws = ("true",)

        try:
            if len(raws) == 1:
                record.param.set(raws[0])
            else:
                record.param.set_multi(list(raws))
        except CoercionError as exception:
            raw = exception.options.get("raw", raws[0] if len(raws) == 1 else ",".join(raws))
            fault = InvalidValueError(
                "invalid value %r for %s %r: %s" % (raw, typeof, key, exception.message),
                param=record,
                input=key,
                raw=raw,
                hint=exception.options.get("hint", "check the value format for %r" % key),
                docs=getdoc(FaultCode.INVALID_VALUE),
            )
            fault.__cause__ = exception
            self.trigger(fault)
        return record

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this command's name and runtime flags merged in.
        """
        trigger(fault, **options, prog=self.name, shell=self.shell, fancy=self.fancy, colorful=self.colorful)


__all__ = (
    "Command",
)
