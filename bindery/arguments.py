r"""
Bindery declaration records: the user-facing description of options and arguments.

Overview
- Options (named, dash-prefixed on the command line)
  • BoolOpt, StringOpt, IntOpt, StringsOpt, IntsOpt, VarOpt
- Arguments (positional, addressed by their bare name)
  • BoolArg, StringArg, IntArg, StringsArg, IntsArg, VarArg

Every record carries
- name: for options, a space separated list of bare names *without* dashes
  ("f force", never "-f --force"); one-letter names become short options and
  the others long options. For arguments, a single bare name.
- desc: short description shown in help messages (None when omitted).
- env_var: space separated list of environment variable names used to seed the
  value when the command line does not provide one. Repeated kinds read a comma
  separated list from the variable.
- value: the initial (default) value. Var records take the caller's own value
  object instead, which is its own storage.
- hide_value: suppress the current value from help messages.

Lifecycle
- A record is built by application code and handed to Command.declare(...) (or
  created by one of the Command.*_option / *_argument helpers). Registration
  binds a Param to a fresh Cell seeded with a copy of the default, applies the
  environment fallback, and indexes the record on the command.
- Fields are exposed read-only; after registration the record only changes
  through its parameter's set()/set_multi().

Quick example:
    >>> from bindery import Command, IntOpt
    >>> command = Command("tool")
    >>> threads = command.declare(IntOpt("t threads", 4, "worker count", env_var="TOOL_THREADS"))
    >>> threads.value
    4
"""
import functools
import operator
import re
from collections.abc import Iterable

from .params import ParamKind
from .utils import *


class RecordType(type):
    """
    Metaclass that gives declaration records a stable, introspectable shape.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide readable __repr__/__rich_repr__ implementations for diagnostics.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages ("int-opt 'value' must be an integer").
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
            **options
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - int-opt(name='t threads', desc='worker count', ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the metadata shared by every record.

    - name: required non-empty string (trimmed).
    - desc: Unset or a string; trimmed, None when Unset or blank.
    - env_var: Unset or a string; empty string when Unset.
    - hide_value: coerced to bool by the caller.

    Raises
    - TypeError: when a field has the wrong type.
    - ValueError: when name is empty after trimming.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    metadata["name"] = name

    if not isinstance(desc := metadata["desc"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'desc' must be a string")
    metadata["desc"] = coalesce(desc, "").strip() or None

    if not isinstance(env_var := metadata["env_var"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'env_var' must be a string")
    metadata["env_var"] = coalesce(env_var, "").strip()


def _sanitize_named_metadata(cls, metadata, /):
    """
    Internal: option names are bare; dashes are added at registration.
    """
    names = split_names(metadata["name"])
    for name in names:
        if name.startswith("-"):
            raise ValueError(f"{cls.__typename__} names must be given without dashes (got {name!r})")
    if len(set(names)) != len(names):
        raise ValueError(f"{cls.__typename__} names cannot contain duplicates")


def _sanitize_positional_metadata(cls, metadata, /):
    """
    Internal: an argument is addressed by exactly one bare name.
    """
    if len(split_names(metadata["name"])) != 1:
        raise ValueError(f"{cls.__typename__} 'name' must be a single word")


def _sanitize_value(cls, metadata, /):
    """
    Internal: check the default value against the record kind.

    Unset defaults become the kind's zero value; repeated defaults are frozen
    into a tuple so the record never shares a list with the caller.
    """
    value = metadata["value"]
    match cls.__kind__:
        case ParamKind.BOOL:
            value = coalesce(value, False)
            if not isinstance(value, bool):
                raise TypeError(f"{cls.__typename__} 'value' must be a boolean")
        case ParamKind.STRING:
            value = coalesce(value, "")
            if not isinstance(value, str):
                raise TypeError(f"{cls.__typename__} 'value' must be a string")
        case ParamKind.INT:
            value = coalesce(value, 0)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{cls.__typename__} 'value' must be an integer")
        case ParamKind.STRINGS:
            value = coalesce(value, ())
            if not isinstance(value, Iterable) or isinstance(value, str):
                raise TypeError(f"{cls.__typename__} 'value' must be an iterable of strings")
            value = tuple(value)
            if not all(isinstance(object, str) for object in value):
                raise TypeError(f"{cls.__typename__} 'value' must be an iterable of strings")
        case ParamKind.INTS:
            value = coalesce(value, ())
            if not isinstance(value, Iterable) or isinstance(value, str):
                raise TypeError(f"{cls.__typename__} 'value' must be an iterable of integers")
            value = tuple(value)
            if not all(isinstance(object, int) and not isinstance(object, bool) for object in value):
                raise TypeError(f"{cls.__typename__} 'value' must be an iterable of integers")
        case ParamKind.VAR:
            if value is Unset:
                raise TypeError(f"{cls.__typename__} must specify a 'value'")
            if not (hasattr(value, "set") and callable(value.set)):
                raise TypeError(f"{cls.__typename__} 'value' must have a callable 'set' method")
    metadata["value"] = value


class Record(metaclass=RecordType):
    """
    Base of every declaration record.

    Subclasses set __kind__ (a ParamKind member) and are either options
    (Opt subclasses) or arguments (Arg subclasses).
    """
    __kind__ = Unset

    __introspectable__ = (
        "name",
        "desc",
        "env_var",
        "value",
        "hide_value",
        "param",
    )
    __displayable__ = (
        "name",
        "desc",
        "env_var",
        "value",
        "hide_value",
    )

    def __init__(self, name=Unset, value=Unset, desc=Unset, *, env_var=Unset, hide_value=False):
        if self.__kind__ is Unset:
            raise TypeError(f"{type(self).__typename__} is an abstract record")
        metadata = {
            "name": name,
            "desc": desc,
            "env_var": env_var,
            "value": value,
            "hide_value": bool(hide_value),
        }
        _sanitize_metadata(type(self), metadata)
        self.__sanitize__(metadata)
        _sanitize_value(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._param = Unset  # Bound by Command.declare later.

    def __sanitize__(self, metadata, /):
        pass

    @property
    def kind(self):
        return type(self).__kind__

    @property
    def registered(self):
        return self._param is not Unset

    @property
    def display(self):
        """
        Current value as shown in help messages, or None when hidden or unregistered.
        """
        if self.hide_value or self._param is Unset:
            return None
        return str(self._param)


class Opt(Record):
    """
    Named option record; `names` holds the dash-prefixed spellings once registered.
    """
    __introspectable__ = ("names",)
    __displayable__ = (
        "names",
        "name",
        "desc",
        "env_var",
        "value",
        "hide_value",
    )

    def __init__(self, name=Unset, value=Unset, desc=Unset, *, env_var=Unset, hide_value=False):
        self._names = ()
        super().__init__(name, value, desc, env_var=env_var, hide_value=hide_value)

    def __sanitize__(self, metadata, /):
        _sanitize_named_metadata(type(self), metadata)

    def __option__(self):
        """
        Introspection hook: identify this record as an option.
        """
        return self


class Arg(Record):
    """
    Positional argument record.
    """

    def __sanitize__(self, metadata, /):
        _sanitize_positional_metadata(type(self), metadata)

    def __argument__(self):
        """
        Introspection hook: identify this record as an argument.
        """
        return self


class BoolOpt(Opt):
    __kind__ = ParamKind.BOOL


class StringOpt(Opt):
    __kind__ = ParamKind.STRING


class IntOpt(Opt):
    __kind__ = ParamKind.INT


class StringsOpt(Opt):
    __kind__ = ParamKind.STRINGS


class IntsOpt(Opt):
    __kind__ = ParamKind.INTS


class VarOpt(Opt):
    """
    Option bound to a caller-supplied value object (see VarParam).
    """
    __kind__ = ParamKind.VAR

    @property
    def value(self):
        return self._value


class BoolArg(Arg):
    __kind__ = ParamKind.BOOL


class StringArg(Arg):
    __kind__ = ParamKind.STRING


class IntArg(Arg):
    __kind__ = ParamKind.INT


class StringsArg(Arg):
    __kind__ = ParamKind.STRINGS


class IntsArg(Arg):
    __kind__ = ParamKind.INTS


class VarArg(Arg):
    """
    Argument bound to a caller-supplied value object (see VarParam).
    """
    __kind__ = ParamKind.VAR

    @property
    def value(self):
        return self._value


__all__ = (
    # Public API surface for consumers of bindery.arguments.
    # These names are re-exported from the package __init__.

    # Bases
    "Record",
    "Opt",
    "Arg",

    # Options
    "BoolOpt",
    "StringOpt",
    "IntOpt",
    "StringsOpt",
    "IntsOpt",
    "VarOpt",

    # Arguments
    "BoolArg",
    "StringArg",
    "IntArg",
    "StringsArg",
    "IntsArg",
    "VarArg",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del RecordType
