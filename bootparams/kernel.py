"""Utility classes for kernel parameters"""
from __future__ import annotations
import logging
import threading
import typing

logger = logging.getLogger(__name__)


class Parameter:
    """A kernel parameter key and its ordered values"""
    def __init__(self, key: str, values: "typing.Optional[typing.Iterable[str]]" = None):
        self._key = key
        self._values: "list[str]" = list(values) if values is not None else []

    def append(self, value: str) -> Parameter:
        """appends a value, returns the parameter for chaining"""
        self._values.append(value)
        return self

    def first(self) -> "str | None":
        """returns the first value or None"""
        if not self._values:
            return None

        return self._values[0]

    def get(self, index: int) -> "str | None":
        """returns the value at index or None if out of range"""
        if index < 0 or index >= len(self._values):
            return None

        return self._values[index]

    def contains(self, value: str) -> bool:
        """checks if value was given for this parameter"""
        for _v in self._values:
            if _v == value:
                return True

        return False

    def key(self) -> str:
        """returns the parameter key"""
        return self._key

    @property
    def values(self) -> "tuple[str, ...]":
        """returns a copy of all values"""
        return tuple(self._values)

    def tokens(self) -> "list[str]":
        """returns one KEY or KEY=VALUE token per value"""
        tokens = []
        for value in self._values:
            if value == "":
                tokens.append(self._key)
            else:
                tokens.append(f"{self._key}={value}")

        return tokens

    def __contains__(self, value):
        return self.contains(value)

    def __iter__(self):
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __bool__(self):
        return True

    def __eq__(self, other):
        if not isinstance(other, Parameter):
            return NotImplemented
        return self.key() == other.key() and self.values == other.values

    def __repr__(self):
        return f"Parameter({self._key!r}, {self._values!r})"


class MissingParameter(Parameter):
    """Stands in for a parameter that is not on the command line.

    Every accessor answers as an empty parameter would, so lookups can be
    chained without checking for existence first::

        cmdline.get("console").first()  # None when console is not set
    """
    def __init__(self):
        super().__init__("", ())

    def append(self, value: str) -> Parameter:
        raise TypeError("Cannot append to a missing parameter")

    def __bool__(self):
        return False

    def __eq__(self, other):
        return isinstance(other, MissingParameter)

    def __hash__(self):
        return hash(MissingParameter)

    def __repr__(self):
        return "MISSING"


MISSING = MissingParameter()


class Parameters(list):
    """Ordered list of parameters with the command line text format"""

    def tokens(self) -> "list[str]":
        """returns all tokens in parameter order, then value order"""
        tokens = []
        for parameter in self:
            tokens.extend(parameter.tokens())

        return tokens

    def strings(self) -> "list[str]":
        """returns the serialized form split into tokens"""
        return str(self).split(" ")

    def __str__(self):
        return " ".join(self.tokens()).rstrip(" ")


def insert(parameters: Parameters, key: str, value: str):
    """appends value to key, adds the key at the end if it is new"""
    for parameter in parameters:
        if parameter.key() == key:
            parameter.append(value)
            return

    parameters.append(Parameter(key, [value]))


def parse(line: str) -> Parameters:
    """Parses a kernel command line into parameters"""
    if line.endswith("\n"):
        line = line[:-1]

    parsed = Parameters()
    for token in line.split():
        key, _sep, value = token.partition("=")
        insert(parsed, key, value)

    return parsed


class AppendAllOptions:
    """Options for Cmdline.append_all"""
    def __init__(self, overwrite_args: "typing.Optional[typing.Iterable[str]]" = None):
        self.overwrite_args: "set[str]" = set(overwrite_args or [])

    def merge(self, other: AppendAllOptions) -> AppendAllOptions:
        """returns options combining both overwrite lists"""
        return AppendAllOptions(self.overwrite_args | other.overwrite_args)

    def overwrites(self, key: str) -> bool:
        """checks if key should be replaced instead of appended to"""
        return key in self.overwrite_args

    def __repr__(self):
        return f"AppendAllOptions(overwrite_args={sorted(self.overwrite_args)!r})"


def with_overwrite_args(*keys: str) -> AppendAllOptions:
    """creates options which overwrite the given keys"""
    return AppendAllOptions(keys)


class Cmdline:
    """A set of kernel parameters, safe to share between threads"""
    def __init__(self, parameters: "str | typing.Iterable[Parameter] | None" = None):
        self.lock = threading.RLock()
        self.parameters = Parameters()
        if parameters is None:
            return

        if isinstance(parameters, str):
            self.parameters = parse(parameters)
            return

        # copies, repeated keys fold into the first entry
        for parameter in parameters:
            existing = self.get(parameter.key())
            if existing:
                for value in parameter:
                    existing.append(value)
            else:
                self.parameters.append(Parameter(parameter.key(), parameter.values))

    def get(self, key: str) -> Parameter:
        """returns the parameter for key or MISSING"""
        with self.lock:
            for parameter in self.parameters:
                if parameter.key() == key:
                    return parameter

        return MISSING

    def first(self, key: str, default=None):
        """returns the first value of key, or default if it has none"""
        value = self.get(key).first()
        if value is None:
            return default

        return value

    def set(self, key: str, parameter: Parameter):
        """replaces the parameter for key in place, appends it if new"""
        with self.lock:
            for i, existing in enumerate(self.parameters):
                if existing.key() == key:
                    self.parameters[i] = parameter
                    return

            self.parameters.append(parameter)

    def set_all(self, args: "typing.Iterable[str]"):
        """replaces every parameter given in args"""
        with self.lock:
            for parameter in parse(" ".join(args)):
                self.set(parameter.key(), parameter)

    def append(self, key: str, value: str):
        """appends a value to key, adds the key at the end if it is new"""
        with self.lock:
            insert(self.parameters, key, value)

    def append_all(self, args: "typing.Iterable[str]",
                   options: "typing.Optional[AppendAllOptions]" = None):
        """Merges args into the command line.

        Keys listed in options.overwrite_args have their values replaced,
        every other key accumulates the new values.
        """
        if options is None:
            options = AppendAllOptions()

        with self.lock:
            for parameter in parse(" ".join(args)):
                if options.overwrites(parameter.key()):
                    logger.debug(f"Overwriting kernel parameter {parameter.key()}")
                    self.set(parameter.key(), parameter)
                    continue

                for value in parameter:
                    self.append(parameter.key(), value)

    def keys(self) -> "list[str]":
        """returns all keys in command line order"""
        with self.lock:
            return [parameter.key() for parameter in self.parameters]

    def strings(self) -> "list[str]":
        """returns the serialized form split into tokens"""
        with self.lock:
            return self.parameters.strings()

    def bytes(self) -> bytes:
        """returns the serialized form as bytes"""
        return str(self).encode("utf-8", "surrogateescape")

    def __getitem__(self, key):
        parameter = self.get(key)
        if not parameter:
            raise KeyError(key)
        return parameter

    def __contains__(self, key):
        return bool(self.get(key))

    def __iter__(self):
        with self.lock:
            return iter(list(self.parameters))

    def __len__(self) -> int:
        return len(self.parameters)

    def __str__(self):
        with self.lock:
            return str(self.parameters)

    def __repr__(self):
        return f"Cmdline({str(self)!r})"
