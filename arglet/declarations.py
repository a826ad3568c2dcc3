r"""
Arglet declarations: the vocabulary a program registers before parsing.

Overview
- Flag: named, presence-only switch (no payload), e.g. --verbose / -v.
- Option: named, value-bearing switch with a string default and an optional
  allowed-value set, e.g. --mode fast / -m fast / -mfast / --mode=fast.
- Command: top-level mode selector recognized only as the first token.

Declarations are plain value objects owned by the Registry that created them.
They are validated on construction and read-only afterwards.

Introspection & representation
- DeclarationType metaclass provides stable __repr__/__rich_repr__ and exposes
  the fields listed in __introspectable__ as read-only properties (mirror()).

Metadata (sanitized on construction)
- Shared
  • name: str, non-empty, no whitespace, no '=', not starting with '-'.
  • help: str (may be empty).
- Flag/Option only
  • abbr: Unset | str of exactly one character (not '-', '=' or whitespace).
- Option only
  • default: str ("" means "no default").
  • allowed: Iterable[str]; duplicates rejected; empty means unrestricted.

Quick example:
    >>> from arglet.declarations import Flag, Option, Command
    >>> Flag("verbose", "talk more", abbr="v")
    flag(name='verbose', help='talk more', abbr='v')
    >>> Option("mode", abbr="m", default="fast", allowed=("fast", "slow")).allowed
    ('fast', 'slow')
"""
import functools
import operator
import re

from .utils import *


class DeclarationType(type):
    """
    Metaclass that turns declaration classes into introspectable value types.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens),
      used in messages and representations.
    - Expose every name in __introspectable__ as a read-only property mirroring
      the private "_{name}" field.
    - Provide stable __repr__/__rich_repr__ implementations.
    """
    __introspectable__ = ()

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
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                value = getattr(self, name)
                # omit unset abbreviations and empty optional fields from the display
                if value is None or value == () or (name != "name" and value == ""):
                    continue
                yield name, value
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate the fields shared by every declaration (name, help).

    Raises
    - TypeError: when name or help is not a string.
    - ValueError: when name is empty, starts with '-', or holds whitespace or '='.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name:
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif name.startswith("-"):
        raise ValueError(f"{cls.__typename__} 'name' cannot start with '-' (dashes are added on the command line)")
    elif "=" in name or any(char.isspace() for char in name):
        raise ValueError(f"{cls.__typename__} 'name' cannot contain whitespace or '='")

    if not isinstance(metadata["help"], str):
        raise TypeError(f"{cls.__typename__} 'help' must be a string")


def _sanitize_named_metadata(cls, metadata, /):
    """
    Internal: validate the single-character abbreviation of flags and options.

    The abbreviation is optional (Unset → None). When given it must be exactly
    one character usable after a single dash: not '-', not '=', not whitespace.
    """
    if (abbr := metadata["abbr"]) is Unset:
        metadata["abbr"] = None
        return
    if not isinstance(abbr, str):
        raise TypeError(f"{cls.__typename__} 'abbr' must be a string")
    elif len(abbr) != 1:
        raise ValueError(f"{cls.__typename__} 'abbr' must be exactly one character")
    elif abbr in "-=" or abbr.isspace():
        raise ValueError(f"{cls.__typename__} 'abbr' cannot be '-', '=' or whitespace")


def _sanitize_valued_metadata(cls, metadata, /):
    """
    Internal: validate value-bearing metadata (options only).

    - default: must be a string; "" means "no default".
    - allowed: iterable of strings (a bare string is rejected because it would
      be read as a set of characters). Duplicates are rejected and the
      collection is normalized to a tuple, keeping declaration order for help.
    """
    if not isinstance(metadata["default"], str):
        raise TypeError(f"{cls.__typename__} 'default' must be a string")

    if isinstance(allowed := metadata["allowed"], str):
        raise TypeError(f"{cls.__typename__} 'allowed' must be an iterable of strings, not a string")
    try:
        iterator = iter(allowed)
    except TypeError:
        raise TypeError(f"{cls.__typename__} 'allowed' must be iterable") from None

    sanitized = []
    for value in iterator:
        if not isinstance(value, str):
            raise TypeError(f"{cls.__typename__} 'allowed' values must be strings")
        if value in sanitized:
            raise ValueError(f"{cls.__typename__} 'allowed' cannot contain duplicates")
        sanitized.append(value)
    metadata["allowed"] = tuple(sanitized)


class Flag(metaclass=DeclarationType):
    """
    Presence-only switch declaration.

    A flag carries no value: its entry in a ParseResult is False until the flag
    is seen, True afterwards. Supplying it more than once is not an error.
    """

    __introspectable__ = (
        "name",
        "help",
        "abbr",
    )

    def __init__(self, name, help="", /, abbr=Unset):
        metadata = {
            "name": name,
            "help": help,
            "abbr": abbr,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_named_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def __flag__(self):
        """
        Introspection hook: identify this declaration as a Flag.
        """
        return self


class Option(metaclass=DeclarationType):
    """
    Value-bearing switch declaration.

    Parameters
    - name: the long name used as `--name` and as the ParseResult key.
    - help: help text rendered under the entry.
    - abbr: optional one-character abbreviation used as `-x`.
    - default: value seeded into the ParseResult before parsing.
    - allowed: when non-empty, the only values accepted at parse time.
    """

    __introspectable__ = (
        "name",
        "help",
        "abbr",
        "default",
        "allowed",
    )

    def __init__(self, name, help="", /, abbr=Unset, default="", allowed=()):
        metadata = {
            "name": name,
            "help": help,
            "abbr": abbr,
            "default": default,
            "allowed": allowed,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_named_metadata(type(self), metadata)
        _sanitize_valued_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def accepts(self, value, /):
        """
        Return True when `value` is acceptable for this option's allowed set.
        """
        return not self._allowed or value in self._allowed

    def __option__(self):
        """
        Introspection hook: identify this declaration as an Option.
        """
        return self


class Command(metaclass=DeclarationType):
    """
    Top-level mode selector declaration (never nested).
    """

    __introspectable__ = (
        "name",
        "help",
    )

    def __init__(self, name, help="", /):
        metadata = {
            "name": name,
            "help": help,
        }
        _sanitize_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def __command__(self):
        """
        Introspection hook: identify this declaration as a Command.
        """
        return self


__all__ = (
    "Flag",
    "Option",
    "Command",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del DeclarationType
