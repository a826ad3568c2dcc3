"""
Arglet utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the declaration, registry and parser layers.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support the higher-level modules.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None or "".

- coalesce(value, default=None)
  • Replace Unset with a concrete default, preserve every other value (including "").

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated callables.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr) as an immutable view.

- wrap(text, width, indent)
  • Word-wrap a help paragraph into indented lines without breaking words.

Stability and contract
- Names not in __all__ are internal and may change without notice.
"""
import builtins
import functools
import textwrap
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Arglet declarations use plain strings everywhere, and the empty string is
    meaningful ("no default", "no help"), so Unset marks parameters such as
    abbreviations that the caller did not pass at all.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and "".
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a per-process singleton.
    """

    def __or__(self, other, /):
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Notes
- Singleton: there is only one Unset instance.
- Falsey, but distinct from None and "".
"""


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values such as None, 0 or "" are returned as-is; only Unset is replaced.

    Examples
    - coalesce("v", "fallback")     -> "v"
    - coalesce(Unset, "fallback")   -> "fallback"
    - coalesce("", "fallback")      -> ""
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable
    - rename(name)           -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _freeze(object):
    """
    Shallow immutable view of a container.

    - Sequence (non-string) → tuple
    - Mapping               → MappingProxyType (live, read-only)
    - Set                   → frozenset
    - anything else         → returned as-is
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    if isinstance(object, Mapping):
        return MappingProxyType(object)
    if isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors the private attribute "_{name}".

    Containers are exposed through immutable views so that the public surface
    of declarations and registries cannot be mutated behind the parser's back.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


def wrap(text, width, indent=0, /, prefix=Unset):
    """
    Word-wrap one paragraph of help text into indented lines.

    Lines break on spaces only: a word longer than the available room is kept
    whole on its own line rather than split. An empty paragraph yields no lines.

    Parameters
    - text: str
      The paragraph to wrap.
    - width: int
      Total line width, indentation included.
    - indent: int
      Number of leading spaces on every produced line.
    - prefix: str | Unset
      Replaces the indentation of the first line (e.g. "prog - "); continuation
      lines keep the plain indentation.

    Returns
    - list[str]: the wrapped, indented lines (without trailing newlines).
    """
    if not isinstance(text, str):
        raise TypeError("wrap() first argument must be a string")
    padding = " " * indent
    return textwrap.wrap(
        text,
        width=max(width, indent + 1),
        initial_indent=coalesce(prefix, padding),
        subsequent_indent=padding,
        break_long_words=False,
        break_on_hyphens=False,
    )


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "wrap",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
