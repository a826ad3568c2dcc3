"""
Arglet faults (argument errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for the four fault kinds.
- ArgumentFault: base exception carrying the offending argument as structured
  fields (not only a formatted message) and knowing how to render itself.
- InvalidArgumentError / InvalidValueError / MissingValueError / DuplicateArgumentError:
  the concrete kinds raised by the parser (first three) and the registry (last).
- trigger(): central entry point to surface a fault (raise, or print and exit in shell mode).
- getdoc(): optional description lookup for a code from the host application.

Integration
- Parser/registry code raises faults directly; shell entry points route them
  through trigger(fault, **ctx) so they can be rendered with rich.
- Callers that prefer values over exceptions use Parser.attempt() and match on
  the returned fault (every kind declares __match_args__).
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    numeric ranges follow the switch-error domain (1111x/1112x) so codes stay
    searchable in logs and docs; normalize() lets the host remap them.
    """
    INVALID_ARGUMENT   = 11112
    DUPLICATE_ARGUMENT = 11115
    MISSING_VALUE      = 11117
    INVALID_VALUE      = 11124

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgumentFault(Exception):
    """
    base type of every argument fault.

    fields
    - name: the offending argument (flag/option/command name, abbreviation or token body).
    - code: the FaultCode of the concrete kind.
    - message: one-sentence description, also used as str(fault).
    - options: read-only rendering context (title, hint, suggestions, prog,
      shell, fancy, colorful); replaced wholesale via copy.replace().
    """
    __match_args__ = ("name",)

    code = None
    title = "argument fault"
    template = "argument %s is faulty"

    def __init__(self, name, /, **options):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__name__} name must be a string")
        self.name = name
        self.options = MappingProxyType(options)
        super().__init__(name)

    @property
    def message(self):
        return self.template % _quote(self.name)

    @property
    def suggestions(self):
        return tuple(self.options.get("suggestions", ()))

    def __str__(self):
        return self.message

    def __reduce__(self):
        return _restore, (type(self), self.args, dict(self.options))

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)

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

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        prog = getattr(main, "__prog__", self.options.get("prog", ""))

        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " — " if prog else "",
            text(self.code.normalize(), "code"),
            " | ",
            text(self.options.get("title", self.title).title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")
        renders = [message]
        if hint := self.options.get("hint", self._hint()):
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def _hint(self):
        suggestions = self.suggestions
        if suggestions:
            return "did you mean %s?" % " or ".join(map(repr, suggestions))
        return ""

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(*self.args, **{**self.options, **overrides})


class InvalidArgumentError(ArgumentFault):
    """token did not resolve to any declared flag or option."""
    code = FaultCode.INVALID_ARGUMENT
    title = "unknown argument"
    template = "argument %s does not exist"


class MissingValueError(ArgumentFault):
    """an option needs a value but none was available (or it looked like a switch)."""
    code = FaultCode.MISSING_VALUE
    title = "missing value"
    template = "no value provided for argument %s"

    def _hint(self):
        return "pass a value that does not start with '-' right after the option"


class DuplicateArgumentError(ArgumentFault):
    """setup-time registration of a name (or abbreviation) already in use."""
    code = FaultCode.DUPLICATE_ARGUMENT
    title = "duplicate argument"
    template = "argument %s already exists"


class InvalidValueError(ArgumentFault):
    """option value outside of the option's allowed set."""
    __match_args__ = ("name", "value")

    code = FaultCode.INVALID_VALUE
    title = "invalid value"

    def __init__(self, name, value, /, **options):
        if not isinstance(value, str):
            raise TypeError(f"{type(self).__name__} value must be a string")
        self.value = value
        super().__init__(name, **options)
        self.args = (name, value)

    @property
    def message(self):
        return "no value named %s for argument %s" % (_quote(self.value), _quote(self.name))

    def _hint(self):
        allowed = self.options.get("allowed", ())
        if allowed:
            return "choose one of %s" % ", ".join(map(repr, allowed))
        return super()._hint()


def _quote(text):
    return '"%s"' % text


def _restore(cls, args, options):
    return cls(*args, **options)


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ArgumentFault).
    - options are merged into the fault via copy.replace() before triggering.
    - shell=False (default) raises the fault; shell=True prints it on stderr
      through rich and exits with status 1.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ keyed by
    FaultCode; missing entries yield None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ArgumentFault",
    "InvalidArgumentError",
    "InvalidValueError",
    "MissingValueError",
    "DuplicateArgumentError",
    "FaultCode",
    "trigger",
    "getdoc",
)
