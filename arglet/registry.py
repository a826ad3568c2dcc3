"""
Arglet registry: the declared vocabulary of a program and its help renderer.

What this module provides
- Registry: owns every Flag/Option/Command declaration, the two independent
  abbreviation maps (flags, options) and the rendering of help text.

Rules
- Flag and option names share one namespace: registering a name that is
  already a flag or an option raises DuplicateArgumentError(name).
- Commands live in their own namespace.
- Abbreviations are single characters; each map accepts a character once
  (DuplicateArgumentError("-x")), while a flag and an option may reuse the
  same character because the two maps are independent.
- Registration is atomic: a failing call leaves the registry untouched.
- The registry is written during setup only; parsing reads it.

Help layout (plain text, see help())
    prog - description wrapped to the line width with continuation lines
           aligned under the description

    COMMANDS

        build
            help text wrapped to width - 8 columns, indented by 8 spaces

    FLAGS

        --verbose, -v
            ...

    OPTIONS

        --mode, -m fast|slow
            ...
"""
import logging
import os.path
import sys
from collections import defaultdict

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .declarations import Flag, Option, Command
from .faults import DuplicateArgumentError
from .utils import *

logger = logging.getLogger(__name__)

# Fixed left margin of entry help lines.
MARGIN = 8
# Columns a rich Panel spends on its border and padding.
PANEL_FRAME = 4


class Registry:
    """
    Declaration registry for one program.

    Parameters
    - name: str | Unset
      Program name shown in help and fault headers. Defaults to the basename of sys.argv[0].
    - description: str
      One-paragraph description shown after the name in help.
    - width: int
      Line-width budget of the help text (default 80).
    - shell, fancy, colorful: bool
      Runtime flags: shell mode prints faults and exits instead of raising;
      fancy wraps rich renderings in panels; colorful enables rich styles.
    """

    name = mirror("name")
    description = mirror("description")
    flags = mirror("flags")
    options = mirror("options")
    commands = mirror("commands")
    flag_abbreviations = mirror("flag_abbreviations")
    option_abbreviations = mirror("option_abbreviations")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    def __init__(self, name=Unset, description="", /, *, width=80, shell=False, fancy=False, colorful=False):
        name = coalesce(name, os.path.basename(sys.argv[0]))
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__name__} 'name' must be a string")
        if not isinstance(description, str):
            raise TypeError(f"{type(self).__name__} 'description' must be a string")

        self._name = name
        self._description = description
        self._flags = {}
        self._options = {}
        self._commands = {}
        self._flag_abbreviations = {}
        self._option_abbreviations = {}
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self.width = width

    @property
    def width(self):
        """
        Line-width budget of the help text (description and entry help lines).
        """
        return self._width

    @width.setter
    def width(self, width):
        if not isinstance(width, int) or isinstance(width, bool):
            raise TypeError(f"{type(self).__name__} 'width' must be an integer")
        if width <= MARGIN:
            raise ValueError(f"{type(self).__name__} 'width' must be greater than {MARGIN}")
        self._width = width

    def add_flag(self, name, help="", /, abbr=Unset):
        """
        Declare a presence-only flag.

        Raises
        - DuplicateArgumentError(name) when the name is already a flag or an option.
        - DuplicateArgumentError("-" + abbr) when another flag already uses the abbreviation.
        - TypeError/ValueError on malformed metadata (see arglet.declarations).

        Returns
        - Flag: the stored declaration.
        """
        flag = Flag(name, help, abbr=abbr)
        self._claim(flag, self._flag_abbreviations)
        self._flags[flag.name] = flag
        if flag.abbr is not None:
            self._flag_abbreviations[flag.abbr] = flag.name
        logger.debug("registered flag %r (abbr=%r)", flag.name, flag.abbr)
        return flag

    def add_option(self, name, help="", /, abbr=Unset, default="", allowed=()):
        """
        Declare a value-bearing option.

        Raises
        - DuplicateArgumentError(name) when the name is already a flag or an option.
        - DuplicateArgumentError("-" + abbr) when another option already uses the abbreviation.
        - TypeError/ValueError on malformed metadata (see arglet.declarations).

        Returns
        - Option: the stored declaration.
        """
        option = Option(name, help, abbr=abbr, default=default, allowed=allowed)
        self._claim(option, self._option_abbreviations)
        self._options[option.name] = option
        if option.abbr is not None:
            self._option_abbreviations[option.abbr] = option.name
        logger.debug("registered option %r (abbr=%r, default=%r, allowed=%r)",
                     option.name, option.abbr, option.default, option.allowed)
        return option

    def add_command(self, name, help="", /):
        """
        Declare a top-level command.

        Raises
        - DuplicateArgumentError(name) when the command already exists.

        Returns
        - Command: the stored declaration.
        """
        command = Command(name, help)
        if command.name in self._commands:
            raise DuplicateArgumentError(command.name, prog=self._name)
        self._commands[command.name] = command
        logger.debug("registered command %r", command.name)
        return command

    def _claim(self, declaration, abbreviations, /):
        # name and abbreviation are both checked before anything is stored
        if declaration.name in self._flags or declaration.name in self._options:
            raise DuplicateArgumentError(declaration.name, prog=self._name)
        if declaration.abbr is not None and declaration.abbr in abbreviations:
            raise DuplicateArgumentError("-" + declaration.abbr, prog=self._name)

    def find_flag(self, key, /):
        """
        Resolve a flag by full name, then by abbreviation; None when unknown.
        """
        try:
            return self._flags[key]
        except KeyError:
            pass
        try:
            return self._flags[self._flag_abbreviations[key]]
        except KeyError:
            return None

    def find_option(self, key, /):
        """
        Resolve an option by full name, then by abbreviation; None when unknown.
        """
        try:
            return self._options[key]
        except KeyError:
            pass
        try:
            return self._options[self._option_abbreviations[key]]
        except KeyError:
            return None

    def _layout(self, width, /):
        """
        Yield the help text line by line.

        Every line is a tuple of (fragment, style) pairs so that help() can join
        the fragments and __rich_console__() can style them; () is a blank line.
        """
        if self._description:
            prefix = f"{self._name} - " if self._name else ""
            for index, line in enumerate(wrap(self._description, width, len(prefix), prefix)):
                if index == 0 and prefix:
                    yield (
                        (self._name, "program-name"),
                        (" - ", ""),
                        (line[len(prefix):], "description"),
                    )
                else:
                    yield (line, "description"),
            yield ()
        elif self._name:
            yield (self._name, "program-name"),
            yield ()

        if self._commands:
            yield ("COMMANDS", "section-label"),
            yield ()
            for command in self._commands.values():
                yield ("    ", ""), (command.name, "command-name")
                yield from self._describe(command, width)

        if self._flags:
            yield ("FLAGS", "section-label"),
            yield ()
            for flag in self._flags.values():
                yield (
                    ("    ", ""),
                    ("--" + flag.name, "flag-name"),
                    *(((", ", ""), ("-" + flag.abbr, "abbr")) if flag.abbr is not None else ()),
                )
                yield from self._describe(flag, width)

        if self._options:
            yield ("OPTIONS", "section-label"),
            yield ()
            for option in self._options.values():
                yield (
                    ("    ", ""),
                    ("--" + option.name, "option-name"),
                    *(((", ", ""), ("-" + option.abbr, "abbr")) if option.abbr is not None else ()),
                    *(((" ", ""), ("|".join(option.allowed), "choice")) if option.allowed else ()),
                )
                yield from self._describe(option, width)

    def _describe(self, declaration, width, /):
        for line in wrap(declaration.help, width, MARGIN):
            yield (line, "argument-description"),
        yield ()

    def help(self):
        """
        Render the help text as a single string.

        The output depends only on the declarations, name, description and
        width, so it is stable across runs and terminals. An entry declared
        with an empty help string gets its header line only, with no indented
        help line under it.
        """
        lines = ("".join(fragment for fragment, _ in line) for line in self._layout(self._width))
        return "\n".join(lines) + "\n"

    def __rich_console__(self, console, options):
        """
        Styled rendering of help() for rich consoles.

        Lines are laid out for the narrower of `width` and the room the console
        offers, so continuation lines keep their indentation on small terminals.

        Palette keys
        - program-name, description, section-label
        - command-name, flag-name, option-name, abbr, choice, argument-description

        Customization
        - Define a mapping named __styles__ in __main__ to override any palette entry.
        - When colorful is False, styling is suppressed.
        """
        styles = defaultdict(str, {
            "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "description": "italic #A3A3A3",  # Neutral gray
            "section-label": "bold #FFFFFF",  # Pure white headers
            "command-name": "bold #36C5F0",  # Sky-blue commands
            "flag-name": "bold #22C55E",  # GREEN for flags
            "option-name": "bold #00E6FF",  # CYAN for options
            "abbr": "#00E6FF",
            "choice": "bold #FF4D94",  # MAGENTA → choices stand out
            "argument-description": "#9CA3AF",  # Muted gray
        } | getattr(__import__("__main__"), "__styles__", {}))

        room = options.max_width - (PANEL_FRAME if self._fancy else 0)
        width = max(min(self._width, room), MARGIN + 1)

        renders = [
            Text.assemble(
                *((fragment, styles[style] if self._colorful else "") for fragment, style in line),
                no_wrap=True,
                overflow="fold",
            )
            for line in self._layout(width)
        ]

        if self._fancy:
            yield Panel(Group(*renders), title=Text(self._name, styles["program-name"] if self._colorful else ""), title_align="left")
        else:
            yield from renders

    def print_help(self, *, stderr=False):
        """
        Print the rich rendering of the help text (stdout by default).
        """
        Console(stderr=stderr).print(self)


__all__ = (
    "Registry",
)
