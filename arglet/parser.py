"""
Arglet parser: walk an argument vector and classify every token.

What this module provides
- Parser: a Registry that can parse(), attempt() and __invoke__() argument vectors.
- invoke(parser, prompt): convenience runner for shell entry points.

Token classification (first match wins, left to right, explicit index)
1. ""                  → skipped.
2. -X (one dash)       → short form:
   • "-c"              → option "c" (value = next token), else flag "c".
   • "-body" (longer)  → with '=': option with inline value when the key
                         names an option ("-o=VALUE"), MissingValueError when
                         nothing follows the '=', otherwise a flag bundle.
                         Without '=': option with inline value when the body
                         starts with an option abbreviation ("-oVALUE");
                         option with the next token as value when the whole
                         body names an option ("-mode fast"); otherwise a
                         bundle of flags ("-abc" = -a -b -c).
3. --name              → long form: "--name=value" or "--name value" for
                         options, "--name" for flags.
4. first token         → command, when commands are declared and it matches.
5. anything else       → positional ("-", "--" and "---x" included).

Short keys resolve by full name first, then by abbreviation; long keys by full
name only.

Value rules
- a value is missing when absent, empty or starting with '-' → MissingValueError.
- a value outside a non-empty allowed set → InvalidValueError.
- a repeated option keeps the last value; repeated flags are harmless.

Quick start
    from arglet import Parser

    parser = Parser("tool", "does things")
    parser.add_flag("verbose", "talk more", abbr="v")
    parser.add_option("mode", "how to run", abbr="m", default="fast", allowed=("fast", "slow"))
    parser.add_command("build", "build the project")

    result = parser.parse(["build", "-v", "-mslow", "target"])
    # result.command == "build", result.flag["verbose"] is True,
    # result.option["mode"] == "slow", result.positional == ["target"]
"""
import difflib
import logging
import shlex
import sys
from collections.abc import Iterable

from .faults import *
from .registry import Registry
from .results import ParseResult
from .utils import *

logger = logging.getLogger(__name__)


def _is_short(token):
    """-X...: a single dash followed by anything but a dash."""
    return len(token) > 1 and token[0] == "-" and token[1] != "-"


def _is_long(token):
    """--name: two dashes followed by anything but a third dash."""
    return len(token) > 2 and token[0] == "-" and token[1] == "-" and token[2] != "-"


class Parser(Registry):
    """
    Argument parser built on the declaration registry.

    parse() is a pure function of the registry and its input: it keeps no
    state between calls, and the registry must not be mutated while a parse
    is running.
    """

    def parse(self, args, /):
        """
        Parse an argument vector (without the program name).

        Parameters
        - args: Iterable[str]
          The tokens to classify. A bare string is rejected; use invoke() for
          shell-like strings.

        Returns
        - ParseResult: flags, options (seeded with defaults), positionals, command.

        Raises
        - InvalidArgumentError: a switch did not resolve to a declared flag/option.
        - MissingValueError: an option had no usable value.
        - InvalidValueError: an option value is outside its allowed set.
        - TypeError: args is not an iterable of strings.
        """
        tokens = _tokenize(args)
        result = ParseResult(
            dict.fromkeys(self._flags, False),
            {name: option.default for name, option in self._options.items()},
        )
        logger.debug("parsing %d token(s): %r", len(tokens), tokens)

        index = 0
        while index < len(tokens):
            token = tokens[index]
            if not token:
                index += 1
            elif _is_short(token):
                index = self._resolve_short(tokens, index, result)
            elif _is_long(token):
                index = self._resolve_long(tokens, index, result)
            elif index == 0 and token in self._commands:
                logger.debug("token %r selects command %r", token, token)
                result.command = token
                index += 1
            else:
                result.positional.append(token)
                index += 1

        return result

    def attempt(self, args, /):
        """
        Parse like parse(), but return the fault instead of raising it.

        Returns
        - ParseResult | ArgumentFault, ready for structural pattern matching:

            match parser.attempt(argv):
                case ParseResult() as result: ...
                case MissingValueError(name): ...
                case InvalidValueError(name, value): ...

        TypeError for malformed input is still raised.
        """
        try:
            return self.parse(args)
        except ArgumentFault as fault:
            logger.debug("parse failed: %s", fault)
            return fault

    def _resolve_short(self, tokens, index, result):
        body = tokens[index][1:]

        if len(body) == 1:
            if option := self.find_option(body):
                self._assign(option, body, self._following(tokens, index), result)
                return index + 2
            self._raise_flag(body, self.find_flag(body), result)
            return index + 1

        # option forms are tried before the whole body is read as a flag bundle;
        # a body holding '=' only ever takes the key=value form
        key, separator, value = body.partition("=")
        if separator:
            if option := self.find_option(key):
                self._assign(option, key, value, result)
                return index + 1
            if not value:
                raise MissingValueError(key, input=key, prog=self._name)
        elif (name := self._option_abbreviations.get(body[0])) is not None:
            self._assign(self._options[name], body[0], body[1:], result)
            return index + 1

        if option := self.find_option(body):
            self._assign(option, body, self._following(tokens, index), result)
            return index + 2

        for char in body:
            self._raise_flag(char, self.find_flag(char), result)
        return index + 1

    def _resolve_long(self, tokens, index, result):
        body = tokens[index][2:]

        key, separator, value = body.partition("=")
        if separator and (option := self._options.get(key)):
            self._assign(option, key, value, result)
            return index + 1

        if option := self._options.get(body):
            self._assign(option, body, self._following(tokens, index), result)
            return index + 2

        self._raise_flag(body, self._flags.get(body), result)
        return index + 1

    @staticmethod
    def _following(tokens, index):
        try:
            return tokens[index + 1]
        except IndexError:
            return None

    def _assign(self, option, input, value, result):
        if not value or value.startswith("-"):
            raise MissingValueError(option.name, input=input, prog=self._name)
        if not option.accepts(value):
            raise InvalidValueError(option.name, value, input=input, allowed=option.allowed, prog=self._name)
        logger.debug("option %r set to %r (via %r)", option.name, value, input)
        result.option[option.name] = value

    def _raise_flag(self, input, flag, result):
        if flag is None:
            raise InvalidArgumentError(input, suggestions=self._suggest(input), prog=self._name)
        logger.debug("flag %r raised (via %r)", flag.name, input)
        result.flag[flag.name] = True

    def _suggest(self, input):
        names = [*self._flags, *self._options]
        return tuple("--" + name for name in difflib.get_close_matches(input, names, 3))

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this parser's runtime flags.

        In shell mode the help text is printed on stderr first, then the fault,
        and the process exits with status 1; otherwise the fault is raised.
        """
        if self._shell:
            self.print_help(stderr=True)
        trigger(fault, **{
            "prog": self._name,
            "shell": self._shell,
            "fancy": self._fancy,
            "colorful": self._colorful,
        } | options)

    def __invoke__(self, prompt=Unset):
        """
        Parse a command line for a shell entry point.

        Parameters
        - prompt:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string, split with shlex.split.
          • Iterable[str]: pre-tokenized sequence.

        Returns
        - ParseResult. Faults are routed through trigger().
        """
        if prompt is Unset:
            tokens = sys.argv[1:]
        elif isinstance(prompt, str):
            tokens = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            tokens = prompt
        else:
            raise TypeError("__invoke__() argument must be a string or an iterable of strings")

        try:
            return self.parse(tokens)
        except ArgumentFault as fault:
            self.trigger(fault)


def _tokenize(args):
    if isinstance(args, str) or not isinstance(args, Iterable):
        raise TypeError("parse() argument must be an iterable of strings")
    tokens = list(args)
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("parse() argument must be an iterable of strings")
    return tokens


def invoke(object, prompt=Unset, /):
    """
    Convenience runner for parsers.

    Parameters
    - object: an instance providing __invoke__(prompt), typically a Parser.
    - prompt: Unset (sys.argv[1:]), a shell-like string, or an iterable of strings.

    Returns
    - whatever object.__invoke__ returns (a ParseResult for parsers).
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)

    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method") from None


__all__ = (
    "Parser",
    "invoke",
)
