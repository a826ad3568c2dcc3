"""
Arglet parse results.

A ParseResult is created fresh by every Parser.parse() call and belongs to the
caller afterwards; the parser never keeps a reference to it.
"""
import functools
import operator


class ParseResult:
    """
    Structured outcome of one parse.

    Attributes
    - flag: dict[str, bool]
      Every declared flag name; False unless the flag was supplied.
    - option: dict[str, str]
      Every declared option name; the declared default unless supplied
      (the last supplied value wins).
    - positional: list[str]
      Tokens that matched no flag, option or command, in encounter order.
    - command: str
      The selected command, or "" when none was selected.
    """
    __slots__ = ("flag", "option", "positional", "command")

    def __init__(self, flag=(), option=(), positional=(), command=""):
        self.flag = dict(flag)
        self.option = dict(option)
        self.positional = list(positional)
        self.command = command

    def __eq__(self, other):
        if not isinstance(other, ParseResult):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__slots__)

    __hash__ = None

    def __rich_repr__(self):
        for name in self.__slots__:
            yield name, getattr(self, name)

    def __repr__(self):
        return f"{type(self).__name__}({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"


__all__ = (
    "ParseResult",
)
