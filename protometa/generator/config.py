"""Message configuration table parser using Lark."""

import os
from typing import Any

from lark import Lark, Token
from lark.exceptions import UnexpectedInput, VisitError
from lark.visitors import Transformer

from .errors import ConfigError
from .types import MAX_FLAGS, MAX_IDENTIFIER, ConfigRow

_g_parser: Lark | None = None


def _check_range(token: Token, limit: int, what: str) -> int:
    value = int(token)
    if value > limit:
        raise ConfigError(f"line {token.line}: {what} {value} exceeds {limit}")
    return value


class RowTransformer(Transformer):
    """Transform parse tree into configuration rows."""

    def row(self, args: list[Any]) -> ConfigRow:
        identifier, flags = args
        return ConfigRow(
            identifier=_check_range(identifier, MAX_IDENTIFIER, "identifier"),
            flags=_check_range(flags, MAX_FLAGS, "flags"),
            line=identifier.line,
        )

    def start(self, args: list[Any]) -> list[ConfigRow]:
        return list(args)


def _parser() -> Lark:
    global _g_parser

    if not _g_parser:
        with open(f"{os.path.dirname(__file__)}/config.lark", encoding="utf-8") as f:
            grammar = f.read()
        _g_parser = Lark(grammar, parser="lalr")
    return _g_parser


def parse_config(text: str) -> list[ConfigRow]:
    """Parse a configuration table into rows, in file order.

    Raises:
        ConfigError: if a row is not two decimal integers or is out of range.
    """
    try:
        tree = _parser().parse(text)
    except UnexpectedInput as e:
        raise ConfigError(f"line {e.line}, column {e.column}: malformed configuration row") from e

    try:
        return RowTransformer().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, ConfigError):
            raise e.orig_exc from None
        raise


def read_config(path: str) -> list[ConfigRow]:
    """Read and parse a configuration table file."""
    with open(path, encoding="utf-8") as f:
        return parse_config(f.read())
