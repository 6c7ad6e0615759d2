"""Line classification for schema-compiler output."""

import re
from collections.abc import Iterable, Iterator
from functools import lru_cache

from .errors import MarkerError
from .types import MAX_IDENTIFIER, IdMarker, Markers, Other, ScannedLine, TypeMarker


@lru_cache(maxsize=16)
def _type_regex(pattern: str) -> re.Pattern[str]:
    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise MarkerError(f"Invalid type pattern {pattern!r}: {e}") from e
    if regex.groups < 1:
        raise MarkerError(f"Type pattern {pattern!r} has no group for the type name")
    return regex


def is_id_marker(line: str, markers: Markers) -> bool:
    """Check if a line is an identifier marker."""
    return markers.id_marker in line


def parse_identifier(line: str, markers: Markers) -> int:
    """Parse the identifier that follows the marker text.

    Raises:
        MarkerError: if the token is missing, not decimal or out of range.
    """
    _, _, rest = line.partition(markers.id_marker)
    tokens = rest.split()
    if not tokens:
        raise MarkerError(f"No identifier after {markers.id_marker!r}")

    token = tokens[0]
    if not (token.isascii() and token.isdecimal()):
        raise MarkerError(f"Identifier {token!r} is not a decimal number")

    identifier = int(token)
    if identifier > MAX_IDENTIFIER:
        raise MarkerError(f"Identifier {identifier} does not fit in 16 bits")
    return identifier


def type_name(line: str, markers: Markers) -> str | None:
    """Return the declared type name if the line is a type marker."""
    match = _type_regex(markers.type_pattern).search(line)
    if match is None:
        return None

    name = match.group(1)
    if name is None or not name.isidentifier():
        raise MarkerError(f"Type name {name!r} is not a valid identifier")
    return name


def scan(lines: Iterable[str], markers: Markers) -> Iterator[ScannedLine]:
    """Classify each line. Identifier markers win over type markers."""
    for lineno, line in enumerate(lines, start=1):
        item: ScannedLine
        try:
            if is_id_marker(line, markers):
                item = IdMarker(identifier=parse_identifier(line, markers), text=line)
            else:
                name = type_name(line, markers)
                item = Other(text=line) if name is None else TypeMarker(name=name, text=line)
        except MarkerError as e:
            raise MarkerError(f"line {lineno}: {e}") from e
        yield item


def split_lines(text: str) -> tuple[list[str], bool]:
    """Split text on newlines only, reporting whether it ended with one.

    A carriage return before the newline stays on its line.
    """
    lines = text.split("\n")
    trailing_newline = lines[-1] == ""
    if trailing_newline:
        lines.pop()
    return lines, trailing_newline


def join_lines(lines: list[str], trailing_newline: bool) -> str:
    text = "\n".join(lines)
    if trailing_newline and lines:
        text += "\n"
    return text


@lru_cache(maxsize=16)
def _annotation_regex(annotation: str) -> re.Pattern[str]:
    return re.compile(rf"^\s*@{re.escape(annotation)}\((\d+)\)\s*$", re.ASCII)


def annotation_identifier(line: str, markers: Markers) -> int | None:
    """Return the identifier carried by an annotation line, if it is one."""
    match = _annotation_regex(markers.annotation).match(line)
    if match is None:
        return None
    return int(match.group(1))
