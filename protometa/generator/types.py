"""Type definitions for metadata extraction and code generation."""

from dataclasses import dataclass

from dataclasses_json import DataClassJsonMixin

MAX_IDENTIFIER = 0xFFFF
MAX_FLAGS = 0xFF


@dataclass
class ConfigRow(DataClassJsonMixin):
    """One row of the message configuration table."""

    identifier: int
    flags: int
    line: int


@dataclass
class DispatchEntry(DataClassJsonMixin):
    """Pairs a message identifier with the name of the type it was declared on."""

    identifier: int
    name: str


@dataclass(frozen=True)
class Markers(DataClassJsonMixin):
    """Recognisable shapes in schema-compiler output.

    - id_marker: text that makes a line an identifier marker; the identifier
      is the token right after it
    - type_pattern: regex whose first group is the declared type name
    - annotation: decorator emitted in place of an identifier marker
    """

    id_marker: str = "MessageId:"
    type_pattern: str = r"^\s*class\s+([A-Za-z_]\w*)"
    annotation: str = "message_id"


@dataclass(frozen=True)
class IdMarker:
    """An identifier marker line."""

    identifier: int
    text: str


@dataclass(frozen=True)
class TypeMarker:
    """A line declaring a message type."""

    name: str
    text: str


@dataclass(frozen=True)
class Other:
    """Any line that is neither kind of marker."""

    text: str


ScannedLine = IdMarker | TypeMarker | Other
