"""Debug dispatcher generator: maps message identifiers to decode-and-print code."""

from collections.abc import Iterable, Sequence

from jinja2 import Environment, PackageLoader

from .scanner import annotation_identifier, scan, split_lines
from .types import DispatchEntry, IdMarker, Markers, TypeMarker

env = Environment(
    loader=PackageLoader("protometa.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

template = env.get_template("dumper.py.j2")

UNKNOWN_TYPE = "UnknownType"


def collect_entries(lines: Iterable[str], markers: Markers) -> list[DispatchEntry]:
    """Pair each identifier marker with the next type declaration.

    Other lines in between never clear the pending identifier. A type
    declared with no identifier pending gets no entry, and a marker that
    never reaches a type declaration is dropped.

    Annotation lines left by the annotator count as markers, so an already
    annotated module yields the same entries as the original.
    """
    entries: list[DispatchEntry] = []
    pending: int | None = None

    for item in scan(lines, markers):
        if isinstance(item, IdMarker):
            pending = item.identifier
        elif isinstance(item, TypeMarker):
            if pending is not None:
                entries.append(DispatchEntry(identifier=pending, name=item.name))
                pending = None
        else:
            identifier = annotation_identifier(item.text, markers)
            if identifier is not None:
                pending = identifier

    return entries


def render(
    entries: list[DispatchEntry],
    decode_method: str = "decode",
    imports: Sequence[str] = (),
) -> str:
    """Render the dispatcher section for a list of entries."""
    return template.render(
        entries=entries,
        decode_method=decode_method,
        imports=imports,
    )


def dump_file(
    path: str,
    markers: Markers,
    decode_method: str = "decode",
    output: str | None = None,
    imports: Sequence[str] = (),
) -> list[DispatchEntry]:
    """Generate the dispatcher for a generated module.

    The dispatcher is appended to the module itself, unless an output
    path is given, in which case it is written there as its own module.
    """
    with open(path, encoding="utf-8", newline="") as f:
        text = f.read()

    lines, _ = split_lines(text)
    entries = collect_entries(lines, markers)
    generated = render(entries, decode_method=decode_method, imports=imports)

    if output is not None:
        with open(output, "w", encoding="utf-8") as f:
            f.write(generated)
        return entries

    separator = "\n\n" if text.endswith("\n") or not text else "\n\n\n"
    with open(path, "a", encoding="utf-8") as f:
        f.write(separator + generated)
    return entries
