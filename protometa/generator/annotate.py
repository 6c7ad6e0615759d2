"""Identifier annotator: replaces identifier markers with decorator lines."""

from collections.abc import Iterable

from .scanner import join_lines, scan, split_lines
from .types import IdMarker, Markers, TypeMarker


def annotation_line(identifier: int, markers: Markers, indent: str = "") -> str:
    """Build the decorator line carrying a message identifier."""
    return f"{indent}@{markers.annotation}({identifier})"


def _annotation_for(identifier: int, line: str, markers: Markers) -> str:
    # Same indent and line ending as the line it sits next to.
    indent = line[: len(line) - len(line.lstrip())]
    ending = "\r" if line.endswith("\r") else ""
    return annotation_line(identifier, markers, indent) + ending


def _annotate(lines: Iterable[str], markers: Markers) -> tuple[list[str], int]:
    output: list[str] = []
    pending: int | None = None
    count = 0

    for item in scan(lines, markers):
        if isinstance(item, IdMarker):
            pending = item.identifier
            continue

        if pending is None:
            output.append(item.text)
            continue

        annotation = _annotation_for(pending, item.text, markers)
        if isinstance(item, TypeMarker):
            output.extend([annotation, item.text])
        else:
            output.extend([item.text, annotation])
        pending = None
        count += 1

    return output, count


def annotate_lines(lines: Iterable[str], markers: Markers) -> list[str]:
    """Rewrite lines, replacing each marker with an annotation line.

    Marker lines are dropped. The annotation goes right after the first
    line that follows a marker, so it joins that line's decorator stack,
    or right before it when that line is itself the type declaration.
    If markers repeat with nothing in between, only the last one counts,
    and a marker on the last line is discarded.
    """
    output, _ = _annotate(lines, markers)
    return output


def annotate_text(text: str, markers: Markers) -> tuple[str, int]:
    """Annotate source text.

    Returns:
        Tuple of (annotated text, number of annotations inserted).
    """
    lines, trailing_newline = split_lines(text)
    output, count = _annotate(lines, markers)
    return join_lines(output, trailing_newline), count


def annotate_file(path: str, markers: Markers) -> int:
    """Annotate a generated module in place.

    Returns:
        Number of annotation lines inserted.
    """
    with open(path, encoding="utf-8", newline="") as f:
        text = f.read()

    annotated, count = annotate_text(text, markers)

    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(annotated)
    return count
