"""Command-line interface for protometa code generation."""

from __future__ import annotations

import json
import sys
from collections import Counter
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, NoReturn

import click
from rich.console import Console
from rich.table import Table

from protometa.generator import annotate, config, dumper, flags
from protometa.generator.errors import GenerationError
from protometa.generator.scanner import split_lines
from protometa.generator.types import Markers

if TYPE_CHECKING:
    from protometa.generator.types import ConfigRow, DispatchEntry

_DEFAULTS = Markers()


def _marker_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the options describing generated source markers."""
    func = click.option(
        "--annotation",
        default=_DEFAULTS.annotation,
        show_default=True,
        help="Decorator name written in place of identifier markers",
    )(func)
    func = click.option(
        "--type-pattern",
        default=_DEFAULTS.type_pattern,
        show_default=True,
        help="Regex matching a type declaration; group 1 is the type name",
    )(func)
    func = click.option(
        "--id-marker",
        default=_DEFAULTS.id_marker,
        show_default=True,
        help="Text marking a line that carries a message identifier",
    )(func)
    return func


def _dumper_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the options shaping the generated debug dispatcher."""
    func = click.option(
        "--import",
        "imports",
        multiple=True,
        help="Module to star-import in the dispatcher (repeatable)",
    )(func)
    func = click.option(
        "--decode-method",
        default="decode",
        show_default=True,
        help="Classmethod each message type uses to decode bytes",
    )(func)
    return func


def _fail(message: str) -> NoReturn:
    Console().print(f"Error: {message}", style="bold red", markup=False, highlight=False)
    sys.exit(1)


@click.group()
def cli() -> None:
    """protometa message metadata generator."""


@cli.command("flags")
@click.option("--input", "-i", "input_file", required=True, help="Configuration table (CSV)")
@click.option("--output", "-o", "output_file", required=True, help="Output module")
def flags_cmd(input_file: str, output_file: str) -> None:
    """Generate the message flags lookup from a configuration table."""
    try:
        rows = flags.compile_flags(input_file, output_file)
    except GenerationError as e:
        _fail(str(e))

    Console().print(f"Wrote {len(rows)} flag entries to {output_file}", highlight=False)


@cli.command("annotate")
@click.option("--input", "-i", "input_file", required=True, help="Generated message module")
@_marker_options
def annotate_cmd(input_file: str, id_marker: str, type_pattern: str, annotation: str) -> None:
    """Replace identifier markers with annotations, in place."""
    markers = Markers(id_marker=id_marker, type_pattern=type_pattern, annotation=annotation)
    try:
        count = annotate.annotate_file(input_file, markers)
    except GenerationError as e:
        _fail(str(e))

    Console().print(f"Annotated {count} message types in {input_file}", highlight=False)


@cli.command("dump")
@click.option("--input", "-i", "input_file", required=True, help="Generated message module")
@click.option(
    "--output", "-o", "output_file", default=None, help="Write a separate module instead of appending"
)
@_marker_options
@_dumper_options
def dump_cmd(
    input_file: str,
    output_file: str | None,
    id_marker: str,
    type_pattern: str,
    annotation: str,
    decode_method: str,
    imports: tuple[str, ...],
) -> None:
    """Generate the debug dispatcher for a generated message module."""
    markers = Markers(id_marker=id_marker, type_pattern=type_pattern, annotation=annotation)
    try:
        entries = dumper.dump_file(
            input_file, markers, decode_method=decode_method, output=output_file, imports=imports
        )
    except GenerationError as e:
        _fail(str(e))

    target = output_file or input_file
    Console().print(f"Wrote {len(entries)} dispatch entries to {target}", highlight=False)


@cli.command("gen")
@click.option("--input", "-i", "input_file", required=True, help="Generated message module")
@click.option(
    "--dump/--no-dump", default=True, show_default=True, help="Append the debug dispatcher"
)
@_marker_options
@_dumper_options
def gen_cmd(
    input_file: str,
    dump: bool,
    id_marker: str,
    type_pattern: str,
    annotation: str,
    decode_method: str,
    imports: tuple[str, ...],
) -> None:
    """Annotate a generated message module, then append its dispatcher."""
    markers = Markers(id_marker=id_marker, type_pattern=type_pattern, annotation=annotation)
    console = Console()

    # The dispatcher appends to the file the annotator rewrites, so it runs second.
    try:
        count = annotate.annotate_file(input_file, markers)
        console.print(f"Annotated {count} message types in {input_file}", highlight=False)
        if dump:
            entries = dumper.dump_file(
                input_file, markers, decode_method=decode_method, imports=imports
            )
            console.print(
                f"Wrote {len(entries)} dispatch entries to {input_file}", highlight=False
            )
    except GenerationError as e:
        _fail(str(e))


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Generated message module")
@click.option("--config", "-c", "config_file", default=None, help="Configuration table (CSV)")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@_marker_options
def info(
    input_file: str,
    config_file: str | None,
    output_json: bool,
    id_marker: str,
    type_pattern: str,
    annotation: str,
) -> None:
    """Display message identifiers, types and flags without writing anything."""
    markers = Markers(id_marker=id_marker, type_pattern=type_pattern, annotation=annotation)
    try:
        with open(input_file, encoding="utf-8", newline="") as f:
            lines, _ = split_lines(f.read())
        entries = dumper.collect_entries(lines, markers)
        rows = config.read_config(config_file) if config_file else []
    except GenerationError as e:
        _fail(str(e))

    if output_json:
        _output_json(entries, rows)
    else:
        _output_plain(entries, rows, show_flags=config_file is not None)


def _first_flags(rows: list[ConfigRow]) -> dict[int, int]:
    """Map identifiers to flags the way the generated lookup resolves them."""
    result: dict[int, int] = {}
    for row in rows:
        result.setdefault(row.identifier, row.flags)
    return result


def _output_json(entries: list[DispatchEntry], rows: list[ConfigRow]) -> None:
    """Output entries and flag rows as JSON."""
    data = {
        "entries": [entry.to_dict() for entry in entries],
        "flags": [row.to_dict() for row in rows],
    }
    print(json.dumps(data, indent=2))


def _output_plain(entries: list[DispatchEntry], rows: list[ConfigRow], show_flags: bool) -> None:
    """Output entries using rich text formatting."""
    console = Console()
    flag_map = _first_flags(rows)
    id_counts = Counter(entry.identifier for entry in entries)

    console.print("[bold cyan]Messages[/bold cyan]")
    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("Msg ID", style="green", justify="right")
    table.add_column("Type", style="white")
    if show_flags:
        table.add_column("Flags", style="yellow", justify="right")

    for entry in entries:
        msg_id = str(entry.identifier)
        if id_counts[entry.identifier] > 1:
            msg_id = f"[bold red]{msg_id}*[/bold red]"
        cells = [msg_id, entry.name]
        if show_flags:
            cells.append(f"0x{flag_map.get(entry.identifier, 0):02x}")
        table.add_row(*cells)

    console.print(table)

    if any(count > 1 for count in id_counts.values()):
        console.print()
        console.print(
            "[dim]* identifier used by more than one type; the first one wins[/dim]"
        )

    if show_flags:
        unmatched = [row for row in rows if row.identifier not in id_counts]
        if unmatched:
            console.print()
            console.print(f"[dim]{len(unmatched)} flag rows have no matching type[/dim]")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
