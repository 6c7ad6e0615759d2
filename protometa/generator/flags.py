"""Flag table compiler: configuration rows to a message flags lookup module."""

from jinja2 import Environment, PackageLoader

from .config import read_config
from .types import ConfigRow

env = Environment(
    loader=PackageLoader("protometa.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

template = env.get_template("flags.py.j2")


def render(rows: list[ConfigRow]) -> str:
    """Render configuration rows to Python source.

    Rows are emitted in order, so for a duplicated identifier the first
    row wins and later ones are unreachable.
    """
    return template.render(rows=rows)


def compile_flags(config_path: str, output_path: str) -> list[ConfigRow]:
    """Generate the flags module for a configuration table file."""
    rows = read_config(config_path)
    generated_file = render(rows)

    with open(output_path, "w", encoding="utf-8") as f:
        f.write(generated_file)
    return rows
