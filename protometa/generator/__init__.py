"""protometa code generator."""

from .annotate import annotate_file as annotate_file
from .annotate import annotate_lines as annotate_lines
from .config import parse_config as parse_config
from .dumper import collect_entries as collect_entries
from .dumper import dump_file as dump_file
from .errors import *
from .flags import compile_flags as compile_flags
from .types import *
