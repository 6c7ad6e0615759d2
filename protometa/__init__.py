"""protometa - Message metadata extraction and code generation for protocol builds."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("protometa")
except PackageNotFoundError:
    __version__ = "(local)"
