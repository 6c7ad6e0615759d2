"""Errors raised while generating code."""


class GenerationError(RuntimeError):
    """Raised when generation cannot continue."""


class ConfigError(GenerationError):
    """Raised when the configuration table is malformed."""


class MarkerError(GenerationError):
    """Raised when an identifier marker has no usable identifier."""
