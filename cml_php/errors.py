"""Exception types raised by the CML -> PHP pipeline.

Parsing never raises for malformed CML. Only configuration problems and
unexpected failures inside the generator surface as exceptions.
"""


class CMLError(Exception):
    """Base class for all errors raised by cml_php."""


class ConfigError(CMLError):
    """A generator configuration could not be loaded or is invalid."""


class GenerationError(CMLError):
    """The generation pipeline failed; no partial output is returned."""

    def __init__(self, message: str, unit: str = None):
        self.unit = unit
        if unit:
            message = f"{message} (while generating '{unit}')"
        super().__init__(message)


class PathCollisionError(GenerationError):
    """Two generated units resolved to the same output path."""

    def __init__(self, path: str, first: str, second: str):
        self.path = path
        self.first = first
        self.second = second
        super().__init__(
            f"Output path '{path}' is produced by both '{first}' and '{second}'."
        )
