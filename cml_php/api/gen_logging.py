"""
Logger hierarchy for the CML -> PHP pipeline.

Parser, resolver and emitter modules log through children of "cml.gen":

    from cml_php.api.gen_logging import get_logger
    logger = get_logger(__name__)      # cml_php.parser.model_parser -> cml.gen.model_parser

Nothing is printed until the CLI calls `configure_gen_logging`; library users
can attach their own handlers to "cml.gen" instead.
"""

import logging
import sys

_LOGGER_NAME = "cml.gen"


def get_logger(name: str = None) -> logging.Logger:
    """Child logger of cml.gen named after the last component of `name`."""
    if name is None or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    return logging.getLogger(f"{_LOGGER_NAME}.{name.rsplit('.', 1)[-1]}")


def resolve_level(verbose: bool = False, quiet: bool = False) -> int:
    """
    Map CLI flags to a level.

        -v / --verbose  -> DEBUG   (line-by-line parser and per-file emitter detail)
        (neither)       -> INFO    ([GENERATE] / [GENERATED] summary lines)
        -q / --quiet    -> WARNING (path rule and collision warnings only)

    `verbose` wins when both are given.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_gen_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Attach a single stderr handler to cml.gen, or retune the existing one."""
    level = resolve_level(verbose, quiet)
    root_logger = logging.getLogger(_LOGGER_NAME)
    root_logger.setLevel(level)

    # Repeated CLI invocations in one process reuse the handler
    for handler in root_logger.handlers:
        handler.setLevel(level)
        if isinstance(handler, logging.StreamHandler):
            handler.setStream(sys.stderr)
    if root_logger.handlers:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_GenFormatter())
    root_logger.addHandler(handler)
    root_logger.propagate = False


class _GenFormatter(logging.Formatter):
    """
    Message-only output. Warnings carry their level, debug records the
    component they came from (`[paths] OrderLine: path rule #1 -> ...`).
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno >= logging.WARNING:
            return f"[{record.levelname}] {message}"
        if record.levelno <= logging.DEBUG and record.name != _LOGGER_NAME:
            return f"[{record.name.rsplit('.', 1)[-1]}] {message.lstrip()}"
        return message
