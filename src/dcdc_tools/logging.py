"""
dcdc-tools Logging

All messages go to the ``dcdc_tools`` logger, which stays silent until
``enable_verbose`` attaches a console handler (the ``--verbose`` flag of
the CLI does this at DEBUG).

Levels used by the package:

- DEBUG: every part added and every net joined while a circuit is built,
  an unbounded minimum inductance, and the values picked by ``solve``.
- INFO: the assembly steps of a converter (start of assembly, bootstrap
  network added, low-side conduction path added).
- WARNING: a design whose output voltage can reach its input voltage, so
  the duty cycle can reach 100%.

Applications that configure ``logging`` themselves can attach their own
handlers to the ``dcdc_tools`` logger instead.
"""

import logging

DEFAULT_FORMAT = "[%(levelname)s] %(message)s"

_logger = logging.getLogger("dcdc_tools")
_logger.addHandler(logging.NullHandler())


def _remove_console_handlers() -> None:
    for handler in _logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            _logger.removeHandler(handler)


def enable_verbose(level: str = "INFO", format: str | None = None) -> None:
    """Print package log messages to stderr.

    "INFO" shows the converter assembly steps; "DEBUG" adds each part and
    net connection and the sizing results. Calling it again replaces the
    previous console handler.

    Args:
        level: Logging level name ("DEBUG", "INFO", "WARNING")
        format: Optional format string; defaults to ``DEFAULT_FORMAT``

    Example:
        enable_verbose("DEBUG")
        architecture.assemble(circuit, controller)  # [DEBUG] Connected ...
        disable_verbose()
    """
    numeric = getattr(logging, level.upper())
    _logger.setLevel(numeric)
    _remove_console_handlers()

    handler = logging.StreamHandler()
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(format or DEFAULT_FORMAT))
    _logger.addHandler(handler)


def disable_verbose() -> None:
    """Drop the console handler; only warnings reach the logger afterwards."""
    _logger.setLevel(logging.WARNING)
    _remove_console_handlers()


def _log_debug(msg: str) -> None:
    _logger.debug(msg)


def _log_info(msg: str) -> None:
    _logger.info(msg)


def _log_warning(msg: str) -> None:
    _logger.warning(msg)
