"""Logger helpers shared across the exporter."""

import logging

ROOT_LOGGER = "brother_exporter"


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the exporter's logger hierarchy.

    Module names from inside the package are used as-is; any other name
    is nested under ``brother_exporter``.
    """
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def log_exception(message: str, **attributes: str | int | float | bool) -> None:
    """Log the exception currently being handled, with traceback.

    Must be called from inside an ``except`` block.

    Args:
        message: The log message
        **attributes: Additional structured fields
    """
    get_logger(ROOT_LOGGER).error(message, exc_info=True, extra=attributes)
