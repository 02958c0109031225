# src/regexpomatic/core/logging.py
"""Structured logging for regexp-o-matic.

Library modules only ever call ``get_logger(__name__)`` and log events with
keyword fields. Rendering, levels and handlers belong to the embedding host,
which configures structlog (and stdlib logging, if it routes through it)
once at startup.
"""

import structlog


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a bound logger for a module.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Bound structlog logger.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
