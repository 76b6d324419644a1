"""
Logging setup for scripts using ltspec.

Library modules only create ``logging.getLogger(__name__)`` loggers; the
package root attaches a ``NullHandler``. Call ``configure_logging`` from a
script to actually see the messages.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level=logging.INFO) -> logging.Logger:
    """
    Attach a stream handler to the ``ltspec`` logger.

    Parameters
    ----------
    level : int or str
        Logging level, e.g. ``logging.DEBUG`` or ``"DEBUG"``.

    Returns
    -------
    logger : logging.Logger
        The package logger.
    """
    logger = logging.getLogger("ltspec")
    logger.setLevel(level)

    # avoid stacking handlers on repeated calls
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.NullHandler):
            handler.setLevel(level)
            return logger

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger
