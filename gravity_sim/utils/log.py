"""Logging setup for host applications and scripts."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level=logging.INFO, fmt: str = LOG_FORMAT) -> logging.Logger:
    """Attach a stream handler to the package logger.
    
    Args:
        level: Logging level for the ``gravity_sim`` logger
        fmt: Record format
        
    Returns:
        The package logger
    """
    logger = logging.getLogger("gravity_sim")
    logger.setLevel(level)
    if not any(getattr(h, "_gravity_sim", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt))
        handler._gravity_sim = True
        logger.addHandler(handler)
    return logger
