"""Logging utilities for pterapy modules."""

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger that inherits from the root logger.
    
    The logger propagates to the root logger, so ``logging.basicConfig()``
    is enough to see pterapy output. When the root logger has no handlers
    yet, the logger defaults to WARNING to keep library output quiet.
    
    Args:
        name: Logger name (typically ``pterapy.<component>``)
        
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)
    
    return logger
