"""
pterapy - Async Python client for the Pterodactyl panel client API.

Usage:
    >>> from pterapy import PanelClient
    >>> 
    >>> async with PanelClient("https://panel.example.com", "ptlc_...") as panel:
    ...     server = await panel.get_server("1a2b3c4d")
    ...     manager = await server.get_file_manager()
    ...     for file in manager:
    ...         print(file.location)
"""
import logging
from .client import PanelClient, Account
from .server import Server, ServerLimits
from .file import File, FileAccess
from .file_manager import FileManager

# Configuration
from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    AsyncAPIClient,
    RequestSpec
)

# Errors
from .core.exceptions import (
    PanelException,
    PanelRequestError,
    PanelAPIError,
    PanelAuthError,
    PanelConnectionError,
    PanelUnverifiedError,
    PanelOperationError,
    PanelConsistencyError
)

from .core.path import PathResolver

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for pterapy modules.
    
    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'pterapy',
        'pterapy.api',
        'pterapy.client',
        'pterapy.files',
    ]
    
    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'PanelClient',
    'Account',
    'Server',
    'ServerLimits',
    'File',
    'FileAccess',
    'FileManager',
    'PathResolver',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'AsyncAPIClient',
    'RequestSpec',
    'PanelException',
    'PanelRequestError',
    'PanelAPIError',
    'PanelAuthError',
    'PanelConnectionError',
    'PanelUnverifiedError',
    'PanelOperationError',
    'PanelConsistencyError',
    'setup_logging',
]
