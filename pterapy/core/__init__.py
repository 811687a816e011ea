"""Core building blocks: API transport, paths, errors and logging."""
from .exceptions import (
    PanelException,
    PanelRequestError,
    PanelAPIError,
    PanelAuthError,
    PanelConnectionError,
    PanelUnverifiedError,
    PanelOperationError,
    PanelConsistencyError
)
from .path import PathResolver
from .files import FilesEndpoint
from .protocols import ServerHandle

__all__ = [
    'PanelException',
    'PanelRequestError',
    'PanelAPIError',
    'PanelAuthError',
    'PanelConnectionError',
    'PanelUnverifiedError',
    'PanelOperationError',
    'PanelConsistencyError',
    'PathResolver',
    'FilesEndpoint',
    'ServerHandle',
]
