"""
Custom exceptions for panel client operations.

Every failure raised by pterapy derives from :class:`PanelException`, so
callers can catch the whole family or a single category.
"""
from typing import Optional, Any

CLIENT_UNVERIFIED_ERROR = "Client is unverified, login to proceed"


class PanelException(Exception):
    """Base exception for all panel-related errors."""
    
    def __init__(self, message: str, status: Optional[int] = None) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            status: HTTP status code (if available)
        """
        self.message = message
        self.status = status
        super().__init__(message)


class PanelRequestError(PanelException):
    """Exception raised when an HTTP call to the panel fails."""
    pass


class PanelAPIError(PanelRequestError):
    """
    The panel answered, but not with a success status.
    
    ``error`` holds the first structured error of the response body
    (a ``StatusErrorDetail`` or ``SourceErrorDetail``), or ``None`` when
    the body carried no recognizable error.
    """
    
    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        error: Any = None
    ) -> None:
        self.error = error
        super().__init__(message, status)


class PanelAuthError(PanelRequestError):
    """The panel rejected the API key (HTTP 403)."""
    pass


class PanelConnectionError(PanelRequestError):
    """The request never reached the panel."""
    pass


class PanelUnverifiedError(PanelException):
    """Exception raised when the client has not logged in yet."""
    pass


class PanelOperationError(PanelException):
    """Exception raised when an operation does not apply to a node."""
    pass


class PanelConsistencyError(PanelException):
    """
    Exception raised when a re-listing after a mutation does not contain
    the expected entry.
    
    Attributes:
        directory: Directory that was re-listed
        name: Entry name that was expected
    """
    
    def __init__(
        self,
        message: str,
        directory: Optional[str] = None,
        name: Optional[str] = None
    ) -> None:
        self.directory = directory
        self.name = name
        super().__init__(message)
