"""Panel API module."""
from .errors import StatusErrorDetail, SourceErrorDetail, ErrorDetail
from .config import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig
from .request import RequestSpec, RequestBuilder, ResponseHandler
from .async_client import AsyncAPIClient

__all__ = [
    # Client
    'AsyncAPIClient',

    # Requests
    'RequestSpec',
    'RequestBuilder',
    'ResponseHandler',

    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',

    # Errors
    'StatusErrorDetail',
    'SourceErrorDetail',
    'ErrorDetail',
]
