"""Request construction and response classification."""
from .request_builder import RequestSpec, RequestBuilder
from .response_handler import ResponseHandler

__all__ = [
    'RequestSpec',
    'RequestBuilder',
    'ResponseHandler',
]
