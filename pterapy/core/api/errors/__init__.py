"""Panel API error bodies."""
from .api_errors import (
    StatusErrorDetail,
    SourceErrorDetail,
    ErrorDetail,
    parse_error_detail,
    first_error_detail
)

__all__ = [
    'StatusErrorDetail',
    'SourceErrorDetail',
    'ErrorDetail',
    'parse_error_detail',
    'first_error_detail',
]
