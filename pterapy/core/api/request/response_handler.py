"""Response handler for panel API responses."""
import json
from typing import Any, Collection, Optional

from ..errors import first_error_detail
from ...exceptions import PanelAPIError, PanelAuthError

INVALID_KEY_MESSAGE = "Invalid API key provided, request failed"


class ResponseHandler:
    """Decodes response bodies and classifies completed responses."""

    @staticmethod
    def parse_body(text: str, content_type: Optional[str] = None) -> Any:
        """
        Decodes a response body.

        JSON bodies are decoded, other bodies are returned as text and an
        empty body becomes None.
        """
        if not text:
            return None

        if content_type and 'json' in content_type:
            try:
                return json.loads(text)
            except json.JSONDecodeError:
                return text

        return text

    @staticmethod
    def is_success(status: int, suppress: Collection[int] = ()) -> bool:
        """Checks whether a status counts as success for this call."""
        return status == 200 or status in suppress

    @staticmethod
    def build_error(status: int, reason: Optional[str], body: Any) -> PanelAPIError:
        """Builds the domain error for a completed, unsuccessful response."""
        detail = first_error_detail(body)
        if detail is not None:
            return PanelAPIError(detail.message, status=status, error=detail)

        return PanelAPIError(
            f"An unexpected error occurred ({status}): {reason or ''}",
            status=status
        )

    @classmethod
    def process_response(
        cls,
        status: int,
        reason: Optional[str],
        body: Any,
        suppress: Collection[int] = ()
    ) -> Any:
        """
        Returns the payload of a successful response or raises.

        Raises:
            PanelAuthError: On HTTP 403
            PanelAPIError: On any other non-success status
        """
        if status == 403:
            raise PanelAuthError(INVALID_KEY_MESSAGE, status=status)

        if cls.is_success(status, suppress):
            return body

        raise cls.build_error(status, reason, body)
