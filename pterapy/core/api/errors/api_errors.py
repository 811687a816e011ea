"""Structured error bodies returned by the panel API."""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class StatusErrorDetail:
    """Error element shaped ``{code, status, detail}``."""
    code: str
    status: str
    detail: str

    @property
    def message(self) -> str:
        return f"{self.code} ({self.status}): {self.detail}"


@dataclass(frozen=True)
class SourceErrorDetail:
    """Error element shaped ``{code, source, detail}`` (validation errors)."""
    code: str
    source: Dict[str, Any]
    detail: str

    @property
    def message(self) -> str:
        return self.detail


ErrorDetail = Union[StatusErrorDetail, SourceErrorDetail]


def parse_error_detail(element: Any) -> Optional[ErrorDetail]:
    """
    Parse one element of an ``errors`` list into its variant.

    Returns:
        The matching variant, or None when the element has neither shape
    """
    match element:
        case {"code": code, "status": status, "detail": detail} if code and status and detail:
            return StatusErrorDetail(code=code, status=str(status), detail=detail)
        case {"code": code, "source": source, "detail": detail} if code and source and detail:
            return SourceErrorDetail(code=code, source=source, detail=detail)
    return None


def first_error_detail(body: Any) -> Optional[ErrorDetail]:
    """Return the first recognizable error of a response body, if any."""
    if not isinstance(body, dict):
        return None

    errors: List[Any] = body.get("errors") or []
    if not isinstance(errors, list):
        return None

    for element in errors:
        detail = parse_error_detail(element)
        if detail is not None:
            return detail
    return None
