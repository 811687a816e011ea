"""Request builder for panel API requests."""
from dataclasses import dataclass
from typing import Any, Dict, Optional

JSON_CONTENT = 'application/json'
TEXT_CONTENT = 'text/plain'


@dataclass(frozen=True)
class RequestSpec:
    """
    Description of one API call, independent of host and credentials.

    Attributes:
        method: HTTP method
        path: Path below the panel host (``/api/client/...``)
        params: Query string parameters
        json: JSON body
        data: Raw text body (used by file writes)
        content_type: Content-Type header of the body
    """
    method: str
    path: str
    params: Optional[Dict[str, str]] = None
    json: Any = None
    data: Optional[str] = None
    content_type: str = JSON_CONTENT

    @classmethod
    def get(cls, path: str, **params: str) -> 'RequestSpec':
        return cls('GET', path, params=params or None)

    @classmethod
    def post(cls, path: str, json: Any = None, **params: str) -> 'RequestSpec':
        return cls('POST', path, params=params or None, json=json)

    @classmethod
    def put(cls, path: str, json: Any = None) -> 'RequestSpec':
        return cls('PUT', path, json=json)

    @classmethod
    def text(cls, path: str, data: str, **params: str) -> 'RequestSpec':
        """POST a raw text body."""
        return cls('POST', path, params=params or None, data=data, content_type=TEXT_CONTENT)


class RequestBuilder:
    """Builds URLs and headers for a panel host."""

    def __init__(self, host: str, token: str):
        """Initializes request builder."""
        self.host = host.rstrip('/')
        self.token = token

    def build_url(self, spec: RequestSpec) -> str:
        """Builds request URL."""
        return f"{self.host}{spec.path}"

    def build_headers(self, spec: RequestSpec) -> Dict[str, str]:
        """Builds request headers."""
        return {
            'Accept': JSON_CONTENT,
            'Content-Type': spec.content_type,
            'Authorization': f"Bearer {self.token}",
        }

    def build_kwargs(self, spec: RequestSpec) -> Dict[str, Any]:
        """Builds keyword arguments for ``ClientSession.request``."""
        kwargs: Dict[str, Any] = {'headers': self.build_headers(spec)}
        if spec.params:
            kwargs['params'] = spec.params
        if spec.data is not None:
            kwargs['data'] = spec.data.encode('utf-8')
        elif spec.json is not None:
            kwargs['json'] = spec.json
        return kwargs
