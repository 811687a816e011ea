"""
Protocol definitions for the file layer.

Files and file managers only need a narrow handle on their server, not
the full Server or PanelClient types.
"""
from pathlib import Path
from typing import Any, Collection, Protocol

from .api.request import RequestSpec


class ServerHandle(Protocol):
    """Capability a file node needs from its owning server."""

    @property
    def identifier(self) -> str:
        """Short server identifier used in per-server URLs."""
        ...

    @property
    def verified(self) -> bool:
        """Whether the owning client has logged in."""
        ...

    async def request(self, spec: RequestSpec, suppress: Collection[int] = ()) -> Any:
        """
        Perform an authenticated API call.

        Args:
            spec: Request description
            suppress: Non-200 statuses that count as success

        Returns:
            Decoded response payload
        """
        ...

    async def download(self, url: str, dest: Path) -> Path:
        """Stream ``url`` into the local file ``dest`` and return it."""
        ...
