"""Servers visible to a panel client."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Collection, Dict, Optional

from .core.api import RequestSpec
from .file_manager import FileManager

if TYPE_CHECKING:
    from .client import PanelClient


@dataclass(frozen=True)
class ServerLimits:
    """Resource limits of a server (memory, swap and disk in MB)."""
    memory: int = 0
    swap: int = 0
    disk: int = 0
    io: int = 0
    cpu: int = 0


@dataclass(frozen=True)
class Server:
    """
    A game server on the panel.

    Besides its attributes, a server is the handle its files use to reach
    the API: it knows its identifier and forwards requests to its client.
    """
    identifier: str
    uuid: str
    name: str
    node: str
    description: str = ""
    owner: bool = False
    suspended: bool = False
    installing: bool = False
    sftp_host: Optional[str] = None
    sftp_port: Optional[int] = None
    limits: ServerLimits = field(default_factory=ServerLimits)
    client: Optional[PanelClient] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_data(cls, data: Dict[str, Any], client: PanelClient) -> 'Server':
        """Builds a server from a ``server`` payload."""
        attributes = data["attributes"]
        sftp = attributes.get("sftp_details") or {}
        limits = attributes.get("limits") or {}

        return cls(
            identifier=attributes["identifier"],
            uuid=attributes.get("uuid", ""),
            name=attributes.get("name", ""),
            node=attributes.get("node", ""),
            description=attributes.get("description") or "",
            owner=attributes.get("server_owner", False),
            suspended=attributes.get("is_suspended", False),
            installing=attributes.get("is_installing", False),
            sftp_host=sftp.get("ip"),
            sftp_port=sftp.get("port"),
            limits=ServerLimits(**{k: limits.get(k) or 0 for k in ("memory", "swap", "disk", "io", "cpu")}),
            client=client
        )

    @property
    def verified(self) -> bool:
        return self.client is not None and self.client.verified

    async def request(self, spec: RequestSpec, suppress: Collection[int] = ()) -> Any:
        """Forward an API call to the owning client."""
        return await self.client.request(spec, suppress)

    async def download(self, url: str, dest: Path) -> Path:
        return await self.client.download(url, dest)

    async def get_file_manager(self) -> FileManager:
        """Fetch the root directory of this server."""
        self.client.ensure_verified()
        response = await self.request(
            RequestSpec.get(f"/api/client/servers/{self.identifier}/files/list")
        )
        return FileManager(response, self)
