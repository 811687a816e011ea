"""
PanelClient - High-level async client for the panel's client API.

Example:
    >>> async with PanelClient("https://panel.example.com", "ptlc_...") as panel:
    ...     server = await panel.get_server("1a2b3c4d")
    ...     manager = await server.get_file_manager()
    ...     for file in manager:
    ...         print(file.name)
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Collection, Dict, List, Literal, Optional

from .core.api import APIConfig, AsyncAPIClient, RequestSpec
from .core.exceptions import CLIENT_UNVERIFIED_ERROR, PanelUnverifiedError
from .core.logging import get_logger
from .server import Server

FilterLevel = Literal["all", "admin", "owner", "subuser-of"]


@dataclass(frozen=True)
class Account:
    """The account tied to an API key."""
    id: int
    admin: bool
    username: str
    email: str
    first_name: str = ""
    last_name: str = ""
    language: str = "en"

    @classmethod
    def from_data(cls, data: Dict[str, Any]) -> 'Account':
        attributes = data["attributes"]
        return cls(
            id=attributes["id"],
            admin=attributes.get("admin", False),
            username=attributes.get("username", ""),
            email=attributes.get("email", ""),
            first_name=attributes.get("first_name", ""),
            last_name=attributes.get("last_name", ""),
            language=attributes.get("language", "en")
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class PanelClient:
    """
    Client for one panel host, authenticated by a client API key.

    :meth:`login` must succeed before any other call; until then every
    operation raises :class:`PanelUnverifiedError` without touching the
    network. Using the client as an async context manager logs in on entry
    and closes the HTTP session on exit.
    """

    def __init__(self, host: str, api_key: str, *, config: Optional[APIConfig] = None):
        """
        Initialize panel client.

        Args:
            host: Panel base URL (a trailing ``/`` is dropped)
            api_key: Client API key
            config: Optional API configuration
        """
        self._api = AsyncAPIClient(host, api_key, config)
        self._logger = get_logger('pterapy.client')
        self.verified = False
        self.account: Optional[Account] = None

    @property
    def host(self) -> str:
        return self._api.host

    @property
    def token(self) -> str:
        return self._api.token

    async def __aenter__(self) -> 'PanelClient':
        await self.login()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the HTTP session."""
        await self._api.close()

    def ensure_verified(self):
        """Ensure the client has logged in."""
        if not self.verified:
            raise PanelUnverifiedError(CLIENT_UNVERIFIED_ERROR)

    async def login(self) -> bool:
        """
        Verify the API key and load the account.

        Returns:
            True once verified; failures raise
        """
        if self.verified:
            return True

        response = await self._api.execute(RequestSpec.get("/api/client/account"))
        self.account = Account.from_data(response)
        self.verified = True
        self._logger.info(f"Logged in to {self.host} as {self.account.username}")
        return True

    async def request(self, spec: RequestSpec, suppress: Collection[int] = ()) -> Any:
        """Perform an authenticated API call."""
        self.ensure_verified()
        return await self._api.execute(spec, suppress)

    async def download(self, url: str, dest: Path) -> Path:
        """Stream a download URL into ``dest``."""
        self.ensure_verified()
        return await self._api.download(url, dest)

    async def get_servers(self, filter_level: FilterLevel = "subuser-of") -> List[Server]:
        """
        List the servers the account can access.

        Args:
            filter_level: ``all``, ``admin``, ``owner`` or ``subuser-of``
        """
        response = await self.request(RequestSpec.get("/api/client", type=filter_level))
        return [Server.from_data(data, self) for data in response.get("data", [])]

    async def get_owned_servers(self) -> List[Server]:
        """Shorthand for ``get_servers("owner")``."""
        return await self.get_servers("owner")

    async def get_server(self, identifier: str) -> Server:
        """Fetch one server by its short identifier."""
        response = await self.request(RequestSpec.get(f"/api/client/servers/{identifier}"))
        return Server.from_data(response, self)

    async def get_server_permissions(self, identifier: str) -> List[str]:
        """Permission strings the account holds on a server."""
        response = await self.request(RequestSpec.get(f"/api/client/servers/{identifier}"))
        return response.get("meta", {}).get("user_permissions", [])
