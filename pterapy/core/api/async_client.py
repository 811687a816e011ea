"""
Async panel API client.

Issues one HTTP call at a time and translates its outcome into either a
payload or a typed exception.
"""
import asyncio
import logging
import socket
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Collection, Iterator, Optional

import aiofiles
import aiofiles.os
import aiohttp

from .config import APIConfig
from .request import RequestBuilder, RequestSpec, ResponseHandler
from ..exceptions import PanelConnectionError

CONNECTION_REFUSED_MESSAGE = "Unable to connect to host, connection refused"
HOST_NOT_FOUND_MESSAGE = "Unable to connect to host, host not found"
PARTIAL_SUFFIX = ".part"


class AsyncAPIClient:
    """
    Asynchronous panel API client.

    Features:
    - Full async/await support
    - Configurable proxy, SSL, timeouts
    - Connection pooling through a lazily created session
    - Bearer-token authentication on every request

    No request is ever retried: each failure is raised exactly once.

    Example:
        >>> async with AsyncAPIClient("https://panel.example.com", "key") as api:
        ...     account = await api.execute(RequestSpec.get("/api/client/account"))
    """

    def __init__(self, host: str, token: str, config: Optional[APIConfig] = None):
        """
        Initialize async API client.

        Args:
            host: Panel base URL
            token: Client API key
            config: API configuration (uses defaults if not provided)
        """
        self._config = config or APIConfig.default()
        self._builder = RequestBuilder(host, token)
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None

        from ..logging import get_logger
        self._logger = get_logger('pterapy.api')
        root_logger = logging.getLogger()
        if not root_logger.handlers:
            self._logger.setLevel(self._config.log_level)

    @property
    def host(self) -> str:
        return self._builder.host

    @property
    def token(self) -> str:
        return self._builder.token

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    async def __aenter__(self) -> 'AsyncAPIClient':
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                **self._config.get_session_kwargs()
            )
        return self._session

    async def close(self):
        """Close client and release resources."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

        if self._connector and not self._connector.closed:
            await self._connector.close()
        self._connector = None

    async def execute(self, spec: RequestSpec, suppress: Collection[int] = ()) -> Any:
        """
        Perform one API call.

        Args:
            spec: Request description
            suppress: Non-200 statuses that also count as success (e.g. 204)

        Returns:
            Decoded response payload (None for an empty body)

        Raises:
            PanelAuthError: The API key was rejected (403)
            PanelAPIError: The panel answered with an error
            PanelConnectionError: The panel could not be reached
        """
        session = await self._ensure_session()
        url = self._builder.build_url(spec)

        self._logger.debug(f"{spec.method} {url} params={spec.params}")

        with self._network_errors():
            async with session.request(
                spec.method,
                url,
                **self._config.get_request_kwargs(),
                **self._builder.build_kwargs(spec)
            ) as response:
                text = await self._read_text(response)
                status = response.status
                reason = response.reason
                content_type = response.content_type

        self._logger.debug(f"Response {status} from {url}: {text[:300]}")

        body = ResponseHandler.parse_body(text, content_type)
        return ResponseHandler.process_response(status, reason, body, suppress)

    async def download(self, url: str, dest: Path, chunk_size: int = 64 * 1024) -> Path:
        """
        Stream a one-time download URL into a local file.

        The URL carries its own signature, so no Authorization header is sent.

        Args:
            url: Download URL returned by the panel
            dest: Local file to write
            chunk_size: Bytes read per chunk

        Returns:
            ``dest``. The file appears only once the stream completed;
            an interrupted download leaves nothing behind.
        """
        session = await self._ensure_session()
        partial = dest.with_name(dest.name + PARTIAL_SUFFIX)
        self._logger.debug(f"Downloading {url} to {dest}")

        with self._network_errors():
            async with session.get(
                url,
                timeout=self._config.timeout.to_download_timeout(),
                **self._config.get_request_kwargs()
            ) as response:
                if response.status != 200:
                    body = ResponseHandler.parse_body(await self._read_text(response), response.content_type)
                    ResponseHandler.process_response(response.status, response.reason, body)

                try:
                    async with aiofiles.open(partial, 'wb') as f:
                        async for chunk in response.content.iter_chunked(chunk_size):
                            await f.write(chunk)
                except BaseException:
                    if await aiofiles.os.path.exists(partial):
                        await aiofiles.os.remove(partial)
                    raise

        await aiofiles.os.replace(partial, dest)
        return dest

    @staticmethod
    async def _read_text(response: aiohttp.ClientResponse) -> str:
        """
        Decodes a response body without failing on invalid bytes.

        File contents may be binary (jars, archives); undecodable bytes
        become U+FFFD.
        """
        raw = await response.read()
        try:
            return raw.decode(response.charset or 'utf-8', errors='replace')
        except LookupError:
            return raw.decode('utf-8', errors='replace')

    @contextmanager
    def _network_errors(self) -> Iterator[None]:
        """Translates aiohttp failures into PanelConnectionError."""
        try:
            yield
        except aiohttp.ClientConnectorError as e:
            self._logger.debug(f"Connection error: {e}")
            raise self._translate_connector_error(e) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._logger.debug(f"Network error: {e}")
            raise PanelConnectionError(f"Network error: {e}") from e

    @staticmethod
    def _translate_connector_error(error: aiohttp.ClientConnectorError) -> PanelConnectionError:
        """Maps a connector failure to its fixed category message."""
        if isinstance(error, aiohttp.ClientConnectorDNSError) or isinstance(error.os_error, socket.gaierror):
            return PanelConnectionError(HOST_NOT_FOUND_MESSAGE)
        if isinstance(error.os_error, ConnectionRefusedError):
            return PanelConnectionError(CONNECTION_REFUSED_MESSAGE)
        return PanelConnectionError(f"Network error: {error}")
