"""
Per-server file namespace of the panel API.

Wraps the ``/api/client/servers/<identifier>/files/*`` endpoints and the
read-back used after mutations: the panel does not echo renamed, written
or created entries, so callers re-list the parent directory and match the
entry by name.
"""
from typing import Any, Collection, Dict, List, Optional

from .api.request import RequestSpec
from .exceptions import (
    CLIENT_UNVERIFIED_ERROR,
    PanelConsistencyError,
    PanelUnverifiedError
)
from .logging import get_logger
from .path import PathResolver
from .protocols import ServerHandle

NO_CONTENT = (204,)

logger = get_logger('pterapy.files')


class FilesEndpoint:
    """File operations of one server, returning raw listing payloads."""

    def __init__(self, server: ServerHandle):
        self._server = server

    @property
    def server(self) -> ServerHandle:
        return self._server

    def _path(self, action: str) -> str:
        return f"/api/client/servers/{self._server.identifier}/files/{action}"

    def ensure_verified(self) -> None:
        """Raises PanelUnverifiedError when the owning client has not logged in."""
        if not self._server.verified:
            raise PanelUnverifiedError(CLIENT_UNVERIFIED_ERROR)

    async def _request(self, spec: RequestSpec, suppress: Collection[int] = ()) -> Any:
        self.ensure_verified()
        return await self._server.request(spec, suppress)

    # =========================================================================
    # Reads
    # =========================================================================

    async def list_directory(self, directory: str = "/") -> List[Dict[str, Any]]:
        """Returns the raw ``file_object`` entries of a directory."""
        response = await self._request(RequestSpec.get(
            self._path("list"),
            directory=PathResolver.query_directory(directory)
        ))
        return list(response.get("data", [])) if response else []

    async def get_contents(self, file: str) -> Any:
        return await self._request(RequestSpec.get(self._path("contents"), file=file))

    async def get_download_url(self, file: str) -> str:
        response = await self._request(RequestSpec.get(self._path("download"), file=file))
        return response["attributes"]["url"]

    async def find_entry(self, directory: str, name: str) -> Optional[Dict[str, Any]]:
        """Re-lists ``directory`` and returns the entry called ``name``, if present."""
        for entry in await self.list_directory(directory):
            if entry["attributes"]["name"] == name:
                return entry
        return None

    async def require_entry(self, directory: str, name: str, message: str) -> Dict[str, Any]:
        """
        Like :meth:`find_entry`, but a missing entry is a consistency fault.

        Raises:
            PanelConsistencyError: The listing does not contain ``name``
        """
        entry = await self.find_entry(directory, name)
        if entry is None:
            logger.debug(f"'{name}' missing from listing of '{directory}'")
            raise PanelConsistencyError(message, directory=directory, name=name)
        return entry

    # =========================================================================
    # Mutations
    # =========================================================================

    async def write(self, file: str, contents: str) -> None:
        logger.debug(f"Writing {len(contents)} characters to {file}")
        await self._request(
            RequestSpec.text(self._path("write"), contents, file=file),
            NO_CONTENT
        )

    async def rename(self, root: str, from_name: str, to_name: str) -> None:
        logger.debug(f"Renaming {from_name} -> {to_name} in {root}")
        await self._request(RequestSpec.put(self._path("rename"), json={
            "root": root,
            "files": [{"from": from_name, "to": to_name}]
        }), NO_CONTENT)

    async def copy(self, location: str) -> None:
        logger.debug(f"Copying to {location}")
        await self._request(
            RequestSpec.post(self._path("copy"), json={"location": location}),
            NO_CONTENT
        )

    async def create_folder(self, root: str, name: str) -> None:
        logger.debug(f"Creating folder {name} in {root}")
        await self._request(RequestSpec.post(
            self._path("create-folder"),
            json={"root": PathResolver.root_display(root), "name": name},
            file=PathResolver.compose_child_path(root, name)
        ), NO_CONTENT)

    async def compress(self, root: str, names: List[str]) -> Dict[str, Any]:
        """Archives ``names`` inside ``root``; returns the archive's ``file_object``."""
        logger.debug(f"Compressing {names} in {root}")
        return await self._request(RequestSpec.post(self._path("compress"), json={
            "root": root,
            "files": names
        }))

    async def decompress(self, root: str, name: str) -> None:
        logger.debug(f"Decompressing {name} in {root}")
        await self._request(RequestSpec.post(self._path("decompress"), json={
            "root": root,
            "file": name
        }), NO_CONTENT)

    async def delete(self, root: str, names: List[str]) -> None:
        logger.debug(f"Deleting {names} in {root}")
        await self._request(RequestSpec.post(self._path("delete"), json={
            "root": root,
            "files": names
        }), NO_CONTENT)
