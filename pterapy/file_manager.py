"""Root-level access to a server's files."""
from typing import Any, Dict, List, Optional

from .core.files import FilesEndpoint
from .core.path import PathResolver
from .core.protocols import ServerHandle
from .file import File


class FileManager:
    """
    The root directory of a server, plus path-based file operations.

    ``contents`` is a snapshot of the root directory taken when the manager
    was built; call :meth:`sync` to replace it.

    Example:
        >>> manager = await server.get_file_manager()
        >>> for file in manager.contents:
        ...     print(file.location)
        >>> await manager.write_file("motd=Hello", "/server.properties")
    """

    def __init__(self, contents: Dict[str, Any], server: ServerHandle):
        """
        Args:
            contents: Root ``list`` payload (``{"object": "list", "data": [...]}``)
            server: Owning server handle
        """
        self._server = server
        self._files = FilesEndpoint(server)
        self.contents: List[File] = [
            File.from_data(entry, server) for entry in contents.get("data", [])
        ]

    @property
    def server(self) -> ServerHandle:
        return self._server

    def __iter__(self):
        return iter(self.contents)

    def __len__(self) -> int:
        return len(self.contents)

    def get_child(self, name: str) -> Optional[File]:
        """Returns the root entry called ``name`` from the snapshot, or None."""
        for file in self.contents:
            if file.name == name:
                return file
        return None

    async def get_file_contents(self, path: str) -> Any:
        """Raw contents of the file at ``path``."""
        return await self._files.get_contents(path)

    async def get_folder_contents(self, path: str) -> List[File]:
        """Lists the directory at ``path``; entries are parented at ``path``."""
        entries = await self._files.list_directory(path)
        parent = PathResolver.trim_trailing_separator(path)
        return [File.from_data(entry, self._server, parent) for entry in entries]

    async def write_file(self, contents: str, path: str) -> File:
        """
        Create or overwrite the file at ``path``.

        Returns:
            The written file, read back from its directory

        Raises:
            PanelConsistencyError: The file is missing from the re-listing
        """
        relative = PathResolver.strip_leading_separator(path)
        await self._files.write(relative, contents)

        parent, name = PathResolver.split_parent_and_name(
            PathResolver.join_relative("", relative)
        )
        entry = await self._files.require_entry(parent, name, f"Unable to find '{path}' after writing it")
        return File.from_data(entry, self._server, parent)

    async def add_directory(self, name: str, location: str = "/") -> File:
        """Create directory ``name`` inside ``location`` (an absolute path)."""
        parent = PathResolver.resolve_directory("", location)
        await self._files.create_folder(parent, name)
        entry = await self._files.require_entry(parent, name, f"Unable to find directory '{name}' after creating it")
        return File.from_data(entry, self._server, parent)

    async def sync(self) -> 'FileManager':
        """Replace ``contents`` with a fresh listing of the root directory."""
        entries = await self._files.list_directory("/")
        self.contents = [File.from_data(entry, self._server) for entry in entries]
        return self
