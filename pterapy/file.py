"""File and directory nodes of a server's file tree."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .core.exceptions import PanelOperationError
from .core.files import FilesEndpoint
from .core.path import PathResolver
from .core.protocols import ServerHandle


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class FileAccess:
    """Read/write/execute access for one access level."""
    read: bool = False
    write: bool = False
    execute: bool = False

    @classmethod
    def from_triple(cls, triple: str) -> 'FileAccess':
        """
        Decodes an ``rwx`` triple such as ``"r-x"``.

        A position counts as granted only when it holds its own letter.
        """
        triple = triple.ljust(3, "-")
        return cls(
            read=triple[0] == "r",
            write=triple[1] == "w",
            execute=triple[2] == "x"
        )


@dataclass(frozen=True)
class File:
    """
    Snapshot of one file or directory on a server.

    Instances never change. Every mutating operation performs the remote
    call, re-lists the affected directory and returns a *new* ``File``;
    the old instance stays valid as a read-only snapshot.

    Example:
        >>> manager = await server.get_file_manager()
        >>> config = manager.get_child("server.properties")
        >>> config = await config.write("motd=Hello\\n")
        >>> backup = await config.rename("server.properties.bak")
    """
    name: str
    location: str
    root: str
    is_directory: bool
    size: int
    symlink: bool
    editable: bool
    mime_type: str
    mode: str
    owner_access: FileAccess
    user_access: FileAccess
    created_at: Optional[datetime]
    modified_at: Optional[datetime]
    fetched_at: datetime
    server: ServerHandle = field(repr=False, compare=False)

    @classmethod
    def from_data(cls, data: Dict[str, Any], server: ServerHandle, parent: str = "") -> 'File':
        """
        Builds a node from a ``file_object`` payload.

        Args:
            data: ``{"object": "file_object", "attributes": {...}}``
            server: Owning server handle
            parent: Absolute path of the containing directory (``""`` is the root)
        """
        parent = PathResolver.trim_trailing_separator(parent)
        attributes = data["attributes"]
        mode = attributes["mode"]

        return cls(
            name=attributes["name"],
            location=PathResolver.compose_child_path(parent, attributes["name"]),
            root=PathResolver.root_display(parent),
            is_directory=mode[:1] == "d",
            size=attributes.get("size", 0),
            symlink=attributes.get("is_symlink", False),
            editable=attributes.get("is_editable", False),
            mime_type=attributes.get("mimetype", ""),
            mode=mode,
            owner_access=FileAccess.from_triple(mode[1:4]),
            user_access=FileAccess.from_triple(mode[4:7]),
            created_at=_parse_timestamp(attributes.get("created_at")),
            modified_at=_parse_timestamp(attributes.get("modified_at")),
            fetched_at=datetime.now(timezone.utc),
            server=server
        )

    @property
    def is_file(self) -> bool:
        return not self.is_directory

    @property
    def _files(self) -> FilesEndpoint:
        return FilesEndpoint(self.server)

    def _from_entry(self, entry: Dict[str, Any], parent: str) -> 'File':
        return File.from_data(entry, self.server, parent)

    def _require_directory(self, message: str) -> None:
        if not self.is_directory:
            raise PanelOperationError(message)

    def _require_file(self, message: str) -> None:
        if self.is_directory:
            raise PanelOperationError(message)

    # =========================================================================
    # Reads
    # =========================================================================

    async def get_children(self) -> List['File']:
        """
        List the entries of this directory.

        Raises:
            PanelOperationError: This node is not a directory
        """
        self._require_directory("This file is not a directory, you cannot get its children")
        entries = await self._files.list_directory(self.location)
        return [self._from_entry(entry, self.location) for entry in entries]

    async def get_contents(self) -> Any:
        """Raw contents of this file. Large files may be refused by the panel."""
        self._require_file("A directory has no file contents, did you mean get_children?")
        return await self._files.get_contents(self.location)

    async def get_child(self, name: str) -> Optional['File']:
        """Returns the child called ``name``, or None when there is none."""
        for child in await self.get_children():
            if child.name == name:
                return child
        return None

    async def get_download_url(self) -> str:
        """One-time download URL. Compress a directory before downloading it."""
        self._require_file("You cannot download a directory directly. Try compressing it first")
        return await self._files.get_download_url(self.location)

    async def save(self, dest: Union[str, Path, None] = None) -> Path:
        """
        Download this file to a local path.

        Args:
            dest: Target file or existing directory (defaults to the current directory)

        Returns:
            Path of the written file
        """
        self._require_file("You cannot download a directory directly. Try compressing it first")
        target = Path(dest) if dest is not None else Path(".")
        if target.is_dir():
            target = target / self.name

        url = await self.get_download_url()
        return await self.server.download(url, target)

    # =========================================================================
    # Mutations
    # =========================================================================

    async def rename(self, name: str) -> 'File':
        """
        Rename this node.

        Returns:
            The renamed node, read back from its directory

        Raises:
            PanelConsistencyError: The renamed entry is missing from the re-listing
        """
        files = self._files
        await files.rename(self.root, self.name, name)
        entry = await files.require_entry(self.root, name, "Unable to complete the operation")
        return self._from_entry(entry, self.root)

    async def sync(self) -> 'File':
        """
        Re-read this node from the server.

        Raises:
            PanelConsistencyError: The node was renamed or removed
        """
        entry = await self._files.require_entry(
            self.root, self.name, "Unable to find the file, has it been renamed?"
        )
        return self._from_entry(entry, self.root)

    async def duplicate(self, to_location: str, new_name: Optional[str] = None) -> bool:
        """
        Copy this node into ``to_location``.

        The panel does not report the copy synchronously, so only success
        is returned.
        """
        await self._files.copy(
            PathResolver.compose_child_path(to_location, new_name or self.name)
        )
        return True

    async def _write_and_read_back(self, target: str, contents: str) -> 'File':
        files = self._files
        await files.write(target, contents)
        parent, name = PathResolver.split_parent_and_name(target)
        entry = await files.require_entry(parent, name, f"Unable to find '{target}' after writing it")
        return self._from_entry(entry, parent)

    async def write(self, contents: str, path: Optional[str] = None) -> 'File':
        """
        Write this file, or a sibling of it.

        Args:
            contents: New file contents
            path: Path relative to this file's directory. When given, that
                  file is created or overwritten instead of this one.

        Returns:
            The written file
        """
        self._require_file("A directory has no file contents, did you mean write_child?")

        if path is None:
            target = PathResolver.compose_child_path(self.root, self.name)
        else:
            target = PathResolver.join_relative(self.root, path)

        return await self._write_and_read_back(target, contents)

    async def write_child(self, contents: str, path: str) -> 'File':
        """Create or overwrite a file at ``path`` inside this directory."""
        self._require_directory("This is a file, not a directory. You cannot add or edit a child from it")
        target = PathResolver.join_relative(self.location, path)
        return await self._write_and_read_back(target, contents)

    async def add_directory(self, name: str, location: str = "/") -> 'File':
        """
        Create a directory.

        ``location`` is resolved relative to this node when it is a
        directory, relative to its parent otherwise.
        """
        base = self.location if self.is_directory else self.root
        parent = PathResolver.resolve_directory(base, location)

        files = self._files
        await files.create_folder(parent, name)
        entry = await files.require_entry(parent, name, f"Unable to find directory '{name}' after creating it")
        return self._from_entry(entry, parent)

    async def compress(self) -> 'File':
        """Archive this node; the panel returns the created archive inline."""
        data = await self._files.compress(self.root, [self.name])
        return self._from_entry(data, self.root)

    async def decompress(self, delete_self: bool = False) -> bool:
        """
        Extract this archive into its directory.

        Args:
            delete_self: Delete the archive once extracted
        """
        await self._files.decompress(self.root, self.name)
        if delete_self:
            await self.delete()
        return True

    async def delete(self) -> bool:
        """Delete this node. Other snapshots of it are not invalidated."""
        await self._files.delete(self.root, [self.name])
        return True
