"""Path composition for server file trees."""
from typing import Tuple

SEPARATOR = "/"


class PathResolver:
    """
    Pure helpers for the ``/``-separated paths of a server's file tree.

    Paths are plain strings. A root of ``""`` and a root of ``"/"`` denote
    the same directory: the empty form is used when concatenating, the
    ``"/"`` form when storing or sending a directory on its own.
    """

    @staticmethod
    def trim_trailing_separator(path: str) -> str:
        """Drops exactly one trailing separator."""
        if path.endswith(SEPARATOR):
            return path[:-1]
        return path

    @staticmethod
    def strip_leading_separator(path: str) -> str:
        """Drops exactly one leading separator."""
        if path.startswith(SEPARATOR):
            return path[1:]
        return path

    @staticmethod
    def compose_child_path(root: str, name: str) -> str:
        """
        Joins a directory and an entry name.

        >>> PathResolver.compose_child_path("/games/", "server.properties")
        '/games/server.properties'
        >>> PathResolver.compose_child_path("", "eula.txt")
        '/eula.txt'
        """
        return PathResolver.trim_trailing_separator(root) + SEPARATOR + name

    @staticmethod
    def join_relative(base: str, path: str) -> str:
        """Joins a possibly absolute ``path`` onto ``base`` without doubling separators."""
        return PathResolver.compose_child_path(
            base,
            PathResolver.strip_leading_separator(path)
        )

    @staticmethod
    def root_display(root: str) -> str:
        """Returns ``"/"`` for an empty root, the root unchanged otherwise."""
        return SEPARATOR if len(root) == 0 else root

    @staticmethod
    def query_directory(path: str) -> str:
        """Directory string sent in listing query strings and request bodies."""
        return PathResolver.root_display(PathResolver.trim_trailing_separator(path))

    @staticmethod
    def split_parent_and_name(path: str) -> Tuple[str, str]:
        """
        Splits on the last separator.

        >>> PathResolver.split_parent_and_name("/plugins/config.yml")
        ('/plugins', 'config.yml')
        >>> PathResolver.split_parent_and_name("/eula.txt")
        ('', 'eula.txt')
        """
        parent, _, name = path.rpartition(SEPARATOR)
        return parent, name

    @staticmethod
    def resolve_directory(base: str, location: str) -> str:
        """
        Resolves a directory ``location`` relative to ``base``.

        ``"/"`` and ``""`` resolve to ``base`` itself. The result carries no
        trailing separator, so the server root resolves to ``""``.
        """
        base = PathResolver.trim_trailing_separator(base)
        relative = PathResolver.trim_trailing_separator(
            PathResolver.strip_leading_separator(location)
        )
        if not relative:
            return base
        return base + SEPARATOR + relative
