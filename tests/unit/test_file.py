"""Tests for File nodes."""
from datetime import datetime, timezone

import pytest

from pterapy.core.exceptions import (
    PanelAPIError,
    PanelConsistencyError,
    PanelOperationError,
    PanelUnverifiedError
)
from pterapy.file import File, FileAccess

FILES = '/api/client/servers/1a2b3c4d/files'


class TestFileAccess:
    """Test suite for permission triples."""

    def test_full_access(self):
        assert FileAccess.from_triple('rwx') == FileAccess(True, True, True)

    def test_partial_access(self):
        assert FileAccess.from_triple('r-x') == FileAccess(read=True, write=False, execute=True)

    def test_short_triple(self):
        """Test missing positions are denied."""
        assert FileAccess.from_triple('r') == FileAccess(read=True)


class TestFileDecoding:
    """Test suite for building files from listing payloads."""

    def test_directory_mode(self, server, entry):
        """Test 7-character mode decoding."""
        file = File.from_data(entry('plugins', mode='drwxr-x'), server)

        assert file.is_directory is True
        assert file.owner_access == FileAccess(True, True, True)
        assert file.user_access == FileAccess(read=True, write=False, execute=True)

    def test_file_mode(self, server, entry):
        """Test a regular file with a ten-character mode."""
        file = File.from_data(entry('server.jar', mode='-rw-r--r--'), server)

        assert file.is_directory is False
        assert file.is_file is True
        assert file.owner_access == FileAccess(read=True, write=True, execute=False)
        assert file.user_access == FileAccess(read=True, write=False, execute=False)

    def test_root_parent(self, server, entry):
        """Test an empty parent renders as the root."""
        file = File.from_data(entry('eula.txt'), server)

        assert file.root == '/'
        assert file.location == '/eula.txt'

    def test_nested_parent_trailing_separator(self, server, entry):
        """Test parent paths are trimmed before composition."""
        file = File.from_data(entry('config.yml'), server, '/plugins/Essentials/')

        assert file.root == '/plugins/Essentials'
        assert file.location == '/plugins/Essentials/config.yml'

    def test_attributes(self, server, entry):
        file = File.from_data(entry('latest.log', size=2048), server, '/logs')

        assert file.name == 'latest.log'
        assert file.size == 2048
        assert file.editable is True
        assert file.symlink is False
        assert file.mime_type == 'text/plain'
        assert file.created_at == datetime(2024, 1, 15, 8, 0, tzinfo=timezone.utc)
        assert file.modified_at == datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)
        assert file.fetched_at.tzinfo is not None

    def test_missing_modified_at_is_preserved(self, server, entry):
        """Test a null modified_at stays None."""
        file = File.from_data(entry('new.txt', modified_at=None), server)

        assert file.modified_at is None

    def test_snapshot_is_immutable(self, server, entry):
        file = File.from_data(entry('eula.txt'), server)

        with pytest.raises(AttributeError):
            file.name = 'other.txt'


class TestFileReads:
    """Test suite for read operations."""

    @pytest.mark.asyncio
    async def test_get_children(self, server, entry, listing):
        """Test children are listed at the directory's location."""
        folder = File.from_data(entry('plugins', mode='drwxr-x'), server)
        server.queue(listing(entry('Essentials', mode='drwxr-x'), entry('LuckPerms.jar')))

        children = await folder.get_children()

        spec, suppress = server.requests[0]
        assert spec.method == 'GET'
        assert spec.path == f'{FILES}/list'
        assert spec.params == {'directory': '/plugins'}
        assert [c.location for c in children] == ['/plugins/Essentials', '/plugins/LuckPerms.jar']
        assert all(c.root == '/plugins' for c in children)

    @pytest.mark.asyncio
    async def test_get_children_of_file(self, server, entry):
        """Test listing a file fails before any request."""
        file = File.from_data(entry('eula.txt'), server)

        with pytest.raises(PanelOperationError):
            await file.get_children()

        assert server.requests == []

    @pytest.mark.asyncio
    async def test_unverified(self, unverified_server, entry):
        """Test an unverified client fails before any request."""
        folder = File.from_data(entry('plugins', mode='drwxr-x'), unverified_server)

        with pytest.raises(PanelUnverifiedError, match='Client is unverified, login to proceed'):
            await folder.get_children()

        assert unverified_server.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize('operation', [
        lambda file: file.rename('server.properties.bak'),
        lambda file: file.write('motd=Hello'),
        lambda file: file.add_directory('backups'),
        lambda file: file.delete(),
        lambda file: file.compress(),
    ], ids=['rename', 'write', 'add_directory', 'delete', 'compress'])
    async def test_unverified_mutations(self, unverified_server, entry, operation):
        """Test mutations on an unverified client fail before any request."""
        file = File.from_data(entry('server.properties'), unverified_server)

        with pytest.raises(PanelUnverifiedError):
            await operation(file)

        assert unverified_server.requests == []

    @pytest.mark.asyncio
    async def test_get_contents(self, server, entry):
        file = File.from_data(entry('server.properties'), server)
        server.queue('motd=A Minecraft Server\n')

        contents = await file.get_contents()

        spec, _ = server.requests[0]
        assert spec.path == f'{FILES}/contents'
        assert spec.params == {'file': '/server.properties'}
        assert contents == 'motd=A Minecraft Server\n'

    @pytest.mark.asyncio
    async def test_get_contents_of_directory(self, server, entry):
        folder = File.from_data(entry('logs', mode='drwxr-x'), server)

        with pytest.raises(PanelOperationError):
            await folder.get_contents()

    @pytest.mark.asyncio
    async def test_get_child(self, server, entry, listing):
        folder = File.from_data(entry('plugins', mode='drwxr-x'), server)
        server.queue(listing(entry('a.jar'), entry('b.jar')))

        child = await folder.get_child('b.jar')

        assert child.location == '/plugins/b.jar'

    @pytest.mark.asyncio
    async def test_get_child_not_found(self, server, entry, listing):
        """Test a missing child is None, not an error."""
        folder = File.from_data(entry('plugins', mode='drwxr-x'), server)
        server.queue(listing(entry('a.jar')))

        assert await folder.get_child('missing.jar') is None

    @pytest.mark.asyncio
    async def test_get_download_url(self, server, entry):
        file = File.from_data(entry('world.zip'), server, '/backups')
        server.queue({'object': 'signed_url', 'attributes': {'url': 'https://node.test/download?token=x'}})

        url = await file.get_download_url()

        spec, _ = server.requests[0]
        assert spec.params == {'file': '/backups/world.zip'}
        assert url == 'https://node.test/download?token=x'

    @pytest.mark.asyncio
    async def test_download_url_of_directory(self, server, entry):
        folder = File.from_data(entry('world', mode='drwxr-x'), server)

        with pytest.raises(PanelOperationError):
            await folder.get_download_url()

    @pytest.mark.asyncio
    async def test_save_into_directory(self, server, entry, tmp_path):
        """Test saving into a local directory keeps the remote name."""
        file = File.from_data(entry('latest.log'), server, '/logs')
        server.queue({'attributes': {'url': 'https://node.test/dl'}})

        saved = await file.save(tmp_path)

        assert saved == tmp_path / 'latest.log'
        assert server.downloads == [('https://node.test/dl', tmp_path / 'latest.log')]


class TestFileMutations:
    """Test suite for mutating operations and their read-back."""

    @pytest.mark.asyncio
    async def test_rename(self, server, entry, listing):
        """Test rename issues the mutation, then re-lists the parent."""
        file = File.from_data(entry('a.txt'), server, '/notes')
        server.queue(None, listing(entry('b.txt'), entry('c.txt')))

        renamed = await file.rename('b.txt')

        rename_spec, rename_suppress = server.requests[0]
        assert rename_spec.method == 'PUT'
        assert rename_spec.path == f'{FILES}/rename'
        assert rename_spec.json == {'root': '/notes', 'files': [{'from': 'a.txt', 'to': 'b.txt'}]}
        assert rename_suppress == (204,)

        list_spec, _ = server.requests[1]
        assert list_spec.params == {'directory': '/notes'}

        assert renamed.name == 'b.txt'
        assert renamed.location == '/notes/b.txt'
        assert file.name == 'a.txt'

    @pytest.mark.asyncio
    async def test_rename_missing_after_relist(self, server, entry, listing):
        """Test a missing renamed entry is a consistency fault."""
        file = File.from_data(entry('a.txt'), server, '/notes')
        server.queue(None, listing(entry('a.txt')))

        with pytest.raises(PanelConsistencyError, match='Unable to complete the operation') as exc_info:
            await file.rename('b.txt')

        assert exc_info.value.name == 'b.txt'
        assert exc_info.value.directory == '/notes'

    @pytest.mark.asyncio
    async def test_rename_failure_skips_relist(self, server, entry):
        """Test a failed mutation is surfaced once and nothing is re-listed."""
        file = File.from_data(entry('a.txt'), server)
        server.queue(PanelAPIError('E1 (500): boom', status=500))

        with pytest.raises(PanelAPIError):
            await file.rename('b.txt')

        assert len(server.requests) == 1

    @pytest.mark.asyncio
    async def test_sync_round_trip(self, server, entry, listing):
        """Test syncing an unchanged file yields identical attributes."""
        data = entry('server.jar', mode='-rwxr-x', size=4096)
        file = File.from_data(data, server, '/')
        server.queue(listing(entry('eula.txt'), data))

        synced = await file.sync()

        assert synced.name == file.name
        assert synced.size == file.size
        assert synced.owner_access == file.owner_access
        assert synced.user_access == file.user_access
        assert synced.location == file.location
        assert synced is not file
        assert server.requests[0][0].params == {'directory': '/'}

    @pytest.mark.asyncio
    async def test_sync_missing(self, server, entry, listing):
        file = File.from_data(entry('old.txt'), server)
        server.queue(listing())

        with pytest.raises(PanelConsistencyError, match='has it been renamed'):
            await file.sync()

    @pytest.mark.asyncio
    async def test_duplicate(self, server, entry):
        """Test copies go to the trimmed target directory."""
        file = File.from_data(entry('world.zip'), server, '/backups')
        server.queue(None)

        assert await file.duplicate('/archive/', 'world-old.zip') is True

        spec, suppress = server.requests[0]
        assert spec.path == f'{FILES}/copy'
        assert spec.json == {'location': '/archive/world-old.zip'}
        assert suppress == (204,)

    @pytest.mark.asyncio
    async def test_duplicate_keeps_name(self, server, entry):
        file = File.from_data(entry('world.zip'), server, '/backups')
        server.queue(None)

        await file.duplicate('/archive')

        assert server.requests[0][0].json == {'location': '/archive/world.zip'}

    @pytest.mark.asyncio
    async def test_write_self(self, server, entry, listing):
        """Test writing a file targets its own path and re-lists its parent."""
        file = File.from_data(entry('config.yml', size=10), server, '/plugins')
        server.queue(None, listing(entry('config.yml', size=42)))

        written = await file.write('debug: true\n')

        write_spec, suppress = server.requests[0]
        assert write_spec.path == f'{FILES}/write'
        assert write_spec.params == {'file': '/plugins/config.yml'}
        assert write_spec.data == 'debug: true\n'
        assert write_spec.content_type == 'text/plain'
        assert suppress == (204,)
        assert server.requests[1][0].params == {'directory': '/plugins'}
        assert written.size == 42
        assert written.location == '/plugins/config.yml'

    @pytest.mark.asyncio
    async def test_write_sibling_at_root(self, server, entry, listing):
        """Test an absolute sibling path resolves against the file's root."""
        file = File.from_data(entry('eula.txt'), server)
        server.queue(None, listing(entry('eula.txt'), entry('notes.txt')))

        written = await file.write('hello', '/notes.txt')

        assert server.requests[0][0].params == {'file': '/notes.txt'}
        assert server.requests[1][0].params == {'directory': '/'}
        assert written.location == '/notes.txt'
        assert written.root == '/'

    @pytest.mark.asyncio
    async def test_write_nested_sibling(self, server, entry, listing):
        file = File.from_data(entry('config.yml'), server, '/plugins')
        server.queue(None, listing(entry('messages.yml')))

        written = await file.write('x', 'Essentials/messages.yml')

        assert server.requests[0][0].params == {'file': '/plugins/Essentials/messages.yml'}
        assert server.requests[1][0].params == {'directory': '/plugins/Essentials'}
        assert written.location == '/plugins/Essentials/messages.yml'

    @pytest.mark.asyncio
    async def test_write_directory(self, server, entry):
        folder = File.from_data(entry('plugins', mode='drwxr-x'), server)

        with pytest.raises(PanelOperationError, match='write_child'):
            await folder.write('x')

    @pytest.mark.asyncio
    async def test_write_missing_after_relist(self, server, entry, listing):
        file = File.from_data(entry('config.yml'), server, '/plugins')
        server.queue(None, listing())

        with pytest.raises(PanelConsistencyError):
            await file.write('x')

    @pytest.mark.asyncio
    async def test_write_child(self, server, entry, listing):
        """Test write_child resolves relative to the directory itself."""
        folder = File.from_data(entry('plugins', mode='drwxr-x'), server)
        server.queue(None, listing(entry('config.yml')))

        written = await folder.write_child('a: 1', '/Essentials/config.yml')

        assert server.requests[0][0].params == {'file': '/plugins/Essentials/config.yml'}
        assert server.requests[1][0].params == {'directory': '/plugins/Essentials'}
        assert written.location == '/plugins/Essentials/config.yml'

    @pytest.mark.asyncio
    async def test_write_child_of_file(self, server, entry):
        file = File.from_data(entry('eula.txt'), server)

        with pytest.raises(PanelOperationError):
            await file.write_child('x', 'y.txt')

    @pytest.mark.asyncio
    async def test_add_directory_in_directory(self, server, entry, listing):
        """Test directories are created inside a directory node."""
        folder = File.from_data(entry('plugins', mode='drwxr-x'), server)
        server.queue(None, listing(entry('Essentials', mode='drwxr-x')))

        created = await folder.add_directory('Essentials')

        spec, suppress = server.requests[0]
        assert spec.path == f'{FILES}/create-folder'
        assert spec.json == {'root': '/plugins', 'name': 'Essentials'}
        assert spec.params == {'file': '/plugins/Essentials'}
        assert suppress == (204,)
        assert server.requests[1][0].params == {'directory': '/plugins'}
        assert created.location == '/plugins/Essentials'
        assert created.is_directory

    @pytest.mark.asyncio
    async def test_add_directory_with_location(self, server, entry, listing):
        folder = File.from_data(entry('plugins', mode='drwxr-x'), server)
        server.queue(None, listing(entry('lang', mode='drwxr-x')))

        created = await folder.add_directory('lang', 'Essentials/')

        assert server.requests[0][0].json == {'root': '/plugins/Essentials', 'name': 'lang'}
        assert created.location == '/plugins/Essentials/lang'

    @pytest.mark.asyncio
    async def test_add_directory_from_root_file(self, server, entry, listing):
        """Test a file node creates directories next to itself."""
        file = File.from_data(entry('eula.txt'), server)
        server.queue(None, listing(entry('backups', mode='drwxr-x')))

        created = await file.add_directory('backups')

        assert server.requests[0][0].json == {'root': '/', 'name': 'backups'}
        assert server.requests[0][0].params == {'file': '/backups'}
        assert server.requests[1][0].params == {'directory': '/'}
        assert created.location == '/backups'

    @pytest.mark.asyncio
    async def test_compress(self, server, entry):
        """Test the archive is built from the inline response."""
        folder = File.from_data(entry('world', mode='drwxr-x'), server, '/')
        server.queue(entry('archive-2024-03-01.tar.gz', size=999))

        archive = await folder.compress()

        spec, suppress = server.requests[0]
        assert spec.path == f'{FILES}/compress'
        assert spec.json == {'root': '/', 'files': ['world']}
        assert suppress == ()
        assert archive.location == '/archive-2024-03-01.tar.gz'
        assert archive.size == 999

    @pytest.mark.asyncio
    async def test_decompress_keeps_archive(self, server, entry):
        """
        Test the archive survives when delete_self is false.

        Unlike clients that remove the archive after every extraction
        regardless of the flag, only decompress is issued unless asked.
        """
        archive = File.from_data(entry('plugins.zip'), server, '/')
        server.queue(None)

        assert await archive.decompress() is True

        assert len(server.requests) == 1
        spec, suppress = server.requests[0]
        assert spec.path == f'{FILES}/decompress'
        assert spec.json == {'root': '/', 'file': 'plugins.zip'}
        assert suppress == (204,)

    @pytest.mark.asyncio
    async def test_decompress_delete_self(self, server, entry):
        """Test the archive is deleted after extraction when asked."""
        archive = File.from_data(entry('plugins.zip'), server, '/')
        server.queue(None, None)

        await archive.decompress(delete_self=True)

        assert [s.path for s, _ in server.requests] == [f'{FILES}/decompress', f'{FILES}/delete']
        assert server.requests[1][0].json == {'root': '/', 'files': ['plugins.zip']}

    @pytest.mark.asyncio
    async def test_delete(self, server, entry):
        file = File.from_data(entry('latest.log'), server, '/logs')
        server.queue(None)

        assert await file.delete() is True

        spec, suppress = server.requests[0]
        assert spec.method == 'POST'
        assert spec.json == {'root': '/logs', 'files': ['latest.log']}
        assert suppress == (204,)
