"""Pytest fixtures for pterapy tests."""
import pytest


class FakeServer:
    """Server handle that records requests and replays queued responses."""

    def __init__(self, identifier='1a2b3c4d', verified=True):
        self.identifier = identifier
        self.verified = verified
        self.requests = []
        self.responses = []
        self.downloads = []

    def queue(self, *responses):
        self.responses.extend(responses)
        return self

    async def request(self, spec, suppress=()):
        self.requests.append((spec, tuple(suppress)))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def download(self, url, dest):
        self.downloads.append((url, dest))
        return dest


def make_entry(name, mode='-rw-r--', size=1024, modified_at='2024-03-01T12:30:00+00:00'):
    """Returns a ``file_object`` payload."""
    return {
        'object': 'file_object',
        'attributes': {
            'name': name,
            'mode': mode,
            'size': size,
            'is_file': not mode.startswith('d'),
            'is_symlink': False,
            'is_editable': not mode.startswith('d'),
            'mimetype': 'inode/directory' if mode.startswith('d') else 'text/plain',
            'created_at': '2024-01-15T08:00:00+00:00',
            'modified_at': modified_at,
        }
    }


def make_listing(*entries):
    """Returns a ``list`` payload."""
    return {'object': 'list', 'data': list(entries)}


@pytest.fixture
def server():
    """Verified fake server handle."""
    return FakeServer()


@pytest.fixture
def unverified_server():
    """Fake server handle whose client has not logged in."""
    return FakeServer(verified=False)


@pytest.fixture
def entry():
    return make_entry


@pytest.fixture
def listing():
    return make_listing
