"""shared fixtures for the phpwasm test suite."""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from phpwasm.registry.client import ReleaseTransport, TransportResponse


class StubTransport(ReleaseTransport):
    """transport serving canned outcomes by url; unknown urls are 404."""

    def __init__(self):
        self.routes = {}
        self.calls = []
        self.closed = False

    def get(self, url, headers=None):
        self.calls.append((url, dict(headers or {})))
        outcome = self.routes.get(url)
        if outcome is None:
            return TransportResponse(status_code=404, content=b"Not Found")
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, bytes):
            return TransportResponse(status_code=200, content=outcome)
        return outcome

    def close(self):
        self.closed = True


@pytest.fixture
def stub_transport():
    return StubTransport()
