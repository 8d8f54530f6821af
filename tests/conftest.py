"""Configuration for pytest."""
import pytest
from starlette.requests import Request


def make_request(headers=None, client=("230.173.15.154", 1234), path="/"):
    """
    Build a Starlette request from a raw ASGI scope.

    headers may be a dict or a list of (name, value) pairs; use a list to
    send the same header twice.
    """
    if isinstance(headers, dict):
        headers = list(headers.items())
    scope = {
        "type": "http",
        "method": "GET",
        "scheme": "http",
        "server": ("testserver", 80),
        "root_path": "",
        "path": path,
        "query_string": b"",
        "headers": [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or [])
        ],
        "client": client,
    }
    return Request(scope)


@pytest.fixture
def request_factory():
    """Factory fixture for Starlette requests."""
    return make_request
