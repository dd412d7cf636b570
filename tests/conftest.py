from typing import Dict, Iterator, List, Optional
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from requests.structures import CaseInsensitiveDict

from radio_relay.config import RelaySettings, get_settings
from radio_relay.main import app

STREAM_URL = "https://stream.example.org/mp3"


class FakeRaw:
    """Stands in for urllib3's response: hands out `body` in `amt`-sized pieces."""

    def __init__(self, body: bytes, fail_after: Optional[int] = None):
        self.body = body
        self.fail_after = fail_after
        self.decode_flags: List[bool] = []

    def stream(self, amt: int, decode_content: bool = True) -> Iterator[bytes]:
        self.decode_flags.append(decode_content)
        for i in range(0, len(self.body), amt):
            if self.fail_after is not None and i >= self.fail_after:
                raise ConnectionResetError("peer went away")
            yield self.body[i:i + amt]


class FakeUpstream:
    def __init__(self, status_code: int = 200, body: bytes = b"",
                 headers: Optional[Dict[str, str]] = None, fail_after: Optional[int] = None):
        self.status_code = status_code
        self.headers = CaseInsensitiveDict(headers or {})
        self.raw = FakeRaw(body, fail_after)
        self.closed = False

    def close(self):
        self.closed = True


@pytest.fixture
def settings() -> RelaySettings:
    return RelaySettings(
        upstream_url=STREAM_URL,
        chunk_size=16 * 1024,
        station_name="CFUR Radio",
        station_city="Prince George",
        station_frequency=88.7,
        station_band="fm",
    )


@pytest.fixture
def client(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def upstream_get():
    """Patches the outbound requests.get; set .return_value / .side_effect per test."""
    with patch("radio_relay.upstream.requests.get") as mocked:
        yield mocked


@pytest.fixture(autouse=True)
def _fresh_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
