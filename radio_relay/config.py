# radio_relay/config.py
import os
from functools import lru_cache
from typing import Optional
from urllib.parse import urlparse

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, field_validator

from . import __version__

DEFAULT_USER_AGENT = f"radio-relay/{__version__}"


def _optional_float(raw: Optional[str], default: Optional[float]) -> Optional[float]:
    if raw is None:
        return default
    raw = raw.strip()
    if not raw or raw.lower() == "none":
        return None
    return float(raw)


class RelaySettings(BaseModel):
    upstream_url: str
    connect_timeout: float = 5.0
    read_timeout: Optional[float] = 30.0  # between chunks, not total
    chunk_size: int = 64 * 1024
    user_agent: str = DEFAULT_USER_AGENT

    # descriptive only, served by /station
    station_name: Optional[str] = None
    station_city: Optional[str] = None
    station_frequency: Optional[float] = None
    station_band: Optional[str] = None

    @field_validator("upstream_url")
    @classmethod
    def _http_url(cls, v: str) -> str:
        v = v.strip()
        u = urlparse(v)
        if u.scheme not in ("http", "https") or not u.netloc:
            raise ValueError(f"upstream_url must be an absolute http(s) URL, got {v!r}")
        return v

    @field_validator("chunk_size")
    @classmethod
    def _positive_chunk(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("chunk_size must be positive")
        return v

    @property
    def upstream_host(self) -> str:
        return urlparse(self.upstream_url).netloc

    @property
    def timeout(self):
        """(connect, read) tuple in the form requests expects."""
        return (self.connect_timeout, self.read_timeout)

    @classmethod
    def from_env(cls) -> "RelaySettings":
        load_dotenv(find_dotenv(usecwd=True))
        url = os.getenv("RELAY_UPSTREAM_URL")
        if not url:
            raise RuntimeError("RELAY_UPSTREAM_URL is not set")
        freq = os.getenv("STATION_FREQUENCY")
        return cls(
            upstream_url=url,
            connect_timeout=float(os.getenv("RELAY_CONNECT_TIMEOUT", "5")),
            read_timeout=_optional_float(os.getenv("RELAY_READ_TIMEOUT"), 30.0),
            chunk_size=int(os.getenv("RELAY_CHUNK_SIZE", str(64 * 1024))),
            user_agent=os.getenv("RELAY_USER_AGENT", DEFAULT_USER_AGENT),
            station_name=os.getenv("STATION_NAME") or None,
            station_city=os.getenv("STATION_CITY") or None,
            station_frequency=float(freq) if freq else None,
            station_band=os.getenv("STATION_BAND") or None,
        )


@lru_cache(maxsize=1)
def get_settings() -> RelaySettings:
    return RelaySettings.from_env()
