# radio_relay/upstream.py
import logging
from typing import Dict, Iterator

import requests

from .config import RelaySettings

log = logging.getLogger(__name__)

# RFC 7230 6.1: meaningful for a single connection only, the server frames its own.
HOP_BY_HOP = frozenset({
    "connection", "keep-alive", "proxy-authenticate", "proxy-authorization",
    "te", "trailer", "trailers", "transfer-encoding", "upgrade",
})


def open_upstream(settings: RelaySettings) -> requests.Response:
    """
    Open the station stream. Nothing from the inbound request is forwarded,
    only our own User-Agent. Non-2xx responses are returned, not raised.
    """
    log.debug("opening upstream %s", settings.upstream_url)
    return requests.get(
        settings.upstream_url,
        stream=True,
        timeout=settings.timeout,
        headers={"User-Agent": settings.user_agent},
        allow_redirects=True,
    )


def passthrough_headers(upstream: requests.Response) -> Dict[str, str]:
    return {k: v for k, v in upstream.headers.items() if k.lower() not in HOP_BY_HOP}


def iter_body(upstream: requests.Response, chunk_size: int) -> Iterator[bytes]:
    # raw.stream(decode_content=False) keeps the bytes exactly as sent,
    # iter_content() would gunzip them behind a Content-Encoding we pass on.
    try:
        for chunk in upstream.raw.stream(chunk_size, decode_content=False):
            if chunk:
                yield chunk
    except Exception as e:
        log.warning("upstream stream aborted: %s", e)
        raise
    finally:
        upstream.close()
