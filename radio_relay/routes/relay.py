from fastapi import HTTPException, Request, Response
from fastapi.responses import StreamingResponse
import logging
import requests
from starlette.routing import request_response

from ..config import RelaySettings, get_settings
from ..cors import allow_any_origin, preflight_headers
from ..upstream import iter_body, open_upstream, passthrough_headers

log = logging.getLogger(__name__)


def _settings(request: Request) -> RelaySettings:
    # a plain Route gets no Depends(), so honour overrides by hand
    provider = request.app.dependency_overrides.get(get_settings, get_settings)
    return provider()


def relay(request: Request):
    """OPTIONS is a local pre-flight; any other method is relayed as a plain GET."""
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=preflight_headers())

    settings = _settings(request)
    try:
        upstream = open_upstream(settings)
    except requests.RequestException as e:
        log.warning("upstream fetch failed for %s: %s", settings.upstream_url, e)
        raise HTTPException(
            status_code=502,
            detail=f"Upstream fetch failed: {e}",
            headers=allow_any_origin({}),
        )

    headers = allow_any_origin(passthrough_headers(upstream))
    log.debug("relaying %s %s (status %s, %s)", request.method, settings.upstream_host,
              upstream.status_code, upstream.headers.get("Content-Type"))

    if request.method == "HEAD":
        # a live stream never ends, so don't drain it for a body nobody reads
        upstream.close()
        return Response(status_code=upstream.status_code, headers=headers)

    # media_type=None: Content-Type comes from upstream untouched
    return StreamingResponse(
        iter_body(upstream, settings.chunk_size),
        status_code=upstream.status_code,
        headers=headers,
        media_type=None,
    )


class RelayEndpoint:
    """
    ASGI wrapper around `relay`. Starlette gives a plain function route
    GET/HEAD only; a class endpoint with methods=None matches every method,
    extension ones (PROPFIND, TRACE, ...) included.
    """

    def __init__(self):
        self.app = request_response(relay)

    async def __call__(self, scope, receive, send):
        await self.app(scope, receive, send)


relay_endpoint = RelayEndpoint()
