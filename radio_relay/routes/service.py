from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
import logging
import requests

from ..config import RelaySettings, get_settings
from ..cors import allow_any_origin
from ..upstream import open_upstream

log = logging.getLogger(__name__)

router = APIRouter(tags=["service"])


@router.get("/health")
def health(probe: bool = False, settings: RelaySettings = Depends(get_settings)):
    if not probe:
        return {"ok": True, "upstream": settings.upstream_host}

    # Headers only; closing right away keeps the probe from pulling audio.
    try:
        upstream = open_upstream(settings)
    except requests.RequestException as e:
        log.warning("health probe failed: %s", e)
        return JSONResponse({"ok": False, "status": None, "error": str(e)}, status_code=503)
    status = upstream.status_code
    upstream.close()
    ok = 200 <= status < 300
    return JSONResponse({"ok": ok, "status": status}, status_code=200 if ok else 503)


@router.get("/station")
def station(request: Request, settings: RelaySettings = Depends(get_settings)):
    """What the player widget needs to tune in: who we are and where to listen."""
    body = {
        "name": settings.station_name,
        "city": settings.station_city,
        "frequency": settings.station_frequency,
        "band": settings.station_band,
        "stream_url": str(request.base_url),
    }
    return JSONResponse(body, headers=allow_any_origin({}))
