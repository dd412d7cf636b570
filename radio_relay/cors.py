# radio_relay/cors.py
from typing import Dict

ALLOW_ORIGIN = "Access-Control-Allow-Origin"

PREFLIGHT_HEADERS: Dict[str, str] = {
    ALLOW_ORIGIN: "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def preflight_headers() -> Dict[str, str]:
    return dict(PREFLIGHT_HEADERS)


def allow_any_origin(headers: Dict[str, str]) -> Dict[str, str]:
    """Force `Access-Control-Allow-Origin: *`, dropping any other casing of it."""
    out = {k: v for k, v in headers.items() if k.lower() != ALLOW_ORIGIN.lower()}
    out[ALLOW_ORIGIN] = "*"
    return out
