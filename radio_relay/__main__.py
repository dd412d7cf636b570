# python -m radio_relay
import argparse
import logging
import os

import uvicorn

from radio_relay.config import get_settings


def main(argv=None):
    parser = argparse.ArgumentParser(description="Relay a live radio stream with CORS headers.")
    parser.add_argument("--host", default=os.getenv("RELAY_HOST", "0.0.0.0"), help="Bind address")
    parser.add_argument("--port", type=int, default=int(os.getenv("RELAY_PORT", "8000")), help="Bind port")
    parser.add_argument("--upstream-url", help="Stream to relay (overrides RELAY_UPSTREAM_URL)")
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO"), help="Logging level")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.upstream_url:
        os.environ["RELAY_UPSTREAM_URL"] = args.upstream_url
        get_settings.cache_clear()
    # fail on bad config now, not on the first listener
    settings = get_settings()
    logging.getLogger("radio_relay").info("relaying %s on %s:%s", settings.upstream_url, args.host, args.port)

    uvicorn.run("radio_relay.main:app", host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
