# check_stream.py
import argparse
import os
import sys
import time

import requests
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_URL = os.getenv("RELAY_PUBLIC_URL") or os.getenv("RELAY_UPSTREAM_URL")


def check_preflight(url, origin):
    r = requests.options(url, headers={
        "Origin": origin,
        "Access-Control-Request-Method": "GET",
    }, timeout=10)
    print(f"Preflight: {r.status_code}")
    for k in ("Access-Control-Allow-Origin", "Access-Control-Allow-Methods", "Access-Control-Allow-Headers"):
        print(f"  {k}: {r.headers.get(k, '—')}")
    return 200 <= r.status_code < 300


def check_stream(url, seconds, origin=None):
    headers = {"Origin": origin} if origin else {}
    try:
        r = requests.get(url, stream=True, timeout=(5, 15), headers=headers)
    except requests.RequestException as e:
        print(f"❌ Could not connect: {e}")
        return False

    received = 0
    try:
        print(f"Status: {r.status_code}")
        print(f"Content-Type: {r.headers.get('Content-Type', '—')}")
        print(f"Access-Control-Allow-Origin: {r.headers.get('Access-Control-Allow-Origin', '—')}")
        deadline = time.monotonic() + seconds
        for chunk in r.iter_content(chunk_size=16 * 1024):
            received += len(chunk)
            if time.monotonic() >= deadline:
                break
    except requests.RequestException as e:
        print(f"❌ Stream broke after {received} bytes: {e}")
        return False
    finally:
        r.close()

    rate = received / seconds / 1024 if seconds else 0
    print(f"Received {received} bytes in {seconds}s (~{rate:.1f} KiB/s)")
    return 200 <= r.status_code < 300 and received > 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Check that a relay (or its upstream) is streaming audio.")
    parser.add_argument("url", nargs="?", default=DEFAULT_URL, help="Relay or stream URL")
    parser.add_argument("--seconds", type=float, default=5, help="How long to listen")
    parser.add_argument("--origin", help="Send a CORS preflight from this origin first")

    args = parser.parse_args()
    if not args.url:
        parser.error("no URL given and RELAY_PUBLIC_URL/RELAY_UPSTREAM_URL unset")

    ok = True
    if args.origin:
        ok = check_preflight(args.url, args.origin) and ok
    ok = check_stream(args.url, args.seconds, args.origin) and ok
    print("✅ OK" if ok else "❌ FAILED")
    sys.exit(0 if ok else 1)
