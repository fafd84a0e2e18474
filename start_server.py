#!/usr/bin/env python3
"""Start the TripMatch API under uvicorn, honouring the PORT environment variable."""

import os
import sys

import uvicorn

DEFAULT_PORT = 8000


def _port() -> int:
    raw = os.environ.get("PORT", str(DEFAULT_PORT))
    try:
        return int(raw)
    except ValueError:
        print(f"Warning: Invalid PORT value '{raw}', using default {DEFAULT_PORT}", file=sys.stderr)
        return DEFAULT_PORT


def main() -> None:
    src_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
    if os.path.isdir(src_path) and src_path not in sys.path:
        # Allows running from a checkout without `pip install -e .`
        sys.path.insert(0, src_path)

    port = _port()
    print(f"Starting TripMatch API on port {port}...", file=sys.stderr)
    uvicorn.run(
        "tripmatch.main:app",
        host="0.0.0.0",
        port=port,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )


if __name__ == "__main__":
    main()
