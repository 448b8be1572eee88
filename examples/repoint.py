#!/usr/bin/env python3
"""Repoint a running drive-redirector to a new Google Drive file.

Example:

    python examples/repoint.py --url http://localhost --current abc123 --new def456 \
        --user admin --password secret
"""

from __future__ import annotations

import argparse
from typing import Sequence

import requests


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Repoint the redirect to a new file id.")
    parser.add_argument("--url", default="http://localhost", help="Base URL of the redirector")
    parser.add_argument("--current", required=True, help="File id currently redirected to")
    parser.add_argument("--new", required=True, help="File id to redirect to from now on")
    parser.add_argument("--user", required=True, help="Basic-Auth username (AUTH_USER)")
    parser.add_argument("--password", required=True, help="Basic-Auth password (decoded)")
    parser.add_argument("--timeout", type=float, default=10.0, help="Request timeout in seconds")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    resp = requests.put(
        f"{args.url.rstrip('/')}/{args.current}",
        json={"new_file_id": args.new},
        auth=(args.user, args.password),
        timeout=args.timeout,
    )
    if resp.status_code == 400:
        print(f"Rejected: is {args.current!r} still the current file id?")
        return 1
    if resp.status_code == 401:
        print("Rejected: wrong credentials")
        return 1
    resp.raise_for_status()

    print(f"Redirecting to {resp.text}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
