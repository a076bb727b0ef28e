#!/usr/bin/env python3
"""
Mint an identity token for the Food Delivery API.

The identity becomes the ``owner`` of every client and item created
with the token.  SECRET_KEY must match the one the server runs with.

Usage:
    SECRET_KEY=... python create_token.py alice --days 365
"""

import argparse

from food_delivery_api.app.core.security import create_access_token


def main():
    ap = argparse.ArgumentParser(description="Create a signed identity token.")
    ap.add_argument("identity", help="Caller identity to embed as the token subject")
    ap.add_argument("--days", type=int, default=1, help="Token lifetime in days (default: 1)")
    args = ap.parse_args()

    print(create_access_token(args.identity, expires_delta=args.days * 24 * 60 * 60))


if __name__ == "__main__":
    main()
