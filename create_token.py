#!/usr/bin/env python3
"""
Mint a bearer token for the Storefront Content API.

The token is signed with ``SECRET_KEY`` from the environment, so run
this with the same environment as the API.

Usage:
    python create_token.py --sub admin@example.com --role admin --days 365
"""

import argparse

from storefront_api.app.core.security import ROLE_ADMIN, ROLE_USER, create_access_token


def main() -> None:
    ap = argparse.ArgumentParser(description="Create an access token for the storefront API.")
    ap.add_argument("--sub", required=True, help="Subject (user id or email) the token is issued to")
    ap.add_argument("--role", choices=[ROLE_ADMIN, ROLE_USER], default=ROLE_ADMIN, help="Role carried by the token")
    ap.add_argument("--name", help="Display name, shown in the returns queue")
    ap.add_argument("--days", type=int, default=365, help="Lifetime in days")
    args = ap.parse_args()

    claims = {"sub": args.sub, "role": args.role}
    if args.name:
        claims["name"] = args.name
    print(create_access_token(claims, expires_delta=args.days * 24 * 60 * 60))


if __name__ == "__main__":
    main()
