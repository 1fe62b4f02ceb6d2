#!/usr/bin/env python3
"""
Issue Access Token Script
Mints a bearer token for a catalog caller using the configured JWT secret
"""

import argparse
import sys
from datetime import timedelta

from app.core.security import get_security_manager
from app.schemas.auth import CallerRole


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Issue a catalog access token")
    parser.add_argument("caller_id", help="Caller identifier stored as the token subject")
    parser.add_argument("--username", default=None, help="Display name (defaults to caller id)")
    parser.add_argument(
        "--role",
        choices=[role.value for role in CallerRole],
        default=CallerRole.USER.value,
        help="Caller role"
    )
    parser.add_argument(
        "--minutes",
        type=int,
        default=None,
        help="Lifetime in minutes (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)"
    )
    return parser.parse_args(argv)


def issue_token(caller_id, username=None, role=CallerRole.USER.value, minutes=None):
    """Return a signed access token for the caller"""
    expires = timedelta(minutes=minutes) if minutes else None
    return get_security_manager().create_access_token(
        {"sub": caller_id, "username": username or caller_id, "role": role},
        expires_delta=expires
    )


def main(argv=None):
    args = parse_args(argv)

    if args.minutes is not None and args.minutes <= 0:
        print("❌ ERROR: --minutes must be positive")
        return 1

    token = issue_token(args.caller_id, args.username, args.role, args.minutes)

    print("=" * 60)
    print(f"ACCESS TOKEN ({args.role}: {args.caller_id})")
    print("=" * 60)
    print(token)
    print()
    print("Use it as: Authorization: Bearer <token>")
    return 0


if __name__ == "__main__":
    sys.exit(main())
