# client_registry/adapters/outbound/security/issue_api_token.py

import argparse
from datetime import timedelta
from typing import List, Optional

from client_registry.adapters.outbound.security.api_token_manager import ApiTokenManager, DEFAULT_EXPIRES_MINUTES


def main(argv: Optional[List[str]] = None) -> int:
    """Issue a bearer token for the registry API and print it."""
    parser = argparse.ArgumentParser(description="Issue an access token for the client registry API")
    parser.add_argument("subject", help="Who the token is issued to (the 'sub' claim)")
    parser.add_argument(
        "--minutes", type=int, default=DEFAULT_EXPIRES_MINUTES, help="Lifetime of the token in minutes"
    )
    args = parser.parse_args(argv)

    if args.minutes <= 0:
        parser.error("--minutes must be positive")

    token = ApiTokenManager.create_api_token(args.subject, expires_delta=timedelta(minutes=args.minutes))
    print(token)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

# Usage:
# python -m client_registry.adapters.outbound.security.issue_api_token ops@example.com --minutes 30
