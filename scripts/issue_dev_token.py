"""Issue a bearer token for an existing user (Postgres only).

Usage:
    uv run python -m scripts.issue_dev_token <firebase_uid> [minutes]
The token carries the user's stored role and organization, so it exercises
exactly the access rules that user gets through the API.
"""

import asyncio
import sys
from datetime import timedelta

from geolab.core.config import get_settings
from geolab.infrastructure.persistence import database
from geolab.infrastructure.persistence.repositories import UserRepository
from geolab.infrastructure.security.jwt import create_identity_token


async def main() -> None:
    """Print a token for the user identified by firebase_uid."""
    if len(sys.argv) < 2:
        print(
            "Usage: uv run python -m scripts.issue_dev_token <firebase_uid> [minutes]",
            file=sys.stderr,
        )
        sys.exit(1)
    firebase_uid = sys.argv[1]
    minutes = int(sys.argv[2]) if len(sys.argv) > 2 else None

    get_settings()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("DATABASE_URL not configured", file=sys.stderr)
        sys.exit(1)

    try:
        async with database.AsyncSessionLocal() as session:
            user = await UserRepository(session).get_by_firebase_uid(firebase_uid)
    finally:
        await database.dispose_engine()
    if user is None:
        print(f"User not found: {firebase_uid}", file=sys.stderr)
        sys.exit(1)
    if not user.is_active:
        print(f"User is inactive: {firebase_uid}", file=sys.stderr)
        sys.exit(1)

    token = create_identity_token(
        user.firebase_uid,
        user.role,
        user.organization_id,
        email=user.email,
        expires_delta=timedelta(minutes=minutes) if minutes else None,
    )
    print(f"User: {user.id} ({user.email}) role={user.role} organization={user.organization_id}")
    print(token)


if __name__ == "__main__":
    asyncio.run(main())
