"""Print a Bearer token for local development.

Signs a token the same way the auth provider does, using the local
SUPABASE_JWT_SECRET. Usage: python -m app.scripts.create_dev_token [user_uuid]
"""

import sys
import uuid
from datetime import datetime, timedelta, timezone

import jwt

from app.config import settings


def create_dev_token(user_id: uuid.UUID, email: str = "dev@example.com") -> str:
    payload = {
        "sub": str(user_id),
        "email": email,
        "aud": settings.JWT_AUDIENCE,
        "exp": datetime.now(timezone.utc) + timedelta(days=1),
    }
    return jwt.encode(
        payload, settings.SUPABASE_JWT_SECRET, algorithm=settings.JWT_ALGORITHM
    )


if __name__ == "__main__":
    user_id = uuid.UUID(sys.argv[1]) if len(sys.argv) > 1 else uuid.uuid4()
    print(f"# user_id: {user_id}")
    print(f"Authorization: Bearer {create_dev_token(user_id)}")
