"""Token helpers shared by the HTTP tests."""

import jwt

JWT_SECRET = "test-secret-key-for-hs256-signing-0123"


def make_token(user_id: str, email: str = "translator@example.com") -> str:
    return jwt.encode({"sub": user_id, "email": email}, JWT_SECRET, algorithm="HS256")


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


class UnavailableSession:
    """Stands in for an AsyncSession whose database cannot be reached."""

    def __init__(self, error: Exception):
        self.error = error

    async def execute(self, *args, **kwargs):
        raise self.error

    async def commit(self):
        raise self.error

    async def rollback(self):
        pass
