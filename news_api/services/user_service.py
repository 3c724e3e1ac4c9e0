"""
User service: read-only access to users.

Users are created outside the API (they arrive with the seeded data), so
this module only lists them and looks them up by username.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.exceptions import NotFoundError
from news_api.models import User


def _user_to_dict(row) -> dict:
    return {
        "username": row.username,
        "name": row.name,
        "avatar_url": row.avatar_url,
    }


async def get_users(db: AsyncSession) -> list[dict]:
    q = select(User.username, User.name, User.avatar_url).order_by(User.username)
    result = await db.execute(q)
    return [_user_to_dict(row) for row in result.all()]


async def get_user(db: AsyncSession, username: str) -> dict:
    q = select(User.username, User.name, User.avatar_url).where(User.username == username)
    row = (await db.execute(q)).first()
    if row is None:
        raise NotFoundError(f"User {username!r} not found")
    return _user_to_dict(row)
