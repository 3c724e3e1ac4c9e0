"""
Row existence checks used to tell "the filter value does not exist" apart
from "the filter value exists but nothing matches".
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.models import Article, Comment, Topic, User

# Identifiers cannot be bound parameters, so only these (table, column)
# pairs may ever reach a query.
_CHECKABLE_COLUMNS = {
    ("topics", "slug"): Topic.slug,
    ("users", "username"): User.username,
    ("articles", "article_id"): Article.article_id,
    ("comments", "comment_id"): Comment.comment_id,
}


async def check_exists(db: AsyncSession, value, column: str, table: str) -> bool:
    """
    Return True iff a row in *table* has *column* equal to *value*.

    Raises ValueError for a table/column pair outside the allow-list; that
    is a programming error, not a client one.
    """
    try:
        target = _CHECKABLE_COLUMNS[(table, column)]
    except KeyError:
        raise ValueError(f"Existence check not allowed on {table}.{column}") from None

    result = await db.execute(select(target).where(target == value).limit(1))
    return result.first() is not None
