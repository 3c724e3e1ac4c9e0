"""
Comment service: paginated listing per article, creation, voting and
deletion.

Writes that change an article's comment count queue an invalidation of
that article's cache entries; it runs once the request commits.
"""
from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.cache import cache
from news_api.error_classifier import db_error_handler
from news_api.exceptions import NotFoundError
from news_api.models import Comment
from news_api.schemas import CommentCreate, VoteUpdate
from news_api.services.existence import check_exists
from news_api.services.pagination import resolve_page

_COMMENT_COLUMNS = (
    Comment.comment_id,
    Comment.article_id,
    Comment.author,
    Comment.body,
    Comment.votes,
    Comment.created_at,
)


def _comment_to_dict(row) -> dict:
    data = dict(row._mapping)
    created_at = data["created_at"]
    data["created_at"] = created_at.isoformat() if created_at else None
    return data


async def get_comments(
    db: AsyncSession,
    article_id: int,
    limit: str | int | None = None,
    page: str | int | None = None,
) -> list[dict]:
    """
    Return one page of the article's comments, oldest first.

    An empty page is only a valid answer for page 1 of an existing article;
    a missing article or a page past the end raises NotFoundError.
    """
    window = resolve_page(limit, page)

    q = (
        select(*_COMMENT_COLUMNS)
        .where(Comment.article_id == article_id)
        .order_by(Comment.comment_id)
        .limit(window.sql_limit)
        .offset(window.offset)
    )
    rows = [] if window.unreachable else (await db.execute(q)).all()

    if not rows:
        if not await check_exists(db, article_id, "article_id", "articles"):
            raise NotFoundError(f"Article {article_id} not found")
        if window.offset:
            raise NotFoundError(f"Page {window.page} is past the last page")

    return [_comment_to_dict(row) for row in rows]


async def add_comment(db: AsyncSession, article_id: int, data: CommentCreate) -> dict:
    """
    Post a comment by ``data.username`` on *article_id*.

    A missing article or user violates a foreign key and surfaces as
    NotFoundError.
    """
    stmt = (
        insert(Comment)
        .values(author=data.username, body=data.body, article_id=article_id)
        .returning(*_COMMENT_COLUMNS)
    )
    async with db_error_handler(db):
        row = (await db.execute(stmt)).one()

    cache.invalidate_after_commit(db, article_id)
    return _comment_to_dict(row)


async def update_comment_votes(db: AsyncSession, comment_id: int, data: VoteUpdate) -> dict:
    stmt = (
        update(Comment)
        .where(Comment.comment_id == comment_id)
        .values(votes=Comment.votes + data.inc_votes)
        .returning(*_COMMENT_COLUMNS)
        .execution_options(synchronize_session=False)
    )
    async with db_error_handler(db):
        row = (await db.execute(stmt)).first()
    if row is None:
        raise NotFoundError(f"Comment {comment_id} not found")
    return _comment_to_dict(row)


async def delete_comment(db: AsyncSession, comment_id: int) -> None:
    """Delete exactly one comment; NotFoundError when it does not exist."""
    stmt = (
        delete(Comment)
        .where(Comment.comment_id == comment_id)
        .returning(Comment.article_id)
        .execution_options(synchronize_session=False)
    )
    async with db_error_handler(db):
        article_id = (await db.execute(stmt)).scalar_one_or_none()
    if article_id is None:
        raise NotFoundError(f"Comment {comment_id} not found")

    cache.invalidate_after_commit(db, article_id)
