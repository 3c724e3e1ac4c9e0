"""
Article service: listing, detail, creation and voting for articles.

Design notes
------------
- Every untrusted listing parameter is validated before the first query
  runs, in a fixed order: ``sort_by``, ``order``, ``limit``, ``page``, then
  the ``topic`` / ``author`` existence checks.
- ``sort_by`` and ``order`` end up in the ORDER BY clause, which cannot take
  bound parameters, so both are resolved against closed allow-lists to
  column expressions before any SQL is composed.  Filter values are always
  bound parameters.
- ``comment_count`` is aggregated with a LEFT JOIN on every read and served
  as a string, as is ``total_count``.
- The count query and the page query share one WHERE builder so the total
  always describes the same rows the page is cut from.
- Listing and detail reads go through the Redis cache-aside layer.  Writes
  never populate it: they read their result back uncached and queue an
  invalidation that only runs after the transaction commits.
"""
from sqlalchemy import asc, desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.cache import cache
from news_api.config import settings
from news_api.error_classifier import db_error_handler
from news_api.exceptions import NotFoundError, ValidationError
from news_api.models import Article, Comment
from news_api.schemas import ArticleCreate, VoteUpdate
from news_api.services.existence import check_exists
from news_api.services.pagination import resolve_page

# ---------------------------------------------------------------------------
# Query helpers
# ---------------------------------------------------------------------------

_ARTICLE_COLUMNS = (
    Article.article_id,
    Article.title,
    Article.body,
    Article.votes,
    Article.topic,
    Article.author,
    Article.created_at,
)

_SORTABLE_COLUMNS: frozenset[str] = frozenset(
    {"article_id", "title", "body", "votes", "topic", "author", "created_at", "comment_count"}
)

_SORT_DIRECTIONS = {"asc": asc, "desc": desc}


def _listing_query():
    """
    SELECT articles.*, count(comments.comment_id) AS comment_count
    FROM articles LEFT JOIN comments ... GROUP BY articles.article_id

    Returns the statement and its ``comment_count`` label.
    """
    comment_count = func.count(Comment.comment_id).label("comment_count")
    query = (
        select(*_ARTICLE_COLUMNS, comment_count)
        .select_from(Article)
        .outerjoin(Comment, Comment.article_id == Article.article_id)
        .group_by(Article.article_id)
    )
    return query, comment_count


def _apply_filters(query, topic: str | None, author: str | None):
    if topic:
        query = query.where(Article.topic == topic)
    if author:
        query = query.where(Article.author == author)
    return query


def _validate_sort(sort_by: str | None, order: str | None) -> tuple[str, str]:
    sort_by = "created_at" if sort_by is None else sort_by
    if sort_by not in _SORTABLE_COLUMNS:
        raise ValidationError(f"Bad Request: cannot sort by {sort_by!r}")

    order = "desc" if order is None else order.lower()
    if order not in _SORT_DIRECTIONS:
        raise ValidationError("Bad Request: order must be 'asc' or 'desc'")
    return sort_by, order


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def _article_to_dict(row) -> dict:
    data = dict(row._mapping)
    created_at = data["created_at"]
    data["created_at"] = created_at.isoformat() if created_at else None
    data["comment_count"] = str(data["comment_count"])
    return data


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def get_articles(
    db: AsyncSession,
    sort_by: str | None = None,
    order: str | None = None,
    topic: str | None = None,
    author: str | None = None,
    limit: str | int | None = None,
    page: str | int | None = None,
) -> dict:
    """
    Return ``{"articles": [...], "total_count": "N"}`` for one page of the
    filtered, sorted article listing.

    Raises ValidationError for a bad sort column, direction, limit or page;
    NotFoundError when ``topic`` or ``author`` does not exist, or when the
    filter matches rows but ``page`` is past the last of them.
    """
    sort_by, order = _validate_sort(sort_by, order)
    window = resolve_page(limit, page)

    if topic and not await check_exists(db, topic, "slug", "topics"):
        raise NotFoundError(f"Topic {topic!r} not found")
    if author and not await check_exists(db, author, "username", "users"):
        raise NotFoundError(f"User {author!r} not found")

    cache_key = f"articles:list:{sort_by}:{order}:{topic}:{author}:{window.limit}:{window.page}"
    cached = await cache.get(cache_key)
    if cached:
        return cached

    # 1. Total count under the same filters
    count_q = _apply_filters(select(func.count()).select_from(Article), topic, author)
    total: int = (await db.execute(count_q)).scalar_one()

    # 2. The requested page
    articles_q, comment_count = _listing_query()
    sort_col = comment_count if sort_by == "comment_count" else getattr(Article, sort_by)
    articles_q = (
        _apply_filters(articles_q, topic, author)
        .order_by(_SORT_DIRECTIONS[order](sort_col))
        .limit(window.sql_limit)
        .offset(window.offset)
    )
    rows = [] if window.unreachable else (await db.execute(articles_q)).all()

    if total and not rows:
        raise NotFoundError(f"Page {window.page} is past the last page")

    response = {
        "articles": [_article_to_dict(row) for row in rows],
        "total_count": str(total),
    }
    await cache.set(cache_key, response, ttl=settings.CACHE_TTL_LIST)
    return response


async def _fetch_article(db: AsyncSession, article_id: int) -> dict:
    query, _ = _listing_query()
    row = (await db.execute(query.where(Article.article_id == article_id))).first()
    if row is None:
        raise NotFoundError(f"Article {article_id} not found")
    return _article_to_dict(row)


async def get_article(db: AsyncSession, article_id: int) -> dict:
    """Return one article with its ``comment_count``; NotFoundError if absent."""
    cache_key = f"articles:detail:{article_id}"
    cached = await cache.get(cache_key)
    if cached:
        return cached

    data = await _fetch_article(db, article_id)
    await cache.set(cache_key, data, ttl=settings.CACHE_TTL_DETAIL)
    return data


async def create_article(db: AsyncSession, data: ArticleCreate) -> dict:
    """
    Insert an article and return it as read back from the database.

    An unknown author or topic violates a foreign key and surfaces as
    NotFoundError.
    """
    stmt = (
        insert(Article)
        .values(author=data.author, title=data.title, body=data.body, topic=data.topic)
        .returning(Article.article_id)
    )
    async with db_error_handler(db):
        article_id = (await db.execute(stmt)).scalar_one()

    cache.invalidate_after_commit(db)
    return await _fetch_article(db, article_id)


async def update_article_votes(db: AsyncSession, article_id: int, data: VoteUpdate) -> dict:
    """Add ``inc_votes`` to the article's votes and return the article."""
    stmt = (
        update(Article)
        .where(Article.article_id == article_id)
        .values(votes=Article.votes + data.inc_votes)
        .returning(Article.article_id)
        .execution_options(synchronize_session=False)
    )
    async with db_error_handler(db):
        updated = (await db.execute(stmt)).scalar_one_or_none()
    if updated is None:
        raise NotFoundError(f"Article {article_id} not found")

    cache.invalidate_after_commit(db, article_id)
    return await _fetch_article(db, article_id)
