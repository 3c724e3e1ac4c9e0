from typing import Annotated

from fastapi import Path, Query

from news_api.schemas import INT4_MAX, INT4_MIN

# Integer path ids; values the id columns cannot hold are rejected as 400.
RowId = Annotated[int, Path(ge=INT4_MIN, le=INT4_MAX)]


class PaginationParams:
    """
    Reusable FastAPI dependency collecting the raw ``limit`` / ``page``
    query parameters.

    Values are passed through as received.  Parsing and range checks belong
    to ``news_api.services.pagination.resolve_page`` so the services reject
    bad input with the same error whether they are called over HTTP or
    directly.
    """

    def __init__(
        self,
        limit: str | None = Query(
            None,
            description="Items per page (positive integer, default 10).",
        ),
        page: str | None = Query(
            None,
            description="Page number (1-based).",
        ),
    ) -> None:
        self.limit = limit
        self.page = page


class ArticleQueryParams:
    """Raw sorting and filtering parameters for the article listing."""

    def __init__(
        self,
        sort_by: str | None = Query(
            None,
            description="Column to sort by (default created_at).",
        ),
        order: str | None = Query(
            None,
            description="Sort direction: 'asc' or 'desc' (default desc).",
        ),
        topic: str | None = Query(None, description="Only articles with this topic slug."),
        author: str | None = Query(None, description="Only articles by this username."),
    ) -> None:
        self.sort_by = sort_by
        self.order = order
        self.topic = topic
        self.author = author
