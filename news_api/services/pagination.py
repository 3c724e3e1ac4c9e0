import re
from dataclasses import dataclass

from news_api.config import settings
from news_api.exceptions import ValidationError

_DIGITS_RE = re.compile(r"[0-9]+")

# LIMIT and OFFSET are bound as signed 64-bit integers by every driver we run on.
MAX_SQL_BIGINT = 2**63 - 1


@dataclass(frozen=True)
class Page:
    limit: int
    page: int

    @property
    def offset(self) -> int:
        """SQL OFFSET for this page."""
        return self.limit * (self.page - 1)

    @property
    def sql_limit(self) -> int:
        # No table holds more rows than this, so clamping never changes a page.
        return min(self.limit, MAX_SQL_BIGINT)

    @property
    def unreachable(self) -> bool:
        """True when the page starts beyond any row a query could return."""
        return self.offset > MAX_SQL_BIGINT


def parse_positive_int(value: str | int | None, default: int, name: str) -> int:
    """
    Parse an untrusted query value into an integer >= 1.

    ``None`` means "not supplied" and yields *default*.  Anything else that
    is not a plain run of ASCII digits (or an int) with value >= 1 raises
    ValidationError.  There is no upper bound; see ``Page.sql_limit`` and
    ``Page.unreachable`` for how oversized windows are handled.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValidationError(f"Bad Request: {name} must be a positive integer")
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and _DIGITS_RE.fullmatch(value):
        digits = value.lstrip("0") or "0"
        # Past 19 digits every value behaves like MAX_SQL_BIGINT + 1, and
        # int() refuses very long strings outright.
        parsed = int(digits) if len(digits) <= 19 else MAX_SQL_BIGINT + 1
    else:
        raise ValidationError(f"Bad Request: {name} must be a positive integer")
    if parsed < 1:
        raise ValidationError(f"Bad Request: {name} must be a positive integer")
    return parsed


def resolve_page(limit: str | int | None = None, page: str | int | None = None) -> Page:
    """Validate ``limit`` then ``page`` and return the resulting window."""
    return Page(
        limit=parse_positive_int(limit, settings.DEFAULT_PAGE_SIZE, "limit"),
        page=parse_positive_int(page, 1, "page"),
    )
