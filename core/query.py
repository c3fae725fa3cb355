# core/query.py
"""
Turns list-endpoint query parameters into SQLAlchemy filter clauses, an
ordering and a page window.

Bad input never raises here: an unparseable year or an unknown enum value
drops that filter, and a bad page/limit falls back to the defaults.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from sqlalchemy import JSON, func, literal, or_, select

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _to_positive_int(value, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


@dataclass(frozen=True)
class PageWindow:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.limit)


def parse_page(page=None, limit=None) -> PageWindow:
    return PageWindow(
        page=_to_positive_int(page, DEFAULT_PAGE),
        limit=_to_positive_int(limit, DEFAULT_LIMIT),
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _any_element_like(column, pattern: str):
    # list-valued JSON columns match when any single element matches
    elements = func.json_each(column).table_valued("value")
    return (
        select(literal(1))
        .select_from(elements)
        .where(elements.c.value.ilike(pattern, escape="\\"))
        .exists()
    )


def contains(column, value: str):
    pattern = f"%{_escape_like(value)}%"
    if isinstance(column.type, JSON):
        return _any_element_like(column, pattern)
    return column.ilike(pattern, escape="\\")


def as_int(value) -> Optional[int]:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def as_str(value) -> Optional[str]:
    return str(value)


def one_of(enum_cls) -> Callable[[Any], Optional[str]]:
    allowed = {member.value for member in enum_cls}

    def coerce(value):
        return value if value in allowed else None

    return coerce


@dataclass
class ListingSpec:
    """Which query parameters a listing understands and how it sorts."""

    exact: Dict[str, Tuple[Any, Callable]] = field(default_factory=dict)
    contains: Dict[str, Any] = field(default_factory=dict)
    search: Sequence[Any] = ()
    order_by: Sequence[Any] = ()

    def build_filters(self, params: Mapping[str, Any]) -> List[Any]:
        clauses = []
        for name, (column, coerce) in self.exact.items():
            raw = params.get(name)
            if raw is None or raw == "":
                continue
            value = coerce(raw)
            if value is not None:
                clauses.append(column == value)

        for name, column in self.contains.items():
            raw = params.get(name)
            if raw:
                clauses.append(contains(column, str(raw)))

        term = params.get("search")
        if term and self.search:
            clauses.append(or_(*[contains(column, str(term)) for column in self.search]))
        return clauses
