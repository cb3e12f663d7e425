"""Pagination — pure page/limit parsing and page-count math for the list endpoint.

Invariants:
    - page and limit are always >= 1 after parsing
    - limit never exceeds the configured maximum
    - pages == ceil(total / limit); 0 when there are no records
    - A skip beyond MAX_OFFSET is past every possible row and is never queried
"""

import math
import re
from dataclasses import dataclass

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Largest OFFSET every supported driver binds (signed 32-bit)
MAX_OFFSET = 2**31 - 1


def parse_positive_int(raw: str | None, default: int) -> int:
    """Parse the leading integer of a query value; fall back to default.

    "3" -> 3, "3abc" -> 3, "2.9" -> 2, "abc"/""/None/"0"/"-1" -> default.
    """
    if raw is None:
        return default
    match = _LEADING_INT.match(raw)
    if not match:
        return default
    value = int(match.group(1))
    return value if value > 0 else default


@dataclass(frozen=True)
class PageRequest:
    """Normalized pagination input."""
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def out_of_range(self) -> bool:
        return self.skip > MAX_OFFSET


def build_page_request(
    page: str | None, limit: str | None,
    default_limit: int = 10, max_limit: int = 100,
) -> PageRequest:
    """Normalize raw query values into a PageRequest."""
    return PageRequest(
        page=parse_positive_int(page, 1),
        limit=min(parse_positive_int(limit, default_limit), max_limit),
    )


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total else 0


def build_pagination(request: PageRequest, total: int) -> dict:
    """Pagination block of the list response."""
    return {
        "current": request.page,
        "pages": page_count(total, request.limit),
        "total": total,
    }
