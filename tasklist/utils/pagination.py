from __future__ import annotations

import re
from dataclasses import dataclass
from math import ceil
from typing import Optional

from tasklist.config import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_int(value: Optional[str], default: Optional[int]) -> Optional[int]:
    """
    Parse the leading integer of a query-string value.

    "3" -> 3, "3abc" -> 3, "2.9" -> 2; anything without a leading integer
    (None, "", "abc") returns ``default``.
    """
    if value is None:
        return default
    m = _LEADING_INT.match(value)
    if not m:
        return default
    return int(m.group(1))


@dataclass(frozen=True)
class PageRequest:
    """A normalized (page, page_size) pair and the window it selects."""

    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def from_query(cls, page: Optional[str], page_size: Optional[str]) -> "PageRequest":
        p = max(1, parse_int(page, DEFAULT_PAGE))
        size = min(MAX_PAGE_SIZE, max(1, parse_int(page_size, DEFAULT_PAGE_SIZE)))
        return cls(page=p, page_size=size)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


def total_pages(total: int, page_size: int) -> int:
    return ceil(total / page_size) if page_size > 0 else 0
