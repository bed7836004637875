# recipe_catalog/services/pagination.py
# page/limit 파싱 + 클램프. 잘못된 입력은 거절하지 않고 기본값으로 대체

from __future__ import annotations
import math
import re
from dataclasses import dataclass
from typing import Any

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 50
MAX_PAGE = 1_000_000_000  # $skip 이 int64 범위를 넘지 않도록
LEGACY_CAP = 100          # GET /recipes 최대 건수

_INT_RE = re.compile(r"\s*([+-]?)(\d+)")
_MAX_DIGITS = 18  # 그 이상은 어차피 클램프 대상. int() 자릿수 제한(4300)도 피함

def parse_int(value: Any, default: int) -> int:
    # "3", " 3", "3abc" → 3 / "abc", None → default
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    m = _INT_RE.match(str(value))
    if not m:
        return default
    sign = -1 if m.group(1) == "-" else 1
    digits = m.group(2).lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS:
        return sign * 10 ** _MAX_DIGITS
    return sign * int(digits)

@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

def page_request(page: Any = None, limit: Any = None) -> PageRequest:
    p = min(max(parse_int(page, DEFAULT_PAGE), 1), MAX_PAGE)
    n = min(max(parse_int(limit, DEFAULT_LIMIT), 1), MAX_LIMIT)
    return PageRequest(page=p, limit=n)

def total_pages(total: int, limit: int) -> int:
    if total <= 0:
        return 0
    return math.ceil(total / limit)
