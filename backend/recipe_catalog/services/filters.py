# recipe_catalog/services/filters.py
# 쿼리스트링 → 필드 조건(predicate) 컴파일러
# 모든 라우트가 이 모듈 하나만 쓴다. (/recipes 는 title 부분일치만 허용)

from __future__ import annotations
import operator
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from recipe_catalog.services.nutrients import CALORIES_FIELD

# 연산자 + 숫자 (긴 연산자 먼저: <= 가 < 보다 우선)
OPERATOR_RE = re.compile(r"(<=|>=|=|<|>)(-?\d+(?:\.\d+)?)")
NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")

_MONGO_OPS = {"<=": "$lte", ">=": "$gte", "=": "$eq", "<": "$lt", ">": "$gt"}
_PY_OPS = {
    "<=": operator.le,
    ">=": operator.ge,
    "=": operator.eq,
    "<": operator.lt,
    ">": operator.gt,
}

SUBSTRING = "substring"
COMPARE = "compare"

# (파라미터, 대상 필드, 종류): 컴파일 결과 순서도 이 순서를 따른다
FILTER_FIELDS = (
    ("title", "title", SUBSTRING),
    ("cuisine", "cuisine", SUBSTRING),
    ("serves", "serves", SUBSTRING),
    ("rating", "rating", COMPARE),
    ("total_time", "total_time", COMPARE),
    ("prep_time", "prep_time", COMPARE),
    ("cook_time", "cook_time", COMPARE),
    ("calories", CALORIES_FIELD, COMPARE),
)
FILTER_PARAMS = tuple(p for p, _, _ in FILTER_FIELDS)

@dataclass(frozen=True)
class Substring:
    """대소문자 무시 부분일치. 패턴은 정규식이 아니라 리터럴로 취급"""
    pattern: str

    def to_mongo(self) -> Dict[str, Any]:
        return {"$regex": re.escape(self.pattern), "$options": "i"}

    def test(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        return self.pattern.lower() in value.lower()

@dataclass(frozen=True)
class Comparison:
    op: str
    value: float

    def to_mongo(self) -> Dict[str, Any]:
        return {_MONGO_OPS[self.op]: self.value}

    def test(self, value: Any) -> bool:
        # Mongo와 동일: null/누락/비숫자는 어떤 비교도 만족하지 않음
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return _PY_OPS[self.op](value, self.value)

Predicate = Union[Substring, Comparison]

@dataclass(frozen=True)
class FieldPredicate:
    field: str
    predicate: Predicate

    def matches(self, doc: Mapping[str, Any]) -> bool:
        return self.predicate.test(doc.get(self.field))

def parse_comparison(raw: Any) -> Optional[Comparison]:
    """
    ">=4.5" → (>=, 4.5), "4" → (=, 4), "banana" → None
    - 처음 찾은 연산자+숫자 쌍만 사용
    - 음수 리터럴은 숫자 자체로 허용 (">=-5", "-5")
    """
    s = str(raw).strip() if raw is not None else ""
    if not s:
        return None
    m = OPERATOR_RE.search(s)
    if m:
        return Comparison(m.group(1), float(m.group(2)))
    if NUMBER_RE.fullmatch(s):
        return Comparison("=", float(s))
    return None

def parse_substring(raw: Any) -> Optional[Substring]:
    if raw is None:
        return None
    # NUL 이 섞인 $regex 는 Mongo가 거절한다 (51091) → 제거
    s = str(raw).replace("\x00", "")
    if not s.strip():
        return None
    return Substring(s)

def compile_filters(
    params: Mapping[str, Any],
    fields: Optional[Iterable[str]] = None,
) -> List[FieldPredicate]:
    """
    원시 파라미터 맵 → [FieldPredicate, ...]
    잘못된 값은 에러 없이 버린다. fields로 허용 파라미터를 좁힐 수 있다.
    """
    allowed = set(fields) if fields is not None else set(FILTER_PARAMS)
    out: List[FieldPredicate] = []
    for param, field, kind in FILTER_FIELDS:
        if param not in allowed:
            continue
        raw = params.get(param)
        pred = parse_substring(raw) if kind == SUBSTRING else parse_comparison(raw)
        if pred is not None:
            out.append(FieldPredicate(field, pred))
    return out

def to_mongo_match(predicates: Iterable[FieldPredicate]) -> Dict[str, Any]:
    return {fp.field: fp.predicate.to_mongo() for fp in predicates}

def matches_all(doc: Mapping[str, Any], predicates: Iterable[FieldPredicate]) -> bool:
    return all(fp.matches(doc) for fp in predicates)
