# recipe_catalog/services/pipeline.py
# 쿼리 단계 정의: derive → filter → sort → count → paginate → project
# Mongo aggregation 버전과 메모리 저장소용 파이썬 버전을 같이 둔다 (의미 동일하게 유지)

from __future__ import annotations
import math
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple

from recipe_catalog.db.models.recipe import PUBLIC_FIELDS
from recipe_catalog.services.filters import FieldPredicate, matches_all, to_mongo_match
from recipe_catalog.services.nutrients import CALORIES_FIELD, LEADING_NUMBER_PATTERN, with_calories

# nutrients.calories → 문자열 → 첫 토큰이 숫자면 double (그 외/누락/비유한값은 0)
# 토큰 판정은 nutrients.leading_number 와 같은 정규식을 쓴다
_CALORIES_TEXT = {
    "$convert": {"input": "$nutrients.calories", "to": "string", "onError": "", "onNull": ""}
}
_CALORIES_VALUE = {
    "$convert": {
        "input": {"$arrayElemAt": ["$$m.captures", 0]},
        "to": "double",
        "onError": 0.0,
        "onNull": 0.0,
    }
}
CALORIES_EXPR = {
    "$let": {
        "vars": {"m": {"$regexFind": {"input": _CALORIES_TEXT, "regex": LEADING_NUMBER_PATTERN}}},
        "in": {
            "$let": {
                "vars": {"v": _CALORIES_VALUE},
                "in": {
                    "$cond": [
                        {"$and": [{"$gt": ["$$v", -math.inf]}, {"$lt": ["$$v", math.inf]}]},
                        "$$v",
                        0.0,
                    ]
                },
            }
        },
    }
}

# rating 내림차순(null/누락은 BSON 순서상 가장 작아 뒤로) → 칼로리 내림차순 → _id(삽입순)
SORT_SPEC = {"rating": -1, CALORIES_FIELD: -1, "_id": 1}

def derive_stage() -> Dict[str, Any]:
    return {"$addFields": {CALORIES_FIELD: CALORIES_EXPR}}

def match_stages(predicates: Sequence[FieldPredicate]) -> List[Dict[str, Any]]:
    # 조건 없으면 $match 생략
    return [{"$match": to_mongo_match(predicates)}] if predicates else []

def sort_stage() -> Dict[str, Any]:
    return {"$sort": dict(SORT_SPEC)}

def project_stage() -> Dict[str, Any]:
    # 포함 투영: _id + 공개 필드만 (caloriesNumeric 자동 제외)
    return {"$project": {f: 1 for f in PUBLIC_FIELDS}}

def count_pipeline(predicates: Sequence[FieldPredicate]) -> List[Dict[str, Any]]:
    # 1~2 단계만 끝까지 돌려서 개수
    return [derive_stage(), *match_stages(predicates), {"$count": "total"}]

def page_pipeline(
    predicates: Sequence[FieldPredicate], skip: int, limit: int
) -> List[Dict[str, Any]]:
    return [
        derive_stage(),
        *match_stages(predicates),
        sort_stage(),
        {"$skip": skip},
        {"$limit": limit},
        project_stage(),
    ]

# ------------------------------
# 파이썬 평가 (MemoryRecipeStore)
# ------------------------------

def sort_key(doc: Mapping[str, Any]) -> Tuple[int, float, float]:
    rating = doc.get("rating")
    calories = doc.get(CALORIES_FIELD) or 0.0
    if isinstance(rating, bool) or not isinstance(rating, (int, float)):
        return (1, 0.0, -calories)
    return (0, -float(rating), -calories)

def project(doc: Mapping[str, Any]) -> Dict[str, Any]:
    out = {"_id": doc.get("_id")}
    for f in PUBLIC_FIELDS:
        if f in doc:
            out[f] = doc[f]
    return out

def run_filter(
    docs: Iterable[Mapping[str, Any]], predicates: Sequence[FieldPredicate]
) -> List[Dict[str, Any]]:
    # derive + filter
    derived = (with_calories(d) for d in docs)
    return [d for d in derived if matches_all(d, predicates)]

def run_page(
    docs: Iterable[Mapping[str, Any]],
    predicates: Sequence[FieldPredicate],
    skip: int,
    limit: int,
) -> List[Dict[str, Any]]:
    # sorted()는 안정 정렬 → 동점은 입력(삽입) 순서 유지
    rows = sorted(run_filter(docs, predicates), key=sort_key)
    return [project(d) for d in rows[skip: skip + limit]]
