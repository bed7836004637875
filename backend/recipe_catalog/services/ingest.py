# recipe_catalog/services/ingest.py
# 벌크 임포트용 레코드 정규화
# - 숫자 필드: 유한한 숫자만, 나머지(NaN/inf/문자열/bool)는 None
# - 텍스트 필드: 빈 값은 None
# - 입력은 {key: recipe, ...} 형태의 JSON 객체 (배열 아님)

from __future__ import annotations
import json
import logging
import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from recipe_catalog.db.models.recipe import LIST_FIELDS, NUMERIC_FIELDS, TEXT_FIELDS, RecipeDoc

log = logging.getLogger(__name__)

def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)

def finite_or_none(v: Any) -> Optional[float]:
    if _is_number(v) and math.isfinite(v):
        return v
    return None

def text_or_none(v: Any) -> Optional[str]:
    if isinstance(v, str):
        return v if v else None
    if _is_number(v) and math.isfinite(v):
        return str(v)  # serves: 4 같은 값
    return None

def text_list(v: Any) -> List[str]:
    if isinstance(v, list):
        return [str(x) for x in v if x is not None and str(x).strip()]
    if isinstance(v, str) and v.strip():
        return [v]
    return []

def clean_nutrients(v: Any) -> Dict[str, Any]:
    if not isinstance(v, Mapping):
        return {}
    out: Dict[str, Any] = {}
    for k, x in v.items():
        if _is_number(x) and not math.isfinite(x):
            x = None
        out[str(k)] = x
    return out

def normalize_recipe(raw: Mapping[str, Any], imported_at: Optional[datetime] = None) -> Dict[str, Any]:
    """원본 레코드 → 저장 문서"""
    fields: Dict[str, Any] = {}
    for f in TEXT_FIELDS:
        fields[f] = text_or_none(raw.get(f))
    for f in NUMERIC_FIELDS:
        fields[f] = finite_or_none(raw.get(f))
    for f in LIST_FIELDS:
        fields[f] = text_list(raw.get(f))
    fields["nutrients"] = clean_nutrients(raw.get("nutrients"))
    fields["imported_at"] = imported_at or datetime.now(timezone.utc)
    return RecipeDoc(**fields).model_dump()

def iter_records(payload: Any) -> Iterator[Mapping[str, Any]]:
    # 입력은 {키: 레시피} 객체 하나. 배열은 받지 않음. dict 아닌 값은 건너뜀
    if not isinstance(payload, Mapping):
        raise ValueError(f"expected a JSON object of recipes, got {type(payload).__name__}")
    for i, rec in enumerate(payload.values()):
        if not isinstance(rec, Mapping):
            log.warning("skip non-object record #%d (%s)", i, type(rec).__name__)
            continue
        yield rec

def load_payload(path: Union[str, Path]) -> Any:
    # 파이썬 json은 NaN/Infinity 토큰을 그대로 읽는다 → normalize에서 None 처리
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)

def normalize_payload(payload: Any, imported_at: Optional[datetime] = None) -> List[Dict[str, Any]]:
    stamp = imported_at or datetime.now(timezone.utc)
    return [normalize_recipe(r, stamp) for r in iter_records(payload)]
