# recipe_catalog/services/nutrients.py
# 파생 필드 계산: nutrients.calories("389 kcal") → caloriesNumeric(389.0)
# 조회 시점에만 계산하고 저장하지 않는다.
# 첫 토큰 판정은 LEADING_NUMBER_PATTERN 하나로 한다 (Mongo $regexFind 와 공용)

from __future__ import annotations
import math
import re
from typing import Any, Dict, Mapping

CALORIES_FIELD = "caloriesNumeric"

# 공백 문자 목록 (str.isspace 기준). \s 해석이 Python/PCRE 간 달라서 직접 나열
SPACE_CHARS = (
    "\t\n\x0b\x0c\r\x1c-\x1f \x85\xa0\u1680\u2000-\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)
# ASCII 숫자만, 밑줄("1_000") 불가. 첫 토큰 전체가 숫자여야 함
NUMBER_TOKEN = r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
LEADING_NUMBER_PATTERN = (
    "^[" + SPACE_CHARS + "]*(" + NUMBER_TOKEN + ")(?:[" + SPACE_CHARS + "]|$)"
)
LEADING_NUMBER_RE = re.compile(LEADING_NUMBER_PATTERN)

def leading_number(text: Any) -> float:
    """앞쪽 공백 구분 토큰을 double로 파싱. 숫자가 아니면 0."""
    if text is None or isinstance(text, bool):
        return 0.0
    if isinstance(text, (int, float)):
        return float(text) if math.isfinite(text) else 0.0

    m = LEADING_NUMBER_RE.match(str(text))
    if not m:
        return 0.0
    value = float(m.group(1))
    return value if math.isfinite(value) else 0.0

def calories_numeric(nutrients: Any) -> float:
    if not isinstance(nutrients, Mapping):
        return 0.0
    return leading_number(nutrients.get("calories"))

def with_calories(doc: Mapping[str, Any]) -> Dict[str, Any]:
    # 원본은 건드리지 않고 파생 필드만 얹은 사본
    out = dict(doc)
    out[CALORIES_FIELD] = calories_numeric(doc.get("nutrients"))
    return out
