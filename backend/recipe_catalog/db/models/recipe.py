# 레시피 표준 스키마: 저장 문서 필드 정의
from typing import Any, Dict, List, Optional
from datetime import datetime

from pydantic import BaseModel

TEXT_FIELDS = ("cuisine", "title", "description", "serves", "continent", "country_state", "url")
NUMERIC_FIELDS = ("rating", "prep_time", "cook_time", "total_time")
LIST_FIELDS = ("ingredients", "instructions")

# 목록/검색 응답에 나가는 필드 (caloriesNumeric, imported_at 등 내부 필드 제외)
PUBLIC_FIELDS = (
    "cuisine", "title", "rating", "prep_time", "cook_time", "total_time",
    "description", "serves", "continent", "country_state", "url",
    "ingredients", "instructions", "nutrients",
)

class RecipeDoc(BaseModel):
    # 필수 필드 없음. 숫자 필드는 유한값 또는 None
    cuisine: Optional[str] = None
    title: Optional[str] = None
    rating: Optional[float] = None
    prep_time: Optional[float] = None
    cook_time: Optional[float] = None
    total_time: Optional[float] = None
    description: Optional[str] = None
    serves: Optional[str] = None
    continent: Optional[str] = None
    country_state: Optional[str] = None
    url: Optional[str] = None
    ingredients: List[str] = []
    instructions: List[str] = []
    nutrients: Dict[str, Any] = {}
    imported_at: Optional[datetime] = None
