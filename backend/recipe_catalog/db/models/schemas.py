# recipe_catalog/db/models/schemas.py
# 응답 스키마: 프론트 테이블/드로어가 쓰는 필드명 그대로
from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

class RecipeOut(BaseModel):
    # 공개 필드만. 파생/내부 필드가 섞여 들어와도 버린다
    model_config = ConfigDict(extra="ignore")

    id: str
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
    ingredients: Optional[List[str]] = None
    instructions: Optional[List[str]] = None
    nutrients: Optional[Dict[str, Any]] = None

    @classmethod
    def from_doc(cls, doc: Mapping[str, Any]) -> "RecipeOut":
        return cls(**to_detail(doc))

class RecipePage(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int
    data: List[RecipeOut] = Field(default_factory=list)

def to_detail(doc: Mapping[str, Any]) -> Dict[str, Any]:
    """_id(ObjectId) → id 문자열. 나머지 필드는 그대로 (상세 조회는 비투영)"""
    d = dict(doc)
    if "_id" in d:
        d["id"] = str(d.pop("_id"))
    return d
