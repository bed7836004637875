# recipe_catalog/api/routes_recipes.py
# 레거시 경로: 이름 부분일치 목록(최대 100건) + 단건 상세
# 연산자 문법은 지원하지 않는다 (title 부분일치만). 전체 필터는 /api/recipes/search

from __future__ import annotations
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends

from recipe_catalog.core.deps import get_executor
from recipe_catalog.db.models.schemas import RecipeOut
from recipe_catalog.services.filters import compile_filters
from recipe_catalog.services.query import RecipeQueryExecutor

router = APIRouter(prefix="/recipes", tags=["recipes"])

NAME_FILTER_FIELDS = ("title",)

@router.get("", response_model=List[RecipeOut])
async def list_recipes_by_name(
    name: Optional[str] = None,
    executor: RecipeQueryExecutor = Depends(get_executor),
):
    predicates = compile_filters({"title": name}, fields=NAME_FILTER_FIELDS)
    return await executor.find_recipes(predicates)

@router.get("/{rid}")
async def get_recipe(rid: str, executor: RecipeQueryExecutor = Depends(get_executor)) -> Dict[str, Any]:
    # 비투영 상세 (nutrients, imported_at 포함)
    return await executor.get_by_id(rid)
