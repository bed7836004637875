# recipe_catalog/api/routes_catalog.py
# 테이블 UI용 페이지네이션 목록/검색
# page/limit 은 문자열로 받아 느슨하게 파싱 (잘못된 값 → 기본값, 422 없음)

from __future__ import annotations
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from recipe_catalog.core.deps import get_executor
from recipe_catalog.db.models.schemas import RecipePage
from recipe_catalog.services.filters import compile_filters
from recipe_catalog.services.query import RecipeQueryExecutor

router = APIRouter(prefix="/api/recipes", tags=["catalog"])

@router.get("", response_model=RecipePage)
async def list_recipes(
    page: Optional[str] = Query(None, description="1부터 시작"),
    limit: Optional[str] = Query(None, description="1~50, 기본 10"),
    executor: RecipeQueryExecutor = Depends(get_executor),
):
    return await executor.list_recipes(page, limit)

# 정적 경로를 먼저 선언 (/search → /{rid} 충돌 방지)
@router.get("/search", response_model=RecipePage)
async def search_recipes(
    title: Optional[str] = None,
    cuisine: Optional[str] = None,
    serves: Optional[str] = None,
    rating: Optional[str] = Query(None, description="예: >=4.5, 4"),
    total_time: Optional[str] = Query(None, description="예: <=30"),
    prep_time: Optional[str] = None,
    cook_time: Optional[str] = None,
    calories: Optional[str] = Query(None, description="예: <=400 (nutrients.calories 앞 숫자 기준)"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
    executor: RecipeQueryExecutor = Depends(get_executor),
):
    predicates = compile_filters({
        "title": title,
        "cuisine": cuisine,
        "serves": serves,
        "rating": rating,
        "total_time": total_time,
        "prep_time": prep_time,
        "cook_time": cook_time,
        "calories": calories,
    })
    return await executor.search_recipes(predicates, page, limit)

@router.get("/{rid}")
async def get_recipe(rid: str, executor: RecipeQueryExecutor = Depends(get_executor)) -> Dict[str, Any]:
    return await executor.get_by_id(rid)
