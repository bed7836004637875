# 공용 의존성 (저장소 → 쿼리 실행기 주입)
from fastapi import Depends, Request

from recipe_catalog.core.errors import StoreError
from recipe_catalog.services.query import RecipeQueryExecutor

def get_store(request: Request):
    # startup에서 app.state.store에 올려둔 핸들. 미초기화면 예외
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreError("Recipe store is not initialized yet.")
    return store

def get_executor(store=Depends(get_store)) -> RecipeQueryExecutor:
    return RecipeQueryExecutor(store)
