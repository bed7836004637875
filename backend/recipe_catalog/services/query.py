# recipe_catalog/services/query.py
# 쿼리 실행기: 저장소를 주입받아 목록/검색/단건 조회 수행
#
# 개수(count)와 페이지(fetch)는 서로 다른 두 번의 왕복이다.
# 동시 쓰기가 있으면 total과 data가 어긋날 수 있음 (best-effort, 결국 일관).

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Sequence

from recipe_catalog.core.errors import RecipeNotFound
from recipe_catalog.db.models.schemas import RecipeOut, RecipePage, to_detail
from recipe_catalog.services.filters import FieldPredicate
from recipe_catalog.services.pagination import LEGACY_CAP, page_request, total_pages

log = logging.getLogger(__name__)

class RecipeQueryExecutor:
    def __init__(self, store):
        self.store = store

    async def list_recipes(self, page: Any = None, limit: Any = None) -> RecipePage:
        """필터 없는 목록. total = 컬렉션 전체 개수"""
        return await self._page([], page, limit)

    async def search_recipes(
        self,
        predicates: Sequence[FieldPredicate],
        page: Any = None,
        limit: Any = None,
    ) -> RecipePage:
        """필터 검색. total/totalPages는 필터 통과 개수 기준"""
        return await self._page(predicates, page, limit)

    async def find_recipes(
        self, predicates: Sequence[FieldPredicate], cap: int = LEGACY_CAP
    ) -> List[RecipeOut]:
        # GET /recipes 용: 페이지 메타 없이 최대 cap건
        docs = await self.store.fetch(list(predicates), 0, cap)
        return [RecipeOut.from_doc(d) for d in docs]

    async def get_by_id(self, recipe_id: str) -> Dict[str, Any]:
        # 잘못된 id 형식은 저장소에서 StoreError, 없으면 RecipeNotFound
        doc: Optional[Dict[str, Any]] = await self.store.get(recipe_id)
        if doc is None:
            raise RecipeNotFound(recipe_id)
        return to_detail(doc)

    async def _page(
        self, predicates: Sequence[FieldPredicate], page: Any, limit: Any
    ) -> RecipePage:
        req = page_request(page, limit)
        predicates = list(predicates)

        total = await self.store.count(predicates)
        docs = await self.store.fetch(predicates, req.skip, req.limit)
        log.debug(
            "query predicates=%s page=%d limit=%d total=%d returned=%d",
            predicates, req.page, req.limit, total, len(docs),
        )
        return RecipePage(
            page=req.page,
            limit=req.limit,
            total=total,
            totalPages=total_pages(total, req.limit),
            data=[RecipeOut.from_doc(d) for d in docs],
        )
