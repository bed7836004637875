# recipe_catalog/db/memory.py
# 메모리 저장소: Mongo 없이 로컬 확인/테스트용. MongoRecipeStore와 같은 인터페이스
from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from bson import ObjectId

from recipe_catalog.db.store import parse_object_id
from recipe_catalog.services.filters import FieldPredicate
from recipe_catalog.services.pipeline import run_filter, run_page

log = logging.getLogger(__name__)

class MemoryRecipeStore:
    def __init__(self, docs: Optional[Iterable[Mapping[str, Any]]] = None):
        self._docs: List[Dict[str, Any]] = []
        if docs:
            self._insert(docs)

    def _insert(self, docs: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        added = []
        for d in docs:
            d = dict(d)
            d.setdefault("_id", ObjectId())
            self._docs.append(d)
            added.append(d)
        return added

    @property
    def docs(self) -> List[Dict[str, Any]]:
        return list(self._docs)

    async def ping(self) -> None:
        return None

    async def count(self, predicates: Sequence[FieldPredicate]) -> int:
        return len(run_filter(self._docs, predicates))

    async def fetch(self, predicates: Sequence[FieldPredicate], skip: int, limit: int) -> List[Dict[str, Any]]:
        return run_page(self._docs, predicates, skip, limit)

    async def get(self, recipe_id: str) -> Optional[Dict[str, Any]]:
        oid = parse_object_id(recipe_id)
        for d in self._docs:
            if d.get("_id") == oid:
                return dict(d)
        return None

    async def replace_all(self, docs: List[Dict[str, Any]], batch_size: int = 1000) -> int:
        self._docs = []
        n_batches = (len(docs) + batch_size - 1) // batch_size
        for i in range(0, len(docs), batch_size):
            batch = self._insert(docs[i: i + batch_size])
            log.info("imported batch %d/%d (%d recipes)", i // batch_size + 1, n_batches, len(batch))
        return len(self._docs)

    async def ensure_indexes(self) -> None:
        return None

    async def close(self) -> None:
        return None
