# recipe_catalog/db/store.py
# Mongo 저장소: motor aggregation 파이프라인으로 조회

from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from recipe_catalog.core.errors import StoreError
from recipe_catalog.db.indexes import ensure_recipe_indexes
from recipe_catalog.services.filters import FieldPredicate
from recipe_catalog.services.pipeline import count_pipeline, page_pipeline

log = logging.getLogger(__name__)

@contextmanager
def _store_errors(op: str):
    # 드라이버 예외 → StoreError (재시도 없음)
    try:
        yield
    except PyMongoError as e:
        log.error("mongo %s failed: %s", op, e)
        raise StoreError(f"{op} failed: {e}") from e

def parse_object_id(recipe_id: str) -> ObjectId:
    try:
        return ObjectId(recipe_id)
    except (InvalidId, TypeError) as e:
        raise StoreError(f"Invalid recipe id: {recipe_id!r}") from e

class MongoRecipeStore:
    def __init__(self, collection: AsyncIOMotorCollection, client: Optional[AsyncIOMotorClient] = None):
        self.collection = collection
        self._client = client

    @classmethod
    async def connect(cls, uri: str, db_name: str, collection: str) -> "MongoRecipeStore":
        client = AsyncIOMotorClient(uri)
        db = client[db_name]
        # 연결 확인 (준비 안 됐으면 예외)
        try:
            await db.command("ping")
        except PyMongoError:
            client.close()
            raise
        return cls(db[collection], client)

    async def ping(self) -> None:
        with _store_errors("ping"):
            await self.collection.database.command("ping")

    async def count(self, predicates: Sequence[FieldPredicate]) -> int:
        with _store_errors("count"):
            rows = await self.collection.aggregate(count_pipeline(predicates)).to_list(length=1)
        # 후보가 0건이면 $count는 문서를 내지 않는다
        return int(rows[0]["total"]) if rows else 0

    async def fetch(self, predicates: Sequence[FieldPredicate], skip: int, limit: int) -> List[Dict[str, Any]]:
        with _store_errors("fetch"):
            cur = self.collection.aggregate(page_pipeline(predicates, skip, limit))
            return await cur.to_list(length=limit)

    async def get(self, recipe_id: str) -> Optional[Dict[str, Any]]:
        oid = parse_object_id(recipe_id)
        with _store_errors("get"):
            return await self.collection.find_one({"_id": oid})

    async def replace_all(self, docs: List[Dict[str, Any]], batch_size: int = 1000) -> int:
        """전체 교체: 비우고 배치 단위로 다시 채움"""
        with _store_errors("replace_all"):
            res = await self.collection.delete_many({})
            log.info("cleared %d existing recipes", res.deleted_count)

            inserted = 0
            n_batches = (len(docs) + batch_size - 1) // batch_size
            for i in range(0, len(docs), batch_size):
                batch = docs[i: i + batch_size]
                await self.collection.insert_many(batch, ordered=False)
                inserted += len(batch)
                log.info("imported batch %d/%d (%d recipes)", i // batch_size + 1, n_batches, len(batch))
        return inserted

    async def ensure_indexes(self) -> None:
        with _store_errors("ensure_indexes"):
            await ensure_recipe_indexes(self.collection)

    async def close(self) -> None:
        if self._client:
            self._client.close()
        self._client = None
