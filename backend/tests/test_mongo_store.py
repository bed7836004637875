from __future__ import annotations

# 실제 MongoDB 대상 테스트. MONGO_TEST_URI 가 있을 때만 돈다.
#   MONGO_TEST_URI=mongodb://localhost:27017 pytest backend/tests/test_mongo_store.py

import asyncio
import os
import uuid

import pytest

from conftest import SAMPLE, recipe
from recipe_catalog.db.memory import MemoryRecipeStore
from recipe_catalog.db.store import MongoRecipeStore
from recipe_catalog.services.filters import compile_filters
from recipe_catalog.services.nutrients import calories_numeric
from recipe_catalog.services.pipeline import derive_stage

MONGO_TEST_URI = os.getenv("MONGO_TEST_URI")

pytestmark = pytest.mark.skipif(not MONGO_TEST_URI, reason="MONGO_TEST_URI not set")

CALORIE_TEXTS = [
    "389 kcal",
    None,
    "kcal",
    "",
    "389\tkcal",
    "389\u00a0kcal",
    "1_000 kcal",
    "  12.5 kcal",
    "-7 kcal",
    "1e999 kcal",
    250,
    12.5,
]


def _docs():
    out = []
    for i, text in enumerate(CALORIE_TEXTS):
        nutrients = {} if text is None else {"calories": text}
        out.append({"title": f"R{i}", "rating": [4.8, 4.2, None][i % 3], "nutrients": nutrients})
    return out


async def _with_store(fn):
    store = await MongoRecipeStore.connect(MONGO_TEST_URI, "recipe_catalog_test", f"recipes_{uuid.uuid4().hex}")
    try:
        return await fn(store)
    finally:
        await store.collection.drop()
        await store.close()


def test_calories_derivation_matches_python():
    async def check(store):
        await store.replace_all(_docs(), batch_size=5)
        rows = await store.collection.aggregate([derive_stage(), {"$sort": {"_id": 1}}]).to_list(length=None)
        return [(r["nutrients"], r["caloriesNumeric"]) for r in rows]

    for nutrients, derived in asyncio.run(_with_store(check)):
        assert derived == calories_numeric(nutrients), nutrients


def test_count_and_fetch_match_memory_store():
    searches = [{}, {"rating": ">=4.5"}, {"calories": "<=400"}, {"title": "pie", "total_time": "<100"}]

    async def check(store):
        await store.replace_all([dict(d) for d in SAMPLE + _docs()], batch_size=4)
        memory = MemoryRecipeStore(await store.collection.find({}).sort("_id", 1).to_list(length=None))
        for params in searches:
            preds = compile_filters(params)
            assert await store.count(preds) == await memory.count(preds), params
            for skip in (0, 3):
                got = await store.fetch(preds, skip, 5)
                want = await memory.fetch(preds, skip, 5)
                assert [d["_id"] for d in got] == [d["_id"] for d in want], params
                assert all("caloriesNumeric" not in d for d in got)

    asyncio.run(_with_store(check))


def test_get_by_id_against_mongo():
    from bson import ObjectId

    from recipe_catalog.core.errors import StoreError

    async def check(store):
        await store.replace_all([recipe("One", 4.0, "10 kcal")])
        doc = await store.collection.find_one({})
        assert (await store.get(str(doc["_id"])))["title"] == "One"
        assert await store.get(str(ObjectId())) is None
        with pytest.raises(StoreError):
            await store.get("not-an-id")

    asyncio.run(_with_store(check))
