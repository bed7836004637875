# recipe_catalog/db/init.py
# 저장소 생성/정리: 앱 시작 시 1회 만들어 app.state에 올리고 종료 시 닫는다

from __future__ import annotations
import logging

from recipe_catalog.core.config import Settings, settings as default_settings
from recipe_catalog.db.memory import MemoryRecipeStore
from recipe_catalog.db.store import MongoRecipeStore

log = logging.getLogger(__name__)

async def init_store(cfg: Settings = default_settings):
    backend = (cfg.STORE_BACKEND or "mongo").lower()
    if backend == "memory":
        log.info("using in-memory recipe store")
        return MemoryRecipeStore()
    if backend != "mongo":
        raise ValueError(f"unknown STORE_BACKEND: {cfg.STORE_BACKEND}")

    store = await MongoRecipeStore.connect(cfg.MONGO_URI, cfg.MONGO_DB, cfg.RECIPES_COLLECTION)
    log.info("connected to mongo db=%s collection=%s", cfg.MONGO_DB, cfg.RECIPES_COLLECTION)
    return store

async def close_store(store) -> None:
    # 앱 종료 시 커넥션 정리
    if store is not None:
        await store.close()
