# scripts/import_recipes.py
# 레시피 JSON 벌크 임포트 (전체 교체)
# 사용: python -m recipe_catalog.scripts.import_recipes [path/to/US_recipes.json]
#  - 입력: {"0": {...recipe}, "1": {...}, ...} 형태의 JSON 객체
#  - 기존 컬렉션 비우고 IMPORT_BATCH_SIZE 단위로 insert
#  - 숫자 필드의 NaN/비숫자 값은 null로 정규화

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from recipe_catalog.core.config import Settings, settings
from recipe_catalog.db.init import close_store, init_store
from recipe_catalog.services.ingest import load_payload, normalize_payload

log = logging.getLogger(__name__)

async def import_file(path: Path, store, batch_size: int) -> int:
    payload = load_payload(path)
    docs = normalize_payload(payload)
    print(f"[import] found {len(docs)} recipes in {path}")
    if not docs:
        print("[import] no recipes found in the JSON file, collection left untouched")
        return 0

    inserted = await store.replace_all(docs, batch_size=batch_size)
    await store.ensure_indexes()
    return inserted

async def main(path: Optional[str] = None, cfg: Settings = settings) -> int:
    src = Path(path or cfg.RECIPES_JSON)
    if not src.is_file():
        print(f"[import] file not found: {src}")
        return 1

    store = await init_store(cfg)
    try:
        inserted = await import_file(src, store, cfg.IMPORT_BATCH_SIZE)
        print(f"[import] done. imported={inserted}")
    finally:
        await close_store(store)
    return 0

if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(levelname)s %(name)s: %(message)s")
    sys.exit(asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else None)))
