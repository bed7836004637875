# recipe_catalog/main.py
# FastAPI 앱 초기화 및 라우터 설정
# 라우터는 각 기능별로 분리하여 관리

from __future__ import annotations

import logging
from asyncio import sleep

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_catalog.api.routes_catalog import router as catalog_router   # 페이지네이션 목록/검색
from recipe_catalog.api.routes_recipes import router as recipes_router   # 레거시 /recipes
from recipe_catalog.core.config import settings
from recipe_catalog.core.errors import RecipeNotFound, StoreError
from recipe_catalog.db.init import close_store, init_store

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

app = FastAPI(title="Recipe Catalog - API", version="0.1.0")

# CORS: 프론트 테이블 UI 허용
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# 앱 시작/종료 이벤트 핸들러
@app.on_event("startup")
async def on_startup() -> None:
    # 테스트 등에서 미리 주입했으면 그대로 사용
    if getattr(app.state, "store", None) is not None:
        return

    # 1) 저장소 먼저 붙는다 (최대 DB_INIT_RETRIES회, 1초 간격)
    store = None
    for i in range(settings.DB_INIT_RETRIES):
        try:
            store = await init_store(settings)
            log.info("[startup] store ready")
            break
        except Exception as e:
            log.warning("[startup] store init retry %d: %s", i + 1, e)
            await sleep(1.0)
    if store is None:
        log.error("[startup] store init failed after retries")
        return
    app.state.store = store

    # 2) 인덱스 보장
    try:
        await store.ensure_indexes()
        log.info("[startup] indexes ensured")
    except StoreError as e:
        log.warning("[startup] ensure_indexes failed: %s", e)

@app.on_event("shutdown")
async def on_shutdown() -> None:
    store = getattr(app.state, "store", None)
    app.state.store = None
    await close_store(store)

# ------------------------------
# 에러 → {"error": msg}
# ------------------------------

@app.exception_handler(RecipeNotFound)
async def _recipe_not_found(request: Request, exc: RecipeNotFound):
    return JSONResponse(status_code=404, content={"error": "Recipe not found"})

@app.exception_handler(StoreError)
async def _store_error(request: Request, exc: StoreError):
    log.error("store failure on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": str(exc)})

@app.exception_handler(StarletteHTTPException)
async def _http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

@app.exception_handler(RequestValidationError)
async def _validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=422, content={"error": str(exc.errors())})

@app.exception_handler(Exception)
async def _unhandled(request: Request, exc: Exception):
    log.exception("unhandled error on %s", request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc)})

@app.get("/")
async def root():
    return {"status": "ok"}

@app.get("/health")
async def health():
    ok = {"status": "ok", "db": "skip"}
    store = getattr(app.state, "store", None)
    if store is not None:
        try:
            await store.ping()
            ok["db"] = "ok"
        except StoreError as e:
            ok["db"] = f"error: {e}"
    return ok

# 라우터 prefix는 각 파일 내에서 정의함 , 중복 prefix 금지
app.include_router(recipes_router)
app.include_router(catalog_router)
