# 환경변수 로딩 (.env)
from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    MONGO_URI: str = "mongodb://localhost:27017"  # 필요 시 prod/staging로 분리
    MONGO_DB: str = "recipesdb"
    RECIPES_COLLECTION: str = "recipes"

    # "mongo" | "memory" (memory는 로컬 확인/테스트용)
    STORE_BACKEND: str = "mongo"
    DB_INIT_RETRIES: int = 20

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    LOG_LEVEL: str = "INFO"

    # 벌크 임포트
    IMPORT_BATCH_SIZE: int = 1000
    RECIPES_JSON: str = "US_recipes.json"

    class Config:
        env_file = ".env"

settings = Settings()
