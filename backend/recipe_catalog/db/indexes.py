# 레시피 컬렉션 인덱스 생성
# 스타트업/임포트 후 ensure_recipe_indexes()를 await로 호출한다.

from motor.motor_asyncio import AsyncIOMotorCollection

async def ensure_recipe_indexes(col: AsyncIOMotorCollection) -> None:
    # 기본 정렬(rating desc) + 필터 대상 필드
    await col.create_index([("rating", -1), ("_id", 1)], name="rating_-1__id_1")
    await col.create_index([("title", 1)])
    await col.create_index([("cuisine", 1)])
    await col.create_index([("total_time", 1)])
    await col.create_index([("prep_time", 1)])
    await col.create_index([("cook_time", 1)])
