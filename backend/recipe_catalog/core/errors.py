# 서비스 공용 예외
# - RecipeNotFound: id로 찾았는데 없음 (404)
# - StoreError: 저장소 연결/쿼리 실패, 잘못된 id 형식 (500)

class CatalogError(Exception):
    """레시피 카탈로그 예외 베이스"""

class RecipeNotFound(CatalogError):
    def __init__(self, recipe_id: str):
        super().__init__(f"Recipe not found: {recipe_id}")
        self.recipe_id = recipe_id

class StoreError(CatalogError):
    """저장소 레벨 실패. 로컬 재시도 없이 요청 경계까지 올린다."""
