"""
레시피 서비스가 의존하는 외부 협력자 인터페이스 (Port)
- 검색/별점 컴포넌트는 구현체가 아니라 이 Protocol에만 의존한다
- 기본 구현체: services.user.crud.user_read_crud.UserDirectory,
  services.user.crud.favorite_crud.FavoritesService,
  services.recipe.crud.category_crud.CategoryDirectory
"""

from typing import Dict, Iterable, List, Protocol, Set


class UserDirectoryPort(Protocol):
    async def find_ids_by_name(self, fragment: str) -> List[int]:
        """이름에 fragment가 포함된(대소문자 무시) 사용자 ID 목록"""
        ...

    async def get_display_names(self, user_ids: Iterable[int]) -> Dict[int, str]:
        """사용자 ID -> 표시 이름 (없는 ID는 결과에서 빠짐)"""
        ...


class FavoritesPort(Protocol):
    async def get_favorited_ids(self, user_id: int, recipe_ids: Iterable[int]) -> Set[int]:
        """recipe_ids 중 user_id의 즐겨찾기에 들어있는 ID 집합"""
        ...


class CategoryDirectoryPort(Protocol):
    async def get_by_names(self, names: Iterable[str]) -> list:
        ...

    async def list_all(self) -> list:
        ...
