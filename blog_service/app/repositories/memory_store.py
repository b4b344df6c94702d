from __future__ import annotations

from common.models.post import Post

from .interfaces import PostStoreInterface


class InMemoryPostStore(PostStoreInterface):
    """프로세스 메모리에 포스트를 보관하는 저장소.

    프로세스가 재시작되면 데이터가 유실되므로 로컬 개발/테스트 용도로 사용한다.
    """

    def __init__(self) -> None:
        self._items: dict[str, Post] = {}

    def insert(self, key: str, post: Post) -> None:
        # 호출자가 들고 있는 인스턴스를 수정해도 저장된 값에 영향이 없도록 복사한다.
        self._items[key] = post.model_copy(deep=True)

    def get(self, key: str) -> Post | None:
        post = self._items.get(key)
        if post is None:
            return None
        return post.model_copy(deep=True)

    def remove(self, key: str) -> Post | None:
        return self._items.pop(key, None)

    def values(self) -> list[Post]:
        return [self._items[key].model_copy(deep=True) for key in sorted(self._items)]

    def __len__(self) -> int:
        return len(self._items)
