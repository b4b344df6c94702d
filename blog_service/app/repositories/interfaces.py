from __future__ import annotations

from typing import Protocol

from common.models.post import Post


class PostStoreInterface(Protocol):
    """포스트 저장소(정렬된 key-value 맵)가 따라야 할 최소한의 계약.

    Service 레이어는 이 인터페이스에만 의존하고, 구체 구현(메모리, Mongo 등)은 몰라도 된다.
    키는 포스트 id 이며 values() 는 키 오름차순으로 반환한다.
    """

    def insert(self, key: str, post: Post) -> None:  # pragma: no cover - Protocol
        """키가 이미 있으면 덮어쓴다. (upsert)"""
        ...

    def get(self, key: str) -> Post | None:  # pragma: no cover - Protocol
        ...

    def remove(self, key: str) -> Post | None:  # pragma: no cover - Protocol
        """삭제된 값을 반환한다. 키가 없으면 None."""
        ...

    def values(self) -> list[Post]:  # pragma: no cover - Protocol
        ...
