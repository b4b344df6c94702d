from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime
from typing import Any, Callable

from fastapi import Request

from common.models.post import (
    REQUIRED_FIELDS,
    Post,
    is_non_empty_str,
    strip_protected_fields,
)
from common.mongo.client import get_database
from common.types.datetime import utc_now

from ..config import STORAGE_BACKEND_MONGO, StorageConfig
from ..exceptions import (
    CREATE_REQUIRED_MESSAGE,
    UPDATE_INVALID_MESSAGE,
    PostNotFoundError,
    PostValidationError,
)
from ..repositories.interfaces import PostStoreInterface
from ..repositories.memory_store import InMemoryPostStore
from ..repositories.mongo_store import MongoPostStore

logger = logging.getLogger(__name__)

# id 충돌 시 재발급을 시도하는 최대 횟수
MAX_ID_ATTEMPTS = 5


def _new_post_id() -> str:
    return str(uuid.uuid4())


class PostsService:
    """블로그 포스트 CRUD 비즈니스 로직.

    - 저장소(PostStoreInterface)에만 의존하고, 메모리/Mongo 세부 구현은 알지 않는다.
    - FastAPI 는 동기 엔드포인트를 스레드 풀에서 실행하므로, 모든 연산을 하나의 락으로
      직렬화해 read-modify-write 가 서로 끼어들지 않도록 한다.
    - 저장소에서 발생한 예외는 잡지 않고 그대로 전파한다.
    """

    def __init__(
        self,
        store: PostStoreInterface,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = _new_post_id,
    ) -> None:
        self._store = store
        self._clock = clock
        self._id_factory = id_factory
        self._lock = threading.Lock()

    def create_post(self, fields: dict[str, Any]) -> Post:
        """title/content 를 검증하고 새 포스트를 저장한다.

        id/createdAt/updatedAt 은 서비스가 부여하며, 그 외 추가 필드는 그대로 보존한다.
        """

        if not all(is_non_empty_str(fields.get(name)) for name in REQUIRED_FIELDS):
            raise PostValidationError(CREATE_REQUIRED_MESSAGE)

        data = strip_protected_fields(fields)

        with self._lock:
            post_id = self._allocate_id()
            post = Post.model_validate(
                {
                    **data,
                    "id": post_id,
                    "createdAt": self._clock(),
                    "updatedAt": None,
                }
            )
            self._store.insert(post.id, post)

        logger.info("created blog post", extra={"post_id": post.id, "action": "create"})
        return post

    def list_posts(self) -> list[Post]:
        with self._lock:
            return self._store.values()

    def get_post(self, post_id: str) -> Post:
        with self._lock:
            post = self._store.get(post_id)

        if post is None:
            logger.info("blog post not found", extra={"post_id": post_id, "action": "get"})
            raise PostNotFoundError(post_id, action="get")
        return post

    def update_post(self, post_id: str, fields: dict[str, Any]) -> Post:
        """기존 포스트 위에 전달된 필드를 얕게 병합하고 updatedAt 을 갱신한다."""

        changes = strip_protected_fields(fields)

        with self._lock:
            current = self._store.get(post_id)
            if current is None:
                logger.info(
                    "blog post not found", extra={"post_id": post_id, "action": "update"}
                )
                raise PostNotFoundError(post_id, action="update")

            for name in REQUIRED_FIELDS:
                if name in changes and not is_non_empty_str(changes[name]):
                    raise PostValidationError(UPDATE_INVALID_MESSAGE)

            data = current.to_record()
            data.update(changes)
            data["updatedAt"] = self._clock()

            updated = Post.model_validate(data)
            self._store.insert(post_id, updated)

        logger.info("updated blog post", extra={"post_id": post_id, "action": "update"})
        return updated

    def delete_post(self, post_id: str) -> Post:
        with self._lock:
            removed = self._store.remove(post_id)

        if removed is None:
            logger.info("blog post not found", extra={"post_id": post_id, "action": "delete"})
            raise PostNotFoundError(post_id, action="delete")

        logger.info("deleted blog post", extra={"post_id": post_id, "action": "delete"})
        return removed

    def _allocate_id(self) -> str:
        # 호출자는 self._lock 을 잡고 있어야 한다.
        for _ in range(MAX_ID_ATTEMPTS):
            post_id = self._id_factory()
            if self._store.get(post_id) is None:
                return post_id
        raise RuntimeError(f"could not allocate a unique post id after {MAX_ID_ATTEMPTS} attempts")


def build_post_store(config: StorageConfig) -> PostStoreInterface:
    """설정된 backend 에 맞는 저장소를 생성한다."""

    if config.backend == STORAGE_BACKEND_MONGO:
        return MongoPostStore(get_database, config.collection)
    return InMemoryPostStore()


def get_posts_service(request: Request) -> PostsService:
    """FastAPI DI용 PostsService 조회. (create_app 에서 한 번 생성해 app.state 에 보관)"""

    return request.app.state.posts_service
