from __future__ import annotations

from typing import Callable

from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.database import Database

from common.models.post import Post

from .documents.post_document import PostDocument
from .interfaces import PostStoreInterface


class MongoPostStore(PostStoreInterface):
    """posts 컬렉션을 정렬된 key-value 맵처럼 다루는 MongoDB 저장소.

    - _id 가 포스트 id 이므로 별도 인덱스 없이 키 조회/정렬이 가능하다.
    - Database 는 처음 사용할 때 database_factory 로 얻는다. 앱 생성(import) 시점에는
      MongoDB 에 접속하지 않는다.
    """

    def __init__(
        self,
        database_factory: Callable[[], Database],
        collection_name: str = "posts",
    ) -> None:
        self._database_factory = database_factory
        self._collection_name = collection_name
        self._col: Collection | None = None

    @property
    def collection(self) -> Collection:
        if self._col is None:
            self._col = self._database_factory()[self._collection_name]
        return self._col

    # --- helpers -----------------------------------------------------------------
    @staticmethod
    def _to_document(key: str, post: Post) -> dict:
        doc = PostDocument.from_domain(post).to_mongo_record()
        doc["_id"] = key
        return doc

    @staticmethod
    def _from_document(doc: dict) -> Post:
        return PostDocument.model_validate(doc).to_domain()

    # --- commands ----------------------------------------------------------------
    def insert(self, key: str, post: Post) -> None:
        self.collection.replace_one(
            {"_id": key}, self._to_document(key, post), upsert=True
        )

    def remove(self, key: str) -> Post | None:
        doc = self.collection.find_one_and_delete({"_id": key})
        if not doc:
            return None
        return self._from_document(doc)

    # --- queries -----------------------------------------------------------------
    def get(self, key: str) -> Post | None:
        doc = self.collection.find_one({"_id": key})
        if not doc:
            return None
        return self._from_document(doc)

    def values(self) -> list[Post]:
        cursor = self.collection.find({}, sort=[("_id", ASCENDING)])
        return [self._from_document(doc) for doc in cursor]
