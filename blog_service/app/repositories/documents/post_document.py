from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from common.models.post import Post
from common.types.datetime import UtcDateTime


class PostDocument(BaseModel):
    """MongoDB posts 컬렉션 도큐먼트 모델.

    - 포스트 id 를 그대로 _id 로 사용한다. (ObjectId 를 쓰지 않는다)
    - Mongo 가 돌려주는 naive datetime 은 UtcDateTime 검증 단계에서 UTC 로 보정된다.
    - 클라이언트가 넘긴 추가 필드는 도큐먼트 최상위에 그대로 저장된다.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(alias="_id")
    title: str
    content: str
    created_at: UtcDateTime = Field(alias="createdAt")
    updated_at: UtcDateTime | None = Field(default=None, alias="updatedAt")

    @classmethod
    def from_domain(cls, post: Post) -> "PostDocument":
        data = post.to_record()
        data["_id"] = data.pop("id")
        return cls.model_validate(data)

    def to_mongo_record(self) -> dict[str, Any]:
        """by_alias=True 로 id -> _id 등 Mongo 필드 이름과 일치시킨다."""

        return self.model_dump(by_alias=True)

    def to_domain(self) -> Post:
        data = self.model_dump(by_alias=True)
        data["id"] = data.pop("_id")
        return Post.model_validate(data)
