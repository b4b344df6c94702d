from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from common.models.post import Post
from common.types.datetime import UtcDateTime


class PostResponse(BaseModel):
    """포스트 응답 DTO.

    도메인 모델(Post)을 그대로 노출하지 않고 API 경계 전용 모델을 사용한다.
    생성 시 전달된 추가 필드는 extra 로 함께 응답한다.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    title: str
    content: str
    created_at: UtcDateTime = Field(alias="createdAt")
    updated_at: UtcDateTime | None = Field(default=None, alias="updatedAt")

    @classmethod
    def from_domain(cls, post: Post) -> "PostResponse":
        return cls.model_validate(post.to_record())


class ErrorResponse(BaseModel):
    error: str
