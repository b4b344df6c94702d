from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from common.types.datetime import UtcDateTime


# 클라이언트 입력으로 덮어쓸 수 없는 필드 (wire 이름과 속성 이름 모두)
PROTECTED_FIELDS: frozenset[str] = frozenset(
    {"id", "_id", "createdAt", "created_at", "updatedAt", "updated_at"}
)

# 생성 시 반드시 비어 있지 않은 문자열이어야 하는 필드
REQUIRED_FIELDS: tuple[str, ...] = ("title", "content")


class Post(BaseModel):
    """블로그 포스트 도메인 모델 (API/저장소에서 공통 사용).

    - JSON 경계에서는 camelCase(createdAt, updatedAt) 이름을 사용한다.
    - 생성 시 함께 전달된 추가 필드는 model_extra 에 그대로 보존된다.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    title: str
    content: str
    created_at: UtcDateTime = Field(alias="createdAt")
    updated_at: UtcDateTime | None = Field(default=None, alias="updatedAt")

    def to_record(self) -> dict[str, Any]:
        """wire 이름 기준의 dict 로 변환한다. (datetime 은 그대로 유지)"""

        return self.model_dump(by_alias=True)


def strip_protected_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """요청 바디에서 id/createdAt/updatedAt 등 보호 필드를 제거한 사본을 반환한다."""

    return {key: value for key, value in fields.items() if key not in PROTECTED_FIELDS}


def is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and value != ""
