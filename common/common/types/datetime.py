from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated

from pydantic.functional_serializers import PlainSerializer
from pydantic.functional_validators import AfterValidator


def utc_now() -> datetime:
    """현재 시각을 tz-aware UTC datetime 으로 반환한다."""
    return datetime.now(timezone.utc)


def ensure_utc_datetime(value: datetime) -> datetime:
    """datetime 값을 UTC 기준으로 정규화한다.

    - tzinfo 가 없으면 UTC 로 간주해 tzinfo=UTC 를 부여
    - tzinfo 가 있으면 UTC 로 변환
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def serialize_datetime_to_utc_iso8601(value: datetime) -> str:
    """모든 datetime을 UTC 기준 ISO8601(+타임존) 문자열로 직렬화한다."""
    return ensure_utc_datetime(value).isoformat()


# 입력은 UTC 로 정규화하고, JSON 직렬화 시에는 ISO8601 문자열을 사용한다.
UtcDateTime = Annotated[
    datetime,
    AfterValidator(ensure_utc_datetime),
    PlainSerializer(
        serialize_datetime_to_utc_iso8601,
        return_type=str,
        when_used="json",
    ),
]
