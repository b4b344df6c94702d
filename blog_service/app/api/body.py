from __future__ import annotations

import json
from typing import Any

from fastapi import Request

from ..exceptions import INVALID_BODY_MESSAGE, InvalidRequestBodyError


def _is_json_media_type(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def json_object_body(request: Request) -> dict[str, Any]:
    """요청 바디를 JSON 객체(dict)로 읽는다.

    - Content-Type 이 JSON 이 아니거나 바디가 비어 있으면 빈 dict 로 취급한다.
      (필수 필드 검증은 서비스에서 동일한 메시지로 처리된다)
    - JSON 으로 선언됐는데 파싱할 수 없거나 객체가 아니면 InvalidRequestBodyError.
    """

    if not _is_json_media_type(request.headers.get("content-type", "")):
        return {}

    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise InvalidRequestBodyError(INVALID_BODY_MESSAGE) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidRequestBodyError(INVALID_BODY_MESSAGE)
    return data
