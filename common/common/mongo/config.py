from __future__ import annotations

import os
from dataclasses import dataclass


MONGO_URI_ENV = "MONGO_URI"
MONGO_DB_NAME_ENV = "MONGO_DB_NAME"


@dataclass(slots=True, frozen=True)
class MongoSettings:
    uri: str
    db_name: str | None = None


def get_mongo_uri() -> str:
    """MongoDB 연결에 사용할 URI를 반환한다.

    환경 변수에서만 읽고, 설정되지 않은 경우에는 애플리케이션이 즉시
    실패하도록 RuntimeError를 발생시킨다.
    """

    value = os.getenv(MONGO_URI_ENV, "").strip()
    if not value:
        raise RuntimeError(
            f"{MONGO_URI_ENV} environment variable is required for the mongo storage backend",
        )
    return value


def get_mongo_db_name() -> str | None:
    """MONGO_DB_NAME 이 없으면 None 을 반환하고, 클라이언트는 URI의 기본 DB를 사용한다."""

    value = os.getenv(MONGO_DB_NAME_ENV, "").strip()
    return value or None


def load_mongo_settings() -> MongoSettings:
    return MongoSettings(uri=get_mongo_uri(), db_name=get_mongo_db_name())
