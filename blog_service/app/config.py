from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE_NAME = "config.yaml"
CONFIG_PATH_ENV = "BLOG_SERVICE_CONFIG"

STORAGE_BACKEND_MEMORY = "memory"
STORAGE_BACKEND_MONGO = "mongo"
STORAGE_BACKENDS = (STORAGE_BACKEND_MEMORY, STORAGE_BACKEND_MONGO)


@dataclass(slots=True)
class StorageConfig:
    backend: str = STORAGE_BACKEND_MEMORY
    collection: str = "posts"


@dataclass(slots=True)
class ApiConfig:
    # true 이면 update/delete 대상이 없을 때 404 대신 400 을 응답한다.
    legacy_not_found_status: bool = False


@dataclass(slots=True)
class AppConfig:
    """blog-service 전체 설정 루트."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    api: ApiConfig = field(default_factory=ApiConfig)


def _find_config_path() -> Path | None:
    """설정 파일 경로를 결정한다.

    - BLOG_SERVICE_CONFIG 환경변수가 있으면 해당 경로를 사용한다. (없으면 에러)
    - 없으면 현재 작업 디렉토리부터 상위로 올라가며 config.yaml 을 찾는다.
    """

    explicit = os.getenv(CONFIG_PATH_ENV, "").strip()
    if explicit:
        path = Path(explicit)
        if not path.is_file():
            raise RuntimeError(f"{CONFIG_PATH_ENV} points to a missing file: {path}")
        return path

    current = Path.cwd()
    for directory in (current, *current.parents):
        candidate = directory / DEFAULT_CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate

    return None


def _parse_bool(raw: Any, key: str, path: Path) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and raw.strip().lower() in {"1", "true", "yes"}:
        return True
    if isinstance(raw, str) and raw.strip().lower() in {"0", "false", "no"}:
        return False
    raise RuntimeError(f"invalid {key} in {path}: {raw!r}")


def _parse_storage(data: dict[str, Any], path: Path) -> StorageConfig:
    storage = data.get("storage") or {}

    backend = str(storage.get("backend") or STORAGE_BACKEND_MEMORY).strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise RuntimeError(
            f"invalid storage.backend in {path}: {backend!r} (expected one of {STORAGE_BACKENDS})",
        )

    collection = str(storage.get("collection") or "posts").strip() or "posts"
    return StorageConfig(backend=backend, collection=collection)


def _parse_api(data: dict[str, Any], path: Path) -> ApiConfig:
    api = data.get("api") or {}
    raw = api.get("legacy_not_found_status", False)
    return ApiConfig(
        legacy_not_found_status=_parse_bool(raw, "api.legacy_not_found_status", path),
    )


def load_config(path: Path | None = None) -> AppConfig:
    """blog-service 설정을 로드하여 AppConfig 로 반환한다.

    설정 파일이 없으면 기본값(memory 저장소, 404 통일)을 사용한다.
    """

    if path is None:
        path = _find_config_path()
    if path is None:
        logger.info("%s not found, using default config", DEFAULT_CONFIG_FILE_NAME)
        return AppConfig()

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise RuntimeError(f"invalid config file {path}: top level must be a mapping")

    return AppConfig(
        storage=_parse_storage(data, path),
        api=_parse_api(data, path),
    )
