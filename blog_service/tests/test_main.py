from __future__ import annotations

import importlib
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from blog_service.app import main as main_module
from blog_service.app.config import CONFIG_PATH_ENV, STORAGE_BACKEND_MONGO
from blog_service.app.repositories.mongo_store import MongoPostStore
from common.mongo import client as mongo_client


def test_import_with_mongo_backend_does_not_connect(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("storage:\n  backend: mongo\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_PATH_ENV, str(config_path))
    # 접속 가능한 서버가 없는 주소. 접속을 시도하면 get_client 가 RuntimeError 를 던진다.
    monkeypatch.setenv("MONGO_URI", "mongodb://127.0.0.1:1/blog")

    def fail_on_connect():
        raise AssertionError("MongoDB must not be contacted while building the app")

    monkeypatch.setattr(mongo_client, "get_client", fail_on_connect)

    try:
        # when: 모듈 import 와 create_app 모두 접속 없이 끝나야 한다.
        module = importlib.reload(main_module)
        app = module.create_app()

        # then
        assert app.state.config.storage.backend == STORAGE_BACKEND_MONGO
        assert isinstance(app.state.posts_service._store, MongoPostStore)
        response = TestClient(app).get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "storage": "mongo"}
    finally:
        monkeypatch.undo()
        importlib.reload(main_module)


def test_common_package_is_loaded_from_project_folder() -> None:
    from common.models import post as post_module

    # common 패키지는 common/common 아래에 있다.
    path = Path(post_module.__file__).resolve()
    assert path.parent.parent.name == "common"
    assert path.parent.parent.parent.name == "common"
