from __future__ import annotations

from pathlib import Path

import pytest

from blog_service.app.config import (
    CONFIG_PATH_ENV,
    STORAGE_BACKEND_MEMORY,
    STORAGE_BACKEND_MONGO,
    load_config,
)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_load_config_reads_yaml(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "config.yaml",
        """
storage:
  backend: mongo
  collection: blog_posts
api:
  legacy_not_found_status: true
""",
    )

    config = load_config(path)

    assert config.storage.backend == STORAGE_BACKEND_MONGO
    assert config.storage.collection == "blog_posts"
    assert config.api.legacy_not_found_status is True


def test_load_config_applies_defaults_for_empty_file(tmp_path: Path) -> None:
    config = load_config(_write(tmp_path / "config.yaml", ""))

    assert config.storage.backend == STORAGE_BACKEND_MEMORY
    assert config.storage.collection == "posts"
    assert config.api.legacy_not_found_status is False


def test_load_config_uses_defaults_when_no_file_found(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    monkeypatch.chdir(tmp_path)

    config = load_config()

    assert config.storage.backend == STORAGE_BACKEND_MEMORY


def test_load_config_finds_file_in_parent_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _write(tmp_path / "config.yaml", "api:\n  legacy_not_found_status: 'yes'\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    monkeypatch.chdir(nested)

    config = load_config()

    assert config.api.legacy_not_found_status is True


def test_load_config_from_env_path(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = _write(tmp_path / "custom.yaml", "storage:\n  collection: other\n")
    monkeypatch.setenv(CONFIG_PATH_ENV, str(path))

    assert load_config().storage.collection == "other"


def test_load_config_env_path_must_exist(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv(CONFIG_PATH_ENV, str(tmp_path / "missing.yaml"))

    with pytest.raises(RuntimeError, match="missing file"):
        load_config()


@pytest.mark.parametrize(
    "text",
    [
        "storage:\n  backend: redis\n",
        "api:\n  legacy_not_found_status: maybe\n",
        "- just\n- a list\n",
    ],
)
def test_load_config_rejects_invalid_values(tmp_path: Path, text: str) -> None:
    with pytest.raises(RuntimeError):
        load_config(_write(tmp_path / "config.yaml", text))
