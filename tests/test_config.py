"""Tests for configuration loading."""

from __future__ import annotations

import pytest

from habitual.config import BaseConfig, _env_bool


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("HABITUAL_DATA_DIR", "HABITUAL_DEV_MODE", "HABITUAL_DATABASE_URL", "HABITUAL_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("true", True), (" YES ", True), ("on", True), ("0", False), ("no", False)],
)
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("HABITUAL_FLAG", raw)
    assert _env_bool("HABITUAL_FLAG") is expected


def test_env_bool_default():
    assert _env_bool("HABITUAL_UNSET_FLAG", default=True) is True


def test_data_dir_from_environment(tmp_path, monkeypatch):
    target = tmp_path / "habits"
    monkeypatch.setenv("HABITUAL_DATA_DIR", str(target))

    config = BaseConfig()

    assert config.DATA_DIR == target.resolve()
    assert target.is_dir()
    assert config.DATABASE_URL == f"sqlite:///{target.resolve() / 'habitual.db'}"


def test_explicit_data_dir_wins(tmp_path, monkeypatch):
    monkeypatch.setenv("HABITUAL_DATA_DIR", str(tmp_path / "ignored"))
    config = BaseConfig(data_dir=tmp_path / "chosen")
    assert config.DATA_DIR == (tmp_path / "chosen").resolve()


def test_database_url_override(tmp_path, monkeypatch):
    monkeypatch.setenv("HABITUAL_DATABASE_URL", "sqlite:///:memory:")
    assert BaseConfig(data_dir=tmp_path).DATABASE_URL == "sqlite:///:memory:"


def test_defaults(tmp_path):
    config = BaseConfig(data_dir=tmp_path)
    assert config.DEV_MODE is True
    assert config.LOG_LEVEL == "INFO"
    assert config.sqlalchemy_engine_options() == {"connect_args": {"check_same_thread": False}}


def test_non_sqlite_url_has_no_sqlite_connect_args(tmp_path, monkeypatch):
    monkeypatch.setenv("HABITUAL_DATABASE_URL", "postgresql://localhost/habits")
    assert BaseConfig(data_dir=tmp_path).sqlalchemy_engine_options() == {"connect_args": {}}
