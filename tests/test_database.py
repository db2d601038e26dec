"""Tests for engine bootstrap and session helpers."""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from habitual.config import BaseConfig
from habitual.infra.database import bootstrap_database
from habitual.models import Completion, Habit


@pytest.fixture
def bootstrapped(tmp_path, monkeypatch):
    monkeypatch.delenv("HABITUAL_DATABASE_URL", raising=False)
    engine, factory = bootstrap_database(BaseConfig(data_dir=tmp_path))
    yield engine, factory
    engine.dispose()


def test_sqlite_pragmas_applied(bootstrapped):
    engine, _ = bootstrapped
    with engine.connect() as conn:
        assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
        assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"


def test_completion_requires_existing_habit(bootstrapped):
    _, factory = bootstrapped
    with pytest.raises(IntegrityError):
        with factory() as session:
            session.add(Completion(habit_id=999, occurred_on=date(2026, 2, 10)))


def test_factory_commits_on_success_and_rolls_back_on_error(bootstrapped):
    _, factory = bootstrapped
    with factory() as session:
        session.add(Habit(title="Kept"))

    with pytest.raises(RuntimeError):
        with factory() as session:
            session.add(Habit(title="Dropped"))
            session.flush()
            raise RuntimeError("boom")

    with factory() as session:
        titles = [h.title for h in session.exec(select(Habit)).all()]
    assert titles == ["Kept"]
