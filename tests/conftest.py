"""Pytest configuration and shared fixtures for habitual tests.

Provides an isolated SQLite database per test, repository/service wiring
with a fixed clock, and a habit factory.
"""

from __future__ import annotations

import logging
import tempfile
from datetime import date
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from habitual.infra.database import create_session_factory
from habitual.infra.repositories import SQLModelHabitRepository
from habitual.models import Habit
from habitual.services.habits import HabitScheduler, HabitService

# Tuesday; the reference date used throughout the streak scenarios.
REFERENCE_TODAY = date(2026, 2, 10)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers attached by setup_logging so tests do not leak streams."""
    yield
    logger = logging.getLogger("habitual")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a database session for a single test."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one repositories receive in production."""
    return create_session_factory(db_engine)


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def habit_repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def scheduler() -> HabitScheduler:
    """Scheduler pinned to REFERENCE_TODAY."""
    return HabitScheduler(clock=lambda: REFERENCE_TODAY)


@pytest.fixture
def habit_service(habit_repo, scheduler) -> HabitService:
    return HabitService(habit_repo, scheduler)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(db_session):
    """Factory for creating test habits directly in the database.

    Returns:
        Callable: Function that creates and persists Habit instances
    """

    def _create_habit(
        title: str = "Test Habit",
        frequency: str = "daily",
        days: str | None = None,
        is_active: bool = True,
    ) -> Habit:
        """Create a test habit with sensible defaults.

        Args:
            title: Habit title
            frequency: 'daily', 'weekly' or 'specific_days'
            days: JSON list of weekdays for specific_days, e.g. "[1, 3, 5]"
            is_active: Whether habit is currently active

        Returns:
            Habit: Persisted habit instance
        """
        habit = Habit(title=title, frequency=frequency, days=days, is_active=is_active)
        db_session.add(habit)
        db_session.commit()
        db_session.refresh(habit)
        return habit

    return _create_habit
