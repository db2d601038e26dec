"""Unit tests for the SQLModel habit repository."""

from __future__ import annotations

from datetime import date

from habitual.models import Completion, Habit


class TestHabitRecords:
    def test_create_and_get(self, habit_repo):
        created = habit_repo.create(Habit(title="Stretch"))
        assert created.id is not None

        fetched = habit_repo.get_by_id(created.id)
        assert fetched is not None
        assert fetched.title == "Stretch"
        assert fetched.frequency == "daily"
        assert fetched.current_streak == 0

    def test_get_missing_returns_none(self, habit_repo):
        assert habit_repo.get_by_id(999) is None

    def test_list_excludes_inactive_by_default(self, habit_repo, habit_factory):
        habit_factory(title="Read")
        habit_factory(title="Archived", is_active=False)
        habit_factory(title="Exercise")

        assert [h.title for h in habit_repo.list_active()] == ["Exercise", "Read"]
        assert [h.title for h in habit_repo.list_all(include_inactive=True)] == [
            "Archived",
            "Exercise",
            "Read",
        ]

    def test_update_persists_changes(self, habit_repo, habit_factory):
        habit = habit_repo.get_by_id(habit_factory(title="Walk").id)
        habit.current_streak = 4
        habit.best_streak = 9
        habit.last_completed_on = date(2026, 2, 10)
        habit_repo.update(habit)

        reloaded = habit_repo.get_by_id(habit.id)
        assert (reloaded.current_streak, reloaded.best_streak) == (4, 9)
        assert reloaded.last_completed_on == date(2026, 2, 10)

    def test_delete_removes_completions(self, habit_repo, habit_factory):
        habit = habit_factory(title="Journal")
        habit_repo.add_completion(Completion(habit_id=habit.id, occurred_on=date(2026, 2, 9)))
        habit_repo.add_completion(Completion(habit_id=habit.id, occurred_on=date(2026, 2, 10)))

        habit_repo.delete(habit.id)

        assert habit_repo.get_by_id(habit.id) is None
        assert habit_repo.completion_dates(habit.id) == []

    def test_recurrence_property(self, habit_factory):
        habit = habit_factory(title="Gym", frequency="specific_days", days="[1, 3, 5]")
        assert habit.recurrence.days == frozenset({1, 3, 5})
        assert habit.scheduled_days == [1, 3, 5]


class TestCompletions:
    def test_dates_are_newest_first(self, habit_repo, habit_factory):
        habit = habit_factory(title="Meditate")
        for day in (date(2026, 2, 8), date(2026, 2, 10), date(2026, 2, 9)):
            habit_repo.add_completion(Completion(habit_id=habit.id, occurred_on=day))

        assert habit_repo.completion_dates(habit.id) == [
            date(2026, 2, 10),
            date(2026, 2, 9),
            date(2026, 2, 8),
        ]

    def test_list_completions_limit(self, habit_repo, habit_factory):
        habit = habit_factory(title="Meditate")
        for day in range(1, 6):
            habit_repo.add_completion(Completion(habit_id=habit.id, occurred_on=date(2026, 2, day)))

        recent = habit_repo.list_completions(habit.id, limit=2)
        assert [c.occurred_on for c in recent] == [date(2026, 2, 5), date(2026, 2, 4)]

    def test_completions_are_scoped_to_habit(self, habit_repo, habit_factory):
        first = habit_factory(title="A")
        second = habit_factory(title="B")
        habit_repo.add_completion(Completion(habit_id=first.id, occurred_on=date(2026, 2, 10)))

        assert habit_repo.completion_dates(second.id) == []
        assert habit_repo.get_completion(second.id, date(2026, 2, 10)) is None

    def test_get_and_delete_completion(self, habit_repo, habit_factory):
        habit = habit_factory(title="Floss")
        habit_repo.add_completion(
            Completion(habit_id=habit.id, occurred_on=date(2026, 2, 10), note="before bed")
        )

        found = habit_repo.get_completion(habit.id, date(2026, 2, 10))
        assert found is not None
        assert found.note == "before bed"

        assert habit_repo.delete_completion(habit.id, date(2026, 2, 10)) is True
        assert habit_repo.delete_completion(habit.id, date(2026, 2, 10)) is False
        assert habit_repo.get_completion(habit.id, date(2026, 2, 10)) is None
