"""
Тесты последовательности ежедневных заданий: следующий невыполненный шаг,
завершение «Пути дня», навигация назад, прогресс, ошибки конфигурации.
"""
import logging

import pytest

from app.schemas.daily_tasks import DailyTaskDescriptor, TaskCompletionStatus
from app.services.daily_tasks_sequence import (
    DAILY_TASK_PATHS,
    DAILY_TASK_SEQUENCE,
    DailyTaskSequence,
    build_descriptors,
)
from app.utils.exceptions import ConfigurationDefect

THREE_TASKS = DailyTaskSequence(build_descriptors((
    ("spiritual_journal", "/today/spiritual-journal"),
    ("daily_study", "/today/daily-study"),
    ("quick_reflection", "/today/quick-reflection"),
)))


def test_next_skips_completed_tasks():
    status = TaskCompletionStatus(is_journal_completed=True, is_daily_study_task_completed=True)

    assert THREE_TASKS.next_incomplete_task_path("spiritual_journal", status) == "/today/quick-reflection"
    assert THREE_TASKS.is_sequence_complete("spiritual_journal", status) is False


def test_next_only_looks_after_current():
    """Невыполненное задание раньше текущего не предлагается."""
    status = TaskCompletionStatus(is_daily_study_task_completed=True, is_quick_reflection_task_completed=True)

    assert THREE_TASKS.next_incomplete_task_path("daily_study", status) is None


def test_last_task_completes_sequence():
    status = TaskCompletionStatus(is_journal_completed=True, is_daily_study_task_completed=True)

    assert THREE_TASKS.next_incomplete_task_path("quick_reflection", status) is None
    # текущее задание считается выполненным, даже если флаг ещё не выставлен
    assert THREE_TASKS.is_sequence_complete("quick_reflection", status) is True


def test_last_task_with_gap_is_not_complete():
    status = TaskCompletionStatus(is_journal_completed=True)

    assert THREE_TASKS.is_sequence_complete("quick_reflection", status) is False


def test_first_and_previous():
    assert THREE_TASKS.is_first_task("spiritual_journal") is True
    assert THREE_TASKS.is_first_task("daily_study") is False
    assert THREE_TASKS.previous_task_path("spiritual_journal") is None
    assert THREE_TASKS.previous_task_path("quick_reflection") == "/today/daily-study"


def test_unknown_task_name_is_defined_and_warned(caplog):
    status = TaskCompletionStatus()

    with caplog.at_level(logging.WARNING, logger="app.services.daily_tasks_sequence"):
        navigation = THREE_TASKS.navigation("no_such_task", status)

    assert navigation.next_task_path == "/today/spiritual-journal"
    assert navigation.previous_task_path is None
    assert navigation.is_first_task is False
    assert navigation.is_sequence_complete is False
    assert THREE_TASKS.contains("no_such_task") is False
    warnings = [r for r in caplog.records if "no_such_task" in r.getMessage()]
    assert len(warnings) == 1


def test_completion_field_key():
    assert THREE_TASKS.completion_field_key("daily_study") == "is_daily_study_task_completed"
    with pytest.raises(ConfigurationDefect):
        THREE_TASKS.completion_field_key("verse_of_the_day")


def test_with_task_completed_returns_copy():
    status = TaskCompletionStatus()

    updated = THREE_TASKS.with_task_completed(status, "spiritual_journal")

    assert updated.is_journal_completed is True
    assert status.is_journal_completed is False


def test_progress_counts_only_sequence_tasks():
    status = TaskCompletionStatus(is_journal_completed=True, is_verse_of_the_day_task_completed=True)

    progress = THREE_TASKS.progress(status)

    assert (progress.completed_count, progress.total) == (1, 3)
    assert progress.percentage == pytest.approx(100 / 3)


def test_default_sequence():
    assert len(DAILY_TASK_SEQUENCE) == len(DAILY_TASK_PATHS) == 5
    assert [t.name for t in DAILY_TASK_SEQUENCE.tasks][0] == "spiritual_journal"
    assert not DAILY_TASK_SEQUENCE.contains("verse_of_the_day")
    full = TaskCompletionStatus(**{f: True for f in TaskCompletionStatus.field_names()})
    assert DAILY_TASK_SEQUENCE.progress(full).percentage == 100


def test_build_descriptors_rejects_missing_mapping():
    with pytest.raises(ConfigurationDefect):
        build_descriptors((("evening_prayer", "/today/evening-prayer"),))


def test_build_descriptors_rejects_unknown_field():
    with pytest.raises(ConfigurationDefect):
        build_descriptors(
            (("daily_study", "/today/daily-study"),),
            completion_fields={"daily_study": "is_study_completed"},
        )


def test_sequence_rejects_empty_and_duplicates():
    with pytest.raises(ConfigurationDefect):
        DailyTaskSequence(())
    task = DailyTaskDescriptor(name="daily_study", path="/a", completion_field="is_daily_study_task_completed")
    with pytest.raises(ConfigurationDefect):
        DailyTaskSequence((task, task))
