# app/services/daily_tasks_sequence.py
"""
Последовательность ежедневных заданий («Путь дня») и навигация по ней.

Соответствие «задание -> поле TaskCompletionStatus» задано явной таблицей
TASK_COMPLETION_FIELDS и проверяется при создании последовательности.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Mapping, Optional, Sequence, Tuple

from app.schemas.daily_tasks import (
    DailyProgress,
    DailyTaskDescriptor,
    TaskCompletionStatus,
    TaskNavigation,
)
from app.utils.exceptions import ConfigurationDefect

logger = logging.getLogger(__name__)

TASK_COMPLETION_FIELDS: Dict[str, str] = {
    "spiritual_journal": "is_journal_completed",
    "daily_study": "is_daily_study_task_completed",
    "quick_reflection": "is_quick_reflection_task_completed",
    "inspirational_quotes": "is_inspirational_quote_task_completed",
    "my_prayer": "is_my_prayer_task_completed",
    "verse_of_the_day": "is_verse_of_the_day_task_completed",
}

# (имя, путь экрана) в порядке прохождения; verse_of_the_day в «Путь дня» не входит
DAILY_TASK_PATHS: Tuple[Tuple[str, str], ...] = (
    ("spiritual_journal", "/today/spiritual-journal"),
    ("daily_study", "/today/daily-study"),
    ("quick_reflection", "/today/quick-reflection"),
    ("inspirational_quotes", "/today/inspirational-quote"),
    ("my_prayer", "/today/my-prayer"),
)


def build_descriptors(
    paths: Sequence[Tuple[str, str]],
    completion_fields: Mapping[str, str] = TASK_COMPLETION_FIELDS,
) -> Tuple[DailyTaskDescriptor, ...]:
    """
    Описатели заданий из пар (имя, путь) и таблицы полей статуса.

    Raises:
        ConfigurationDefect: у задания нет поля статуса или поле не существует.
    """
    known_fields = TaskCompletionStatus.field_names()
    descriptors = []
    for name, path in paths:
        field = completion_fields.get(name)
        if field is None:
            raise ConfigurationDefect(f"Daily task '{name}' has no completion field mapping")
        if field not in known_fields:
            raise ConfigurationDefect(
                f"Completion field '{field}' of daily task '{name}' is not a TaskCompletionStatus field"
            )
        descriptors.append(DailyTaskDescriptor(name=name, path=path, completion_field=field))
    return tuple(descriptors)


class DailyTaskSequence:
    """
    Неизменяемая упорядоченная последовательность ежедневных заданий.

    Неизвестное имя текущего задания — ошибка вызывающего кода: методы не
    бросают исключений, а возвращают определённый результат (индекс -1),
    поэтому имена нужно проверять заранее (contains).
    """

    def __init__(self, descriptors: Sequence[DailyTaskDescriptor]) -> None:
        if not descriptors:
            raise ConfigurationDefect("Daily task sequence must not be empty")
        names = [d.name for d in descriptors]
        if len(set(names)) != len(names):
            raise ConfigurationDefect(f"Duplicate daily task names: {names}")
        known_fields = TaskCompletionStatus.field_names()
        for d in descriptors:
            if d.completion_field not in known_fields:
                raise ConfigurationDefect(
                    f"Completion field '{d.completion_field}' of daily task '{d.name}' "
                    "is not a TaskCompletionStatus field"
                )
        self._tasks: Tuple[DailyTaskDescriptor, ...] = tuple(descriptors)

    @property
    def tasks(self) -> Tuple[DailyTaskDescriptor, ...]:
        return self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def contains(self, task_name: str) -> bool:
        return any(task.name == task_name for task in self._tasks)

    def _index_of(self, task_name: str) -> int:
        for i, task in enumerate(self._tasks):
            if task.name == task_name:
                return i
        logger.warning("unknown daily task name: %r", task_name)
        return -1

    def completion_field_key(self, task_name: str) -> str:
        """
        Имя поля TaskCompletionStatus для задания.

        Raises:
            ConfigurationDefect: задания нет в последовательности.
        """
        for task in self._tasks:
            if task.name == task_name:
                return task.completion_field
        raise ConfigurationDefect(f"Unknown daily task '{task_name}'")

    @staticmethod
    def _is_completed(task: DailyTaskDescriptor, status: TaskCompletionStatus) -> bool:
        return bool(getattr(status, task.completion_field))

    def next_incomplete_task_path(
        self, current_task_name: str, status: TaskCompletionStatus
    ) -> Optional[str]:
        """
        Путь первого невыполненного задания строго после текущего.
        None — все последующие выполнены или текущее последнее.
        Для неизвестного имени просмотр идёт с начала списка.
        """
        return self._next_after(self._index_of(current_task_name), status)

    def is_sequence_complete(
        self, current_task_name: str, status: TaskCompletionStatus
    ) -> bool:
        """Текущее задание последнее и выполнены все (текущее считается выполненным)."""
        return self._complete_at(self._index_of(current_task_name), status)

    def is_first_task(self, current_task_name: str) -> bool:
        return self._tasks[0].name == current_task_name

    def previous_task_path(self, current_task_name: str) -> Optional[str]:
        """Путь предыдущего задания; None для первого или неизвестного."""
        return self._previous_of(self._index_of(current_task_name))

    def _next_after(self, index: int, status: TaskCompletionStatus) -> Optional[str]:
        for task in self._tasks[index + 1:]:
            if not self._is_completed(task, status):
                return task.path
        return None

    def _complete_at(self, index: int, status: TaskCompletionStatus) -> bool:
        last = len(self._tasks) - 1
        if index != last:
            return False
        return all(
            i == last or self._is_completed(task, status)
            for i, task in enumerate(self._tasks)
        )

    def _previous_of(self, index: int) -> Optional[str]:
        if index > 0:
            return self._tasks[index - 1].path
        return None

    def with_task_completed(
        self, status: TaskCompletionStatus, task_name: str
    ) -> TaskCompletionStatus:
        """Копия статуса, где задание отмечено выполненным (для навигации сразу после сохранения)."""
        return replace(status, **{self.completion_field_key(task_name): True})

    def navigation(
        self, current_task_name: str, status: TaskCompletionStatus
    ) -> TaskNavigation:
        index = self._index_of(current_task_name)
        return TaskNavigation(
            next_task_path=self._next_after(index, status),
            previous_task_path=self._previous_of(index),
            is_first_task=index == 0,
            is_sequence_complete=self._complete_at(index, status),
        )

    def progress(self, status: TaskCompletionStatus) -> DailyProgress:
        """Сколько заданий последовательности выполнено и процент."""
        total = len(self._tasks)
        done = sum(1 for task in self._tasks if self._is_completed(task, status))
        percentage = (done / total) * 100 if total > 0 else 0.0
        return DailyProgress(completed_count=done, total=total, percentage=percentage)


DAILY_TASK_SEQUENCE = DailyTaskSequence(build_descriptors(DAILY_TASK_PATHS))
