# app/schemas/daily_tasks.py
"""
Типы ежедневных заданий: описатели последовательности, статусы выполнения,
результаты навигации и прогресса дня.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Optional


@dataclass(frozen=True)
class DailyTaskDescriptor:
    """Задание последовательности: имя, путь экрана и поле статуса выполнения."""

    name: str
    path: str
    completion_field: str


@dataclass(frozen=True)
class TaskCompletionStatus:
    """
    Флаги выполнения ежедневных заданий за день.
    verse_of_the_day отслеживается, но в «Путь дня» не входит.
    """

    is_journal_completed: bool = False
    is_daily_study_task_completed: bool = False
    is_quick_reflection_task_completed: bool = False
    is_inspirational_quote_task_completed: bool = False
    is_my_prayer_task_completed: bool = False
    is_verse_of_the_day_task_completed: bool = False

    @classmethod
    def field_names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls))


@dataclass(frozen=True)
class TaskNavigation:
    """Куда вести пользователя из текущего задания."""

    next_task_path: Optional[str]
    previous_task_path: Optional[str]
    is_first_task: bool
    is_sequence_complete: bool


@dataclass(frozen=True)
class DailyProgress:
    """Прогресс «Пути дня»."""

    completed_count: int
    total: int
    percentage: float
