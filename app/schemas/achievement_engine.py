# app/schemas/achievement_engine.py
"""
Типы движка достижений (сервисный слой, без привязки к REST).

ConditionSnapshot — агрегированные факты об одном пользователе,
AchievementDefinition — запись каталога (две чистые функции над снимком),
AggregatedFacts / EvaluationResult — результаты сборщика фактов и оценщика.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Optional, Tuple


@dataclass(frozen=True)
class ConditionSnapshot:
    """Снимок фактов для проверки условий. Создаётся заново на каждую оценку."""

    total_completed_chapters: int = 0
    completed_studies: FrozenSet[uuid.UUID] = field(default_factory=frozenset)
    streak_count: int = 0
    total_shares: int = 0
    total_journal_entries: int = 0


@dataclass(frozen=True)
class AchievementProgress:
    """Прогресс к достижению для отображения (не влияет на выдачу)."""

    current: int
    target: int
    unit: str


@dataclass(frozen=True)
class AchievementDefinition:
    """
    Определение достижения из каталога.

    predicate должен быть монотонным по читаемым счётчикам:
    если условие выполнилось, при росте счётчиков оно остаётся выполненным.
    """

    name: str
    description: str
    icon_name: str
    predicate: Callable[[ConditionSnapshot], bool]
    progress: Callable[[ConditionSnapshot], AchievementProgress]


@dataclass(frozen=True)
class StoredAchievement:
    """Строка таблицы achievements."""

    id: uuid.UUID
    name: str
    description: Optional[str] = None
    icon_name: Optional[str] = None


@dataclass(frozen=True)
class AggregatedFacts:
    """Результат сборщика фактов: снимок + то, что нужно оценщику."""

    snapshot: ConditionSnapshot
    unlocked_ids: FrozenSet[uuid.UUID]
    stored_achievements: Tuple[StoredAchievement, ...]


@dataclass(frozen=True)
class EvaluationResult:
    """Результат оценки: впервые полученные достижения (в порядке каталога) и снимок."""

    newly_unlocked: Tuple[StoredAchievement, ...]
    snapshot: ConditionSnapshot


@dataclass(frozen=True)
class AchievementProgressItem:
    """Состояние одного достижения для экрана «Все достижения»."""

    achievement: StoredAchievement
    unlocked: bool
    progress: AchievementProgress
