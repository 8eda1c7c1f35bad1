# app/services/achievement_catalog.py
"""
Каталог достижений.

Порядок записей фиксирован: в этом порядке идёт оценка, и в нём же
возвращаются впервые полученные достижения. Записи сопоставляются со
строками таблицы achievements по точному совпадению name — при
переименовании здесь нужно переименовать и строку в БД
(см. scripts/seed_achievements.py).
"""
from __future__ import annotations

from typing import Callable, Tuple

from app.schemas.achievement_engine import (
    AchievementDefinition,
    AchievementProgress,
    ConditionSnapshot,
)


def _at_least(
    metric: Callable[[ConditionSnapshot], int], target: int, unit: str
) -> Tuple[Callable[[ConditionSnapshot], bool], Callable[[ConditionSnapshot], AchievementProgress]]:
    """Пара (условие, прогресс) для порога «счётчик >= target»."""
    if target <= 0:
        raise ValueError("target must be positive")

    def predicate(snapshot: ConditionSnapshot) -> bool:
        return metric(snapshot) >= target

    def progress(snapshot: ConditionSnapshot) -> AchievementProgress:
        return AchievementProgress(current=max(metric(snapshot), 0), target=target, unit=unit)

    return predicate, progress


def _chapters(s: ConditionSnapshot) -> int:
    return s.total_completed_chapters


def _studies(s: ConditionSnapshot) -> int:
    return len(s.completed_studies)


def _streak(s: ConditionSnapshot) -> int:
    return s.streak_count


def _shares(s: ConditionSnapshot) -> int:
    return s.total_shares


def _journal(s: ConditionSnapshot) -> int:
    return s.total_journal_entries


def _define(
    name: str,
    description: str,
    icon_name: str,
    metric: Callable[[ConditionSnapshot], int],
    target: int,
    unit: str,
) -> AchievementDefinition:
    predicate, progress = _at_least(metric, target, unit)
    return AchievementDefinition(
        name=name,
        description=description,
        icon_name=icon_name,
        predicate=predicate,
        progress=progress,
    )


ACHIEVEMENT_DEFINITIONS: Tuple[AchievementDefinition, ...] = (
    # --- главы ---
    _define("Iniciante Fiel", "Conclua seu primeiro capítulo de estudo.",
            "Sparkles", _chapters, 1, "capítulo"),
    _define("Leitor Dedicado", "Conclua 5 capítulos de estudo.",
            "BookOpen", _chapters, 5, "capítulos"),
    _define("Leitor Assíduo", "Conclua 10 capítulos de estudo.",
            "GraduationCap", _chapters, 10, "capítulos"),
    _define("Sábio Estudante", "Conclua 50 capítulos de estudo.",
            "Crown", _chapters, 50, "capítulos"),
    _define("Mestre da Palavra", "Conclua 150 capítulos de estudo.",
            "Flame", _chapters, 150, "capítulos"),
    # --- исследования целиком ---
    _define("Primeiro Estudo", "Conclua seu primeiro estudo completo.",
            "Award", _studies, 1, "estudo"),
    # --- серия дней ---
    _define("Chama Acesa", "Mantenha uma sequência de 7 dias de estudo.",
            "Flame", _streak, 7, "dias"),
    _define("Fogo Ardente", "Mantenha uma sequência de 30 dias de estudo.",
            "TrendingUp", _streak, 30, "dias"),
    # --- активность ---
    _define("Evangelista Digital", "Compartilhe 5 conteúdos do aplicativo.",
            "Share2", _shares, 5, "compartilhamentos"),
    _define("Reflexão Profunda", "Complete 10 entradas no Diário Espiritual.",
            "MessageSquare", _journal, 10, "entradas"),
)

