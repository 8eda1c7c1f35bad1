"""
Тесты каталога достижений: порядок, уникальность имён, монотонность условий,
прогресс для отображения.
"""
import uuid
from dataclasses import replace

from app.schemas.achievement_engine import ConditionSnapshot
from app.services.achievement_catalog import ACHIEVEMENT_DEFINITIONS

COUNTERS = ("total_completed_chapters", "streak_count", "total_shares", "total_journal_entries")


def _snapshots():
    """Небольшая сетка снимков вокруг порогов каталога."""
    values = (0, 1, 4, 5, 6, 9, 10, 29, 30, 49, 50, 149, 150, 151)
    studies = (frozenset(), frozenset({uuid.uuid4()}), frozenset({uuid.uuid4(), uuid.uuid4()}))
    for v in values:
        for s in studies:
            yield ConditionSnapshot(
                total_completed_chapters=v,
                completed_studies=s,
                streak_count=v,
                total_shares=v,
                total_journal_entries=v,
            )


def test_catalog_order_and_names():
    names = [d.name for d in ACHIEVEMENT_DEFINITIONS]
    assert len(names) == len(set(names)), "Имена достижений — ключ сопоставления, должны быть уникальны"
    assert names[:2] == ["Iniciante Fiel", "Leitor Dedicado"]
    assert names[-1] == "Reflexão Profunda"
    assert len(names) == 10


def test_catalog_is_immutable_tuple():
    assert isinstance(ACHIEVEMENT_DEFINITIONS, tuple)


def test_progress_targets_positive_and_current_non_negative():
    for definition in ACHIEVEMENT_DEFINITIONS:
        for snapshot in _snapshots():
            progress = definition.progress(snapshot)
            assert progress.target > 0, definition.name
            assert progress.current >= 0, definition.name
            assert progress.unit


def test_predicate_agrees_with_progress():
    """Условие выполнено ровно тогда, когда current >= target."""
    for definition in ACHIEVEMENT_DEFINITIONS:
        for snapshot in _snapshots():
            progress = definition.progress(snapshot)
            assert definition.predicate(snapshot) == (progress.current >= progress.target), definition.name


def test_predicates_are_monotonic():
    """Если условие выполнилось, рост любого счётчика его не отменяет."""
    for definition in ACHIEVEMENT_DEFINITIONS:
        for snapshot in _snapshots():
            if not definition.predicate(snapshot):
                continue
            for counter in COUNTERS:
                for delta in (1, 7, 100):
                    grown = replace(snapshot, **{counter: getattr(snapshot, counter) + delta})
                    assert definition.predicate(grown), f"{definition.name}: {counter}+{delta}"
            more_studies = replace(
                snapshot, completed_studies=snapshot.completed_studies | {uuid.uuid4()}
            )
            assert definition.predicate(more_studies), definition.name


def test_scenario_one_chapter_progress():
    """Одна глава: «Iniciante Fiel» выполнено, у «Leitor Dedicado» прогресс 1/5."""
    snapshot = ConditionSnapshot(total_completed_chapters=1)
    by_name = {d.name: d for d in ACHIEVEMENT_DEFINITIONS}

    assert by_name["Iniciante Fiel"].predicate(snapshot) is True
    assert by_name["Iniciante Fiel"].progress(snapshot).target == 1
    assert by_name["Leitor Dedicado"].predicate(snapshot) is False
    progress = by_name["Leitor Dedicado"].progress(snapshot)
    assert (progress.current, progress.target, progress.unit) == (1, 5, "capítulos")


def test_first_study_counts_completed_studies():
    definition = next(d for d in ACHIEVEMENT_DEFINITIONS if d.name == "Primeiro Estudo")
    assert definition.predicate(ConditionSnapshot()) is False
    assert definition.predicate(ConditionSnapshot(completed_studies=frozenset({uuid.uuid4()}))) is True
