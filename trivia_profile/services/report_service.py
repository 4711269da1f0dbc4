"""
Report building service.
Aggregates any collection of ProfiledQuestion records into ReportData,
regardless of whether they came from JSON files or from the store.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from ..schemas import (
    AnswerStatsSection, CategoryEntry, DifficultyEntry, FileDetail,
    HintSection, LengthSection, ReportData, SourceEntry, SummarySection,
)
from .loader_service import ProfiledQuestion

DIFFICULTY_ORDER = ["easy", "medium", "hard"]
SAMPLE_HINT_LIMIT = 3
EXEMPLAR_CHARS = 80


def format_file_size(num_bytes: int) -> str:
    """Human-readable size using decimal units, e.g. '532 bytes', '12 KB', '1.4 MB'."""
    if num_bytes <= 0:
        return "Zero KB"
    if num_bytes < 1000:
        return f"{num_bytes} bytes"
    if num_bytes < 1000 ** 2:
        return f"{round(num_bytes / 1000)} KB"
    if num_bytes < 1000 ** 3:
        return f"{num_bytes / 1000 ** 2:.1f} MB"
    return f"{num_bytes / 1000 ** 3:.2f} GB"


def format_generated_date(moment: datetime) -> str:
    """Format as 'March 5, 2025 at 2:07 PM' in UTC."""
    moment = moment.astimezone(timezone.utc)
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{moment:%B} {moment.day}, {moment.year} at {hour}:{moment:%M} {meridiem}"


def _count_by(values: Sequence[str]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1
    return counts


def _ranked(counts: Dict[str, int]) -> List[tuple]:
    # Most frequent first, ties by name
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def _difficulty_rank(level: str) -> tuple:
    lowered = level.lower()
    if lowered in DIFFICULTY_ORDER:
        return (DIFFICULTY_ORDER.index(lowered), level)
    return (len(DIFFICULTY_ORDER), level)


def make_summary(
    questions: Sequence[ProfiledQuestion],
    file_details: Sequence[FileDetail],
    total_file_size: int,
    generated: Optional[datetime],
) -> SummarySection:
    return SummarySection(
        total_questions=len(questions),
        file_size=format_file_size(total_file_size),
        file_count=len(file_details),
        files=list(file_details) if len(file_details) > 1 else None,
        generated_date=format_generated_date(generated) if generated else None,
    )


def make_categories(questions: Sequence[ProfiledQuestion]) -> List[CategoryEntry]:
    total = len(questions)
    counts = _count_by([q.category for q in questions])
    return [
        CategoryEntry(name=name, count=count, percentage=count / total * 100)
        for name, count in _ranked(counts)
    ]


def make_sources(questions: Sequence[ProfiledQuestion]) -> List[SourceEntry]:
    total = len(questions)
    counts = _count_by([q.source or "unknown" for q in questions])
    return [
        SourceEntry(name=name, count=count, percentage=count / total * 100)
        for name, count in _ranked(counts)
    ]


def make_difficulty(questions: Sequence[ProfiledQuestion]) -> Optional[List[DifficultyEntry]]:
    """
    Difficulty breakdown over the questions that have one.

    Returns None when no question carries a difficulty. Percentages are of
    that subset, ordered easy, medium, hard, then other labels alphabetically.
    """
    with_difficulty = [q.difficulty for q in questions if q.difficulty]
    if not with_difficulty:
        return None

    total = len(with_difficulty)
    counts = _count_by(with_difficulty)
    return [
        DifficultyEntry(level=level, count=counts[level], percentage=counts[level] / total * 100)
        for level in sorted(counts, key=_difficulty_rank)
    ]


def make_hints(questions: Sequence[ProfiledQuestion]) -> HintSection:
    hints = [q.hint for q in questions if q.hint]
    return HintSection(
        with_hints=len(hints),
        without_hints=len(questions) - len(hints),
        sample_hints=hints[:SAMPLE_HINT_LIMIT],
    )


def make_question_length(questions: Sequence[ProfiledQuestion]) -> LengthSection:
    if not questions:
        return LengthSection(min_chars=0, max_chars=0, avg_chars=0, min_question="", max_question="")

    lengths = [len(q.question) for q in questions]
    shortest = min(questions, key=lambda q: len(q.question))
    longest = max(questions, key=lambda q: len(q.question))
    return LengthSection(
        min_chars=min(lengths),
        max_chars=max(lengths),
        avg_chars=sum(lengths) // len(lengths),
        min_question=shortest.question[:EXEMPLAR_CHARS],
        max_question=longest.question[:EXEMPLAR_CHARS],
    )


def make_answer_stats(questions: Sequence[ProfiledQuestion]) -> AnswerStatsSection:
    total_answers = sum(len(q.answers) for q in questions)
    avg = total_answers / len(questions) if questions else 0.0

    positions: Dict[str, int] = {}
    for q in questions:
        key = f"Position {q.correct_index + 1}"
        positions[key] = positions.get(key, 0) + 1

    return AnswerStatsSection(
        avg_answers_per_question=avg,
        correct_position_distribution=dict(sorted(positions.items())),
    )


def generate_report(
    questions: Sequence[ProfiledQuestion],
    file_details: Sequence[FileDetail] = (),
    total_file_size: int = 0,
    generated: Optional[datetime] = None,
) -> ReportData:
    """
    Build the full report for a question collection.

    Args:
        questions: Questions to aggregate (may be empty)
        file_details: One entry per input file (or the store)
        total_file_size: Combined size in bytes of the inputs
        generated: Latest game data generation time across inputs, if any

    Returns:
        ReportData with every section populated
    """
    return ReportData(
        summary=make_summary(questions, file_details, total_file_size, generated),
        categories=make_categories(questions),
        sources=make_sources(questions),
        difficulty=make_difficulty(questions),
        hints=make_hints(questions),
        question_length=make_question_length(questions),
        answer_stats=make_answer_stats(questions),
    )
