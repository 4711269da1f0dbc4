from datetime import datetime, timezone

import pytest

from trivia_profile.schemas import FileDetail
from trivia_profile.services.report_service import (
    format_file_size, format_generated_date, generate_report,
    make_answer_stats, make_categories, make_difficulty, make_hints,
    make_question_length, make_sources,
)

from conftest import make_question


def test_categories_counts_percentages_and_tie_break():
    questions = [make_question(category=c) for c in ["B", "A", "B", "A", "C"]]
    entries = make_categories(questions)

    assert [(e.name, e.count) for e in entries] == [("A", 2), ("B", 2), ("C", 1)]
    assert entries[0].percentage == pytest.approx(40.0)
    assert sum(e.percentage for e in entries) == pytest.approx(100.0)


def test_percentages_sum_to_100_for_thirds():
    questions = [make_question(category=c, source=c) for c in ["x", "y", "z"]]
    assert sum(e.percentage for e in make_categories(questions)) == pytest.approx(100.0)
    assert sum(e.percentage for e in make_sources(questions)) == pytest.approx(100.0)


def test_sources_default_to_unknown():
    questions = [
        make_question(source="opentdb"),
        make_question(source=None),
        make_question(source=""),
    ]
    entries = make_sources(questions)
    assert [(e.name, e.count) for e in entries] == [("unknown", 2), ("opentdb", 1)]


def test_difficulty_absent_when_no_question_has_one():
    assert make_difficulty([make_question(), make_question()]) is None


def test_difficulty_order_and_subset_percentages():
    questions = [
        make_question(difficulty="hard"),
        make_question(difficulty="Easy"),
        make_question(difficulty="brutal"),
        make_question(difficulty="medium"),
        make_question(difficulty="easy"),
        make_question(difficulty="abysmal"),
        make_question(difficulty=None),
        make_question(difficulty=None),
    ]
    entries = make_difficulty(questions)

    assert [e.level for e in entries] == ["Easy", "easy", "medium", "hard", "abysmal", "brutal"]
    assert sum(e.count for e in entries) == 6
    assert sum(e.percentage for e in entries) == pytest.approx(100.0)
    hard = next(e for e in entries if e.level == "hard")
    assert hard.percentage == pytest.approx(100 / 6)


def test_hints_coverage_and_samples():
    questions = [
        make_question(hint="first"),
        make_question(hint=""),
        make_question(hint="second"),
        make_question(hint=None),
        make_question(hint="third"),
        make_question(hint="fourth"),
    ]
    hints = make_hints(questions)
    assert hints.with_hints == 4
    assert hints.without_hints == 2
    assert hints.sample_hints == ["first", "second", "third"]


def test_question_length_extremes():
    long_text = "L" * 120
    questions = [
        make_question(question="abcd"),
        make_question(question="ab"),
        make_question(question="xy"),
        make_question(question=long_text),
    ]
    length = make_question_length(questions)

    assert length.min_chars == 2
    assert length.max_chars == 120
    assert length.avg_chars == (4 + 2 + 2 + 120) // 4
    assert length.min_question == "ab"
    assert length.max_question == "L" * 80


def test_answer_stats():
    questions = [
        make_question(answers=["a", "b", "c", "d"], correct_index=0),
        make_question(answers=["a", "b"], correct_index=1),
        make_question(answers=["a", "b", "c"], correct_index=0),
    ]
    stats = make_answer_stats(questions)
    assert stats.avg_answers_per_question == pytest.approx(3.0)
    assert stats.correct_position_distribution == {"Position 1": 2, "Position 2": 1}


def test_empty_collection_report():
    report = generate_report([])

    assert report.summary.total_questions == 0
    assert report.summary.file_count == 0
    assert report.categories == []
    assert report.sources == []
    assert report.difficulty is None
    assert report.hints.with_hints == 0
    assert report.question_length.min_question == ""
    assert report.question_length.avg_chars == 0
    assert report.answer_stats.avg_answers_per_question == 0.0
    assert report.answer_stats.correct_position_distribution == {}


def test_summary_lists_files_only_when_more_than_one():
    detail = FileDetail(name="a.json", question_count=1, file_size="1 KB", format="Raw")
    questions = [make_question()]

    single = generate_report(questions, [detail], 1000)
    assert single.summary.files is None
    assert single.summary.file_count == 1
    assert single.summary.file_size == "1 KB"

    double = generate_report(questions, [detail, detail], 2000)
    assert len(double.summary.files) == 2


def test_summary_generated_date():
    moment = datetime(2025, 3, 5, 14, 7, tzinfo=timezone.utc)
    report = generate_report([make_question()], generated=moment)
    assert report.summary.generated_date == "March 5, 2025 at 2:07 PM"


def test_format_generated_date_midnight():
    assert format_generated_date(datetime(2001, 1, 1, tzinfo=timezone.utc)) == "January 1, 2001 at 12:00 AM"


@pytest.mark.parametrize("size, expected", [
    (0, "Zero KB"),
    (532, "532 bytes"),
    (12_345, "12 KB"),
    (1_420_000, "1.4 MB"),
    (2_500_000_000, "2.50 GB"),
])
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected
