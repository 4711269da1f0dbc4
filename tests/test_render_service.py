import json

import pytest

from trivia_profile.schemas import FileDetail, ReportSection
from trivia_profile.services.render_service import (
    bar, parse_section, render_json, render_text, report_to_dict,
)
from trivia_profile.services.report_service import generate_report

from conftest import make_question


@pytest.fixture
def report():
    questions = [
        make_question(question="Short?", category="History", difficulty="easy", hint="Old times", source="gpt"),
        make_question(question="A somewhat longer question?", category="History", difficulty="hard"),
        make_question(question="Music question?", category="Music", answers=["x", "y"], correct_index=1),
    ]
    return generate_report(questions)


@pytest.fixture
def game_report():
    return generate_report([make_question(), make_question(category="Music")])


@pytest.mark.parametrize("name, expected", [
    ("summary", ReportSection.SUMMARY),
    ("CATEGORIES", ReportSection.CATEGORIES),
    ("length", ReportSection.LENGTH),
    ("nonsense", None),
    (None, None),
])
def test_parse_section(name, expected):
    assert parse_section(name) == expected


def test_bar_is_one_block_per_two_percent():
    assert bar(50.0) == "█" * 25
    assert bar(1.9) == ""


def test_full_json_uses_camel_case_keys(report):
    data = json.loads(render_json(report))

    assert set(data) == {
        "summary", "categories", "sources", "difficulty",
        "hints", "questionLength", "answerStats",
    }
    assert data["summary"]["totalQuestions"] == 3
    assert data["categories"][0] == {"name": "History", "count": 2, "percentage": pytest.approx(200 / 3)}
    assert data["hints"]["withHints"] == 1
    assert data["answerStats"]["correctPositionDistribution"] == {"Position 1": 2, "Position 2": 1}


def test_json_single_section(report):
    data = json.loads(render_json(report, "categories"))
    assert [c["name"] for c in data] == ["History", "Music"]

    length = json.loads(render_json(report, "length"))
    assert length["minQuestion"] == "Short?"


def test_json_difficulty_section_absent_is_empty_list(game_report):
    assert report_to_dict(game_report, "difficulty") == []


def test_json_unknown_section_falls_back_to_full_report(report):
    assert report_to_dict(report, "bogus") == report_to_dict(report)


def test_text_full_report_has_every_section(report):
    text = render_text(report)
    for title in ["Summary", "Categories (2 topics)", "Sources", "Difficulty",
                  "Hints", "Question Length", "Answer Stats"]:
        assert f"  {title}\n" in text


def test_text_single_section(report):
    text = render_text(report, "sources")
    assert "Sources" in text
    assert "Summary" not in text
    assert "unknown" in text
    assert "gpt" in text


def test_text_difficulty_placeholder(game_report):
    text = render_text(game_report, "difficulty")
    assert "not available" in text


def test_text_difficulty_rows(report):
    text = render_text(report, "difficulty")
    assert "easy" in text
    assert "hard" in text
    assert "not available" not in text


def test_text_summary_lists_files_when_several():
    details = [
        FileDetail(name="one.json", question_count=2, file_size="1 KB", format="Raw"),
        FileDetail(name="two.json", question_count=1, file_size="532 bytes", format="Game Data"),
    ]
    text = render_text(generate_report([make_question()], details, 1532), "summary")
    assert "one.json" in text
    assert "two.json" in text
    assert "Game Data" in text
