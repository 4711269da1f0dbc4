import json

import pytest

from trivia_profile.services.category_service import CategoryNormalizer
from trivia_profile.services.loader_service import ProfiledQuestion
from trivia_profile.services.store_service import TriviaStore


RAW_QUESTIONS = [
    {
        "text": "What is the chemical symbol for gold?",
        "choices": [
            {"text": "Ag", "isCorrect": False},
            {"text": "Au", "isCorrect": True},
            {"text": "Gd", "isCorrect": False},
            {"text": "Go", "isCorrect": False},
        ],
        "correctChoiceIndex": 1,
        "category": "science",
        "difficulty": "Easy",
        "explanation": "Au comes from the Latin aurum.",
        "hint": "Think Latin.",
        "source": "opentdb",
    },
    {
        "text": "Who painted the Mona Lisa?",
        "choices": [
            {"text": "Leonardo da Vinci", "isCorrect": True},
            {"text": "Michelangelo", "isCorrect": False},
            {"text": "Raphael", "isCorrect": False},
        ],
        "correctChoiceIndex": 0,
        "category": "Art",
        "difficulty": "medium",
    },
]

GAME_DATA = {
    "id": "game-1",
    "generated": 0,
    "challenges": [
        {
            "topic": "History",
            "question": "In which year did the Berlin Wall fall?",
            "answers": ["1987", "1989", "1991"],
            "correct": "1989",
            "hint": "Late eighties.",
            "aisource": "gpt",
            "id": "c1",
        },
        {
            "topic": "Geography",
            "question": "What is the capital of Australia?",
            "answers": ["Sydney", "Canberra", "Melbourne", "Perth"],
            "correct": "Canberra",
            "id": "c2",
        },
    ],
}


@pytest.fixture
def raw_questions():
    return json.loads(json.dumps(RAW_QUESTIONS))


@pytest.fixture
def game_data():
    return json.loads(json.dumps(GAME_DATA))


@pytest.fixture
def write_json(tmp_path):
    """Write a payload to tmp_path/name and return the path as a string."""
    def _write(name, payload):
        path = tmp_path / name
        if isinstance(payload, str):
            path.write_text(payload, encoding="utf-8")
        else:
            path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "trivia.db")


@pytest.fixture
def store(db_path):
    trivia_store = TriviaStore.open(db_path)
    yield trivia_store
    trivia_store.close()


@pytest.fixture
def small_normalizer():
    return CategoryNormalizer(
        aliases={"sci": "Science & Nature", "science": "Science & Nature"},
        icons={"Science & Nature": "atom"},
    )


def make_question(
    question="Sample question?",
    answers=("A", "B", "C", "D"),
    correct_index=0,
    category="History",
    difficulty=None,
    hint=None,
    source=None,
):
    answers = list(answers)
    return ProfiledQuestion(
        question=question,
        answers=answers,
        correct_answer=answers[correct_index] if correct_index < len(answers) else "",
        correct_index=correct_index,
        category=category,
        difficulty=difficulty,
        hint=hint,
        source=source,
    )
