"""
Question loading service.
Detects which of the two JSON shapes a payload uses and converts it into
ProfiledQuestion records.
"""

import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from ..exceptions import DataFileNotFoundError, UnrecognizedFormatError
from ..schemas import Challenge, DataFormatEnum, GameDataOutput, RawQuestion

# Game data timestamps count seconds from this instant
REFERENCE_DATE = datetime(2001, 1, 1, tzinfo=timezone.utc)

FORMAT_LABELS = {
    DataFormatEnum.GAME_DATA: "Game Data",
    DataFormatEnum.RAW: "Raw",
}

_raw_questions_adapter = TypeAdapter(List[RawQuestion])


@dataclass
class ProfiledQuestion:
    """Unified question record shared by the file and store read paths."""
    question: str
    answers: List[str]
    correct_answer: str
    correct_index: int
    category: str
    difficulty: Optional[str] = None
    explanation: Optional[str] = None
    hint: Optional[str] = None
    source: Optional[str] = None


@dataclass
class LoadResult:
    questions: List[ProfiledQuestion]
    format: DataFormatEnum
    generated: Optional[datetime] = None

    @property
    def format_label(self) -> str:
        return FORMAT_LABELS[self.format]


def from_reference_timestamp(seconds: float) -> Optional[datetime]:
    """Convert a game data timestamp. Values outside the datetime range give None."""
    try:
        return REFERENCE_DATE + timedelta(seconds=seconds)
    except (OverflowError, ValueError):
        return None


def to_reference_timestamp(moment: datetime) -> float:
    return (moment - REFERENCE_DATE).total_seconds()


def challenge_to_profiled(challenge: Challenge) -> ProfiledQuestion:
    """Convert a game data challenge. Difficulty is not expressible in this shape."""
    try:
        correct_index = challenge.answers.index(challenge.correct)
    except ValueError:
        correct_index = 0

    return ProfiledQuestion(
        question=challenge.question,
        answers=list(challenge.answers),
        correct_answer=challenge.correct,
        correct_index=correct_index,
        category=challenge.topic,
        difficulty=None,
        explanation=challenge.explanation,
        hint=challenge.hint,
        source=challenge.aisource,
    )


def raw_to_profiled(raw: RawQuestion) -> ProfiledQuestion:
    """Convert a raw record, falling back to the isCorrect flags when the index is out of range."""
    answers = [choice.text for choice in raw.choices]

    if 0 <= raw.correct_choice_index < len(raw.choices):
        correct_index = raw.correct_choice_index
        correct_text = raw.choices[correct_index].text
    else:
        correct_index, correct_text = 0, ""
        for i, choice in enumerate(raw.choices):
            if choice.is_correct:
                correct_index, correct_text = i, choice.text
                break

    return ProfiledQuestion(
        question=raw.text,
        answers=answers,
        correct_answer=correct_text,
        correct_index=correct_index,
        category=raw.category,
        difficulty=raw.difficulty,
        explanation=raw.explanation,
        hint=raw.hint,
        source=raw.source,
    )


def load_bytes(data: bytes, path: str = None) -> LoadResult:
    """
    Decode a payload, trying the game data shape first and the raw shape second.

    Raises:
        UnrecognizedFormatError: if neither shape matches
    """
    try:
        game_data = GameDataOutput.model_validate_json(data, strict=True)
    except ValidationError:
        game_data = None

    if game_data is not None:
        return LoadResult(
            questions=[challenge_to_profiled(c) for c in game_data.challenges],
            format=DataFormatEnum.GAME_DATA,
            generated=from_reference_timestamp(game_data.generated),
        )

    try:
        raw_questions = _raw_questions_adapter.validate_json(data, strict=True)
    except ValidationError:
        raise UnrecognizedFormatError(path) from None

    return LoadResult(
        questions=[raw_to_profiled(q) for q in raw_questions],
        format=DataFormatEnum.RAW,
    )


def load_file(path: str) -> LoadResult:
    """Load questions from a JSON file on disk."""
    if not os.path.isfile(path):
        raise DataFileNotFoundError(path)

    with open(path, 'rb') as f:
        data = f.read()

    return load_bytes(data, path=path)
