"""
Pydantic schemas for the two input JSON shapes and the profile report.
"""

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Dict
from enum import Enum


# =============================================================================
# Enums
# =============================================================================

class DataFormatEnum(str, Enum):
    GAME_DATA = "gameData"
    RAW = "raw"


class ReportSection(str, Enum):
    SUMMARY = "summary"
    CATEGORIES = "categories"
    SOURCES = "sources"
    DIFFICULTY = "difficulty"
    HINTS = "hints"
    LENGTH = "length"
    ANSWERS = "answers"


class ExportFormatEnum(str, Enum):
    RAW = "raw"
    GAME_DATA = "gamedata"


# =============================================================================
# Game Data Schemas (object with id, generated, challenges)
# =============================================================================

class Challenge(BaseModel):
    topic: str
    pic: Optional[str] = None
    question: str
    answers: List[str]
    correct: str
    explanation: Optional[str] = None
    hint: Optional[str] = None
    aisource: Optional[str] = None
    date: Optional[float] = None
    id: str


class GameDataOutput(BaseModel):
    id: str
    generated: float  # Seconds since 2001-01-01T00:00:00Z
    challenges: List[Challenge]


# =============================================================================
# Raw Schemas (flat array of questions)
# =============================================================================

class RawChoice(BaseModel):
    text: str
    is_correct: bool = Field(..., alias="isCorrect")

    model_config = ConfigDict(populate_by_name=True)


class RawQuestion(BaseModel):
    text: str
    choices: List[RawChoice]
    correct_choice_index: int = Field(..., alias="correctChoiceIndex")
    category: str
    difficulty: Optional[str] = None
    explanation: Optional[str] = None
    hint: Optional[str] = None
    source: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


# =============================================================================
# Report Schemas
# =============================================================================

class _ReportModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class FileDetail(_ReportModel):
    name: str
    question_count: int = Field(..., alias="questionCount")
    file_size: str = Field(..., alias="fileSize")
    format: str


class SummarySection(_ReportModel):
    total_questions: int = Field(..., alias="totalQuestions")
    file_size: str = Field(..., alias="fileSize")
    file_count: int = Field(..., alias="fileCount")
    files: Optional[List[FileDetail]] = None
    generated_date: Optional[str] = Field(default=None, alias="generatedDate")


class CategoryEntry(_ReportModel):
    name: str
    count: int
    percentage: float


class SourceEntry(_ReportModel):
    name: str
    count: int
    percentage: float


class DifficultyEntry(_ReportModel):
    level: str
    count: int
    percentage: float


class HintSection(_ReportModel):
    with_hints: int = Field(..., alias="withHints")
    without_hints: int = Field(..., alias="withoutHints")
    sample_hints: List[str] = Field(default_factory=list, alias="sampleHints")


class LengthSection(_ReportModel):
    min_chars: int = Field(..., alias="minChars")
    max_chars: int = Field(..., alias="maxChars")
    avg_chars: int = Field(..., alias="avgChars")
    min_question: str = Field(..., alias="minQuestion")
    max_question: str = Field(..., alias="maxQuestion")


class AnswerStatsSection(_ReportModel):
    avg_answers_per_question: float = Field(..., alias="avgAnswersPerQuestion")
    correct_position_distribution: Dict[str, int] = Field(
        default_factory=dict, alias="correctPositionDistribution"
    )


class ReportData(_ReportModel):
    summary: SummarySection
    categories: List[CategoryEntry]
    sources: List[SourceEntry]
    difficulty: Optional[List[DifficultyEntry]] = None
    hints: HintSection
    question_length: LengthSection = Field(..., alias="questionLength")
    answer_stats: AnswerStatsSection = Field(..., alias="answerStats")
