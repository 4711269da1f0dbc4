"""
Export service.
Re-serializes unified question records into either input JSON shape.
"""

import json
import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence

from ..schemas import Challenge, ExportFormatEnum, GameDataOutput, RawChoice, RawQuestion
from .category_service import CategoryNormalizer, get_category_normalizer
from .loader_service import ProfiledQuestion, to_reference_timestamp


def _new_id() -> str:
    return str(uuid.uuid4()).upper()


def to_raw_question(q: ProfiledQuestion) -> RawQuestion:
    """Rebuild a raw record; isCorrect flags come from the stored correct index."""
    return RawQuestion(
        text=q.question,
        choices=[
            RawChoice(text=text, is_correct=(i == q.correct_index))
            for i, text in enumerate(q.answers)
        ],
        correct_choice_index=q.correct_index,
        category=q.category,
        difficulty=q.difficulty,
        explanation=q.explanation,
        hint=q.hint,
        source=q.source,
    )


def to_challenge(q: ProfiledQuestion, normalizer: CategoryNormalizer, timestamp: float) -> Challenge:
    return Challenge(
        topic=q.category,
        pic=normalizer.icon_for(q.category),
        question=q.question,
        answers=list(q.answers),
        correct=q.correct_answer,
        explanation=q.explanation,
        hint=q.hint,
        aisource=q.source,
        date=timestamp,
        id=_new_id(),
    )


def build_export(
    questions: Sequence[ProfiledQuestion],
    export_format: ExportFormatEnum = ExportFormatEnum.RAW,
    normalizer: Optional[CategoryNormalizer] = None,
    now: Optional[datetime] = None,
) -> Any:
    """
    Build the JSON-ready export payload.

    raw: a list of raw question records.
    gamedata: a fresh envelope (new id, generated = now) around the challenges.
    """
    if export_format == ExportFormatEnum.RAW:
        rows: List[dict] = [
            to_raw_question(q).model_dump(by_alias=True, exclude_none=True)
            for q in questions
        ]
        return rows

    normalizer = normalizer or get_category_normalizer()
    timestamp = to_reference_timestamp(now or datetime.now(timezone.utc))
    envelope = GameDataOutput(
        id=_new_id(),
        generated=timestamp,
        challenges=[to_challenge(q, normalizer, timestamp) for q in questions],
    )
    return envelope.model_dump(by_alias=True, exclude_none=True)


def dumps_export(payload: Any) -> str:
    return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False)
