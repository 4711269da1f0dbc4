"""
Trivia store service.
Owns categories, category aliases and questions. Every public call runs in
its own transaction: it either commits fully or raises StorageError with
nothing written.
"""

import enum
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence

from sqlalchemy import distinct, func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..database import create_db_engine, database_url, init_db, make_session_factory
from ..exceptions import StorageError
from ..models import DIFFICULTY_LEVELS, Category, CategoryAlias, Question
from ..schemas import RawChoice
from .category_service import CategoryNormalizer, get_category_normalizer, normalize_label
from .fingerprint import fingerprint
from .loader_service import ProfiledQuestion


class InsertResult(enum.Enum):
    """Outcome of a question insert."""
    INSERTED = "inserted"
    DUPLICATE = "duplicate"


@dataclass
class CategoryStats:
    id: int
    name: str
    pic: str
    count: int


@dataclass
class AliasEntry:
    alias: str
    canonical: str


@dataclass
class QuickStats:
    total_questions: int
    total_categories: int
    total_sources: int
    easy_count: int
    medium_count: int
    hard_count: int
    no_difficulty_count: int


def normalize_difficulty(difficulty: Optional[str]) -> Optional[str]:
    """Map a difficulty label onto easy/medium/hard (case-insensitive), else None."""
    if difficulty is None:
        return None
    lowered = difficulty.lower()
    if lowered in DIFFICULTY_LEVELS:
        return lowered
    return None


class TriviaStore:
    """Transactional access to the trivia database."""

    def __init__(
        self,
        session_factory: sessionmaker,
        normalizer: Optional[CategoryNormalizer] = None,
        engine: Optional[Engine] = None,
        path: Optional[str] = None,
    ):
        self.SessionLocal = session_factory
        self.normalizer = normalizer or get_category_normalizer()
        self.engine = engine
        self.path = path

    @classmethod
    def open(cls, path: str, normalizer: Optional[CategoryNormalizer] = None) -> "TriviaStore":
        """Open (creating if needed) the SQLite store at path."""
        try:
            engine = create_db_engine(database_url(path))
            init_db(engine)
        except SQLAlchemyError as e:
            raise StorageError(f"Could not open database at {path}: {e}") from e
        return cls(make_session_factory(engine), normalizer=normalizer, engine=engine, path=path)

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(str(e)) from e
        finally:
            db.close()

    # =========================================================================
    # Category Operations
    # =========================================================================

    def get_or_create_category(self, name: str, icon: Optional[str] = None) -> int:
        """Return the id of the category with this name, creating it if needed."""
        with self._session() as db:
            return self._get_or_create_category(db, name, icon)

    def _get_or_create_category(self, db: Session, name: str, icon: Optional[str]) -> int:
        existing = db.query(Category).filter(Category.name == name).first()
        if existing:
            return existing.id

        category = Category(name=name, pic=icon or self.normalizer.icon_for(name))
        db.add(category)
        db.flush()  # Get category ID
        return category.id

    def add_alias(self, alias: str, canonical_name: str) -> bool:
        """
        Register alias -> canonical_name.

        Returns False without writing when the canonical category does not
        exist yet or the alias is already registered.
        """
        key = normalize_label(alias)
        with self._session() as db:
            category = db.query(Category).filter(Category.name == canonical_name).first()
            if not category:
                return False

            if db.get(CategoryAlias, key) is not None:
                return False

            db.add(CategoryAlias(alias=key, category_id=category.id))
            return True

    def resolve_category_id(self, raw_label: str) -> int:
        """
        Resolve a raw label to a category id, creating the category if needed.

        The alias table wins over a canonical-name match.
        """
        key = normalize_label(raw_label)
        with self._session() as db:
            alias = db.get(CategoryAlias, key)
            if alias is not None:
                return alias.category_id

            canonical = self.normalizer.normalize(raw_label)
            return self._get_or_create_category(db, canonical, None)

    # =========================================================================
    # Question Operations
    # =========================================================================

    def insert_question(
        self,
        text: str,
        choices: Sequence[RawChoice],
        correct_index: int,
        category_id: int,
        difficulty: Optional[str] = None,
        explanation: Optional[str] = None,
        hint: Optional[str] = None,
        source: str = "unknown",
        imported_from: Optional[str] = None,
    ) -> InsertResult:
        """Insert a question unless one with the same fingerprint already exists."""
        text_hash = fingerprint(text)

        with self._session() as db:
            exists = db.query(Question.id).filter(Question.text_hash == text_hash).first()
            if exists is not None:
                return InsertResult.DUPLICATE

            question = Question(
                text=text,
                text_hash=text_hash,
                choices=[c.model_dump(by_alias=True) for c in choices],
                correct_index=correct_index,
                category_id=category_id,
                difficulty=normalize_difficulty(difficulty),
                explanation=explanation,
                hint=hint,
                source=source,
                imported_from=imported_from,
            )
            db.add(question)
            return InsertResult.INSERTED

    def import_question(self, question: ProfiledQuestion, imported_from: Optional[str] = None) -> InsertResult:
        """Resolve the category of a loaded question and insert it."""
        category_id = self.resolve_category_id(question.category)
        choices = [
            RawChoice(text=text, is_correct=(i == question.correct_index))
            for i, text in enumerate(question.answers)
        ]
        return self.insert_question(
            text=question.question,
            choices=choices,
            correct_index=question.correct_index,
            category_id=category_id,
            difficulty=question.difficulty,
            explanation=question.explanation,
            hint=question.hint,
            source=question.source or "unknown",
            imported_from=imported_from,
        )

    # =========================================================================
    # Query Operations
    # =========================================================================

    def all_categories(self) -> List[CategoryStats]:
        """All categories with question counts, most questions first."""
        question_count = func.count(Question.id)
        with self._session() as db:
            rows = (
                db.query(Category.id, Category.name, Category.pic, question_count.label("question_count"))
                .outerjoin(Question, Question.category_id == Category.id)
                .group_by(Category.id)
                .order_by(question_count.desc(), Category.name)
                .all()
            )
            return [
                CategoryStats(id=row.id, name=row.name, pic=row.pic, count=row.question_count)
                for row in rows
            ]

    def all_aliases(self) -> List[AliasEntry]:
        with self._session() as db:
            rows = (
                db.query(CategoryAlias.alias, Category.name)
                .join(Category, Category.id == CategoryAlias.category_id)
                .order_by(Category.name, CategoryAlias.alias)
                .all()
            )
            return [AliasEntry(alias=alias, canonical=name) for alias, name in rows]

    def all_questions(
        self,
        category: Optional[str] = None,
        difficulty: Optional[str] = None,
        source: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[ProfiledQuestion]:
        """Stored questions in insertion order, optionally filtered and capped."""
        with self._session() as db:
            query = (
                db.query(Question, Category.name)
                .join(Category, Category.id == Question.category_id)
            )
            if category is not None:
                query = query.filter(Category.name == category)
            if difficulty is not None:
                query = query.filter(Question.difficulty == difficulty.lower())
            if source is not None:
                query = query.filter(Question.source == source)

            query = query.order_by(Question.id)
            if limit is not None:
                query = query.limit(limit)

            return [self._to_profiled(q, category_name) for q, category_name in query.all()]

    @staticmethod
    def _to_profiled(question: Question, category_name: str) -> ProfiledQuestion:
        choices = question.choices or []
        idx = question.correct_index
        correct_text = choices[idx]["text"] if 0 <= idx < len(choices) else ""

        return ProfiledQuestion(
            question=question.text,
            answers=[c["text"] for c in choices],
            correct_answer=correct_text,
            correct_index=idx,
            category=category_name,
            difficulty=question.difficulty,
            explanation=question.explanation,
            hint=question.hint,
            source=question.source,
        )

    def stats(self) -> QuickStats:
        with self._session() as db:
            total = db.query(func.count(Question.id)).scalar() or 0
            categories = db.query(func.count(distinct(Question.category_id))).scalar() or 0
            sources = db.query(func.count(distinct(Question.source))).scalar() or 0

            by_difficulty: Dict[Optional[str], int] = dict(
                db.query(Question.difficulty, func.count(Question.id))
                .group_by(Question.difficulty)
                .all()
            )

            return QuickStats(
                total_questions=total,
                total_categories=categories,
                total_sources=sources,
                easy_count=by_difficulty.get("easy", 0),
                medium_count=by_difficulty.get("medium", 0),
                hard_count=by_difficulty.get("hard", 0),
                no_difficulty_count=by_difficulty.get(None, 0),
            )
