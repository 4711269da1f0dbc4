"""
SQLAlchemy database models for the trivia store.
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey,
    Text, JSON, CheckConstraint, Index
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


DIFFICULTY_LEVELS = ("easy", "medium", "hard")


class Category(Base):
    """Canonical category a question belongs to."""
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), unique=True, nullable=False)

    # Icon identifier shown next to the category
    pic = Column(String(100), nullable=False, default="questionmark.circle")

    # Relationships
    aliases = relationship("CategoryAlias", back_populates="category", cascade="all, delete-orphan", passive_deletes=True)
    questions = relationship("Question", back_populates="category", passive_deletes="all")


class CategoryAlias(Base):
    """Free-text label (lowercased) that maps onto exactly one category."""
    __tablename__ = "category_aliases"

    alias = Column(String(200), primary_key=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False)

    # Relationships
    category = relationship("Category", back_populates="aliases")


class Question(Base):
    """An imported trivia question, deduplicated by text_hash."""
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, index=True)
    text = Column(Text, nullable=False)

    # Fingerprint of the normalized question text
    text_hash = Column(String(64), unique=True, nullable=False)

    # [{"text": ..., "isCorrect": ...}, ...]
    choices = Column(JSON, nullable=False)
    correct_index = Column(Integer, nullable=False)

    category_id = Column(Integer, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False)

    difficulty = Column(String(10), nullable=True)
    explanation = Column(Text, nullable=True)
    hint = Column(Text, nullable=True)
    source = Column(String(200), nullable=False, default="unknown")
    imported_from = Column(String(500), nullable=True)  # Base name of the input file

    created_at = Column(DateTime, default=func.now(), nullable=False)

    # Relationships
    category = relationship("Category", back_populates="questions")

    __table_args__ = (
        CheckConstraint(
            "difficulty IN ('easy', 'medium', 'hard')",
            name="ck_questions_difficulty",
        ),
        Index("idx_questions_category", "category_id"),
        Index("idx_questions_difficulty", "difficulty"),
        Index("idx_questions_source", "source"),
    )
