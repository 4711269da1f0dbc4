"""
Batch import service.
Loads JSON files and writes their questions into the store, or simulates
that in a dry run. Missing and malformed files are skipped and reported
per file; the remaining files still run.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from ..exceptions import DataFileNotFoundError, UnrecognizedFormatError
from .category_service import CategoryNormalizer, get_category_normalizer
from .fingerprint import fingerprint
from .loader_service import LoadResult, load_file
from .store_service import InsertResult, TriviaStore


@dataclass
class FileImportResult:
    """Per-file outcome of an import or dry run."""
    path: str
    name: str
    question_count: int = 0
    format_label: Optional[str] = None
    imported: int = 0
    duplicates: int = 0
    error: Optional[str] = None  # Set when the file was skipped

    @property
    def skipped(self) -> bool:
        return self.error is not None


@dataclass
class ImportSummary:
    files: List[FileImportResult] = field(default_factory=list)
    categories: Set[str] = field(default_factory=set)
    unique_fingerprints: int = 0  # Dry run only

    @property
    def total_questions(self) -> int:
        return sum(f.question_count for f in self.files)

    @property
    def total_imported(self) -> int:
        return sum(f.imported for f in self.files)

    @property
    def total_duplicates(self) -> int:
        return sum(f.duplicates for f in self.files)

    @property
    def skipped_files(self) -> List[FileImportResult]:
        return [f for f in self.files if f.skipped]


def _load_or_skip(path: str, result: FileImportResult) -> Optional[LoadResult]:
    try:
        loaded = load_file(path)
    except (DataFileNotFoundError, UnrecognizedFormatError) as e:
        result.error = str(e)
        return None

    result.question_count = len(loaded.questions)
    result.format_label = loaded.format_label
    return loaded


def import_files(store: TriviaStore, paths: Sequence[str]) -> ImportSummary:
    """
    Seed the taxonomy, then import every file in order.

    Each question is committed on its own, so files processed before a
    storage failure stay imported.
    """
    store.normalizer.seed(store)
    summary = ImportSummary()

    for raw_path in paths:
        path = os.path.expanduser(raw_path)
        result = FileImportResult(path=raw_path, name=os.path.basename(path))
        summary.files.append(result)

        loaded = _load_or_skip(path, result)
        if loaded is None:
            continue

        for q in loaded.questions:
            canonical = store.normalizer.normalize(q.category)
            outcome = store.import_question(q, imported_from=result.name)
            if outcome == InsertResult.INSERTED:
                result.imported += 1
                summary.categories.add(canonical)
            else:
                result.duplicates += 1

    return summary


def dry_run_files(paths: Sequence[str], normalizer: Optional[CategoryNormalizer] = None) -> ImportSummary:
    """Count what an import would do without opening the store."""
    normalizer = normalizer or get_category_normalizer()
    summary = ImportSummary()
    seen: Set[str] = set()

    for raw_path in paths:
        path = os.path.expanduser(raw_path)
        result = FileImportResult(path=raw_path, name=os.path.basename(path))
        summary.files.append(result)

        loaded = _load_or_skip(path, result)
        if loaded is None:
            continue

        for q in loaded.questions:
            text_hash = fingerprint(q.question)
            if text_hash in seen:
                result.duplicates += 1
            else:
                seen.add(text_hash)
            summary.categories.add(normalizer.normalize(q.category))

    summary.unique_fingerprints = len(seen)
    return summary
