"""
Report rendering: fixed-width text tables and JSON.
"""

import json
from typing import Any, Callable, Dict, List, Optional, Union

from ..schemas import (
    AnswerStatsSection, CategoryEntry, DifficultyEntry, HintSection,
    LengthSection, ReportData, ReportSection, SourceEntry, SummarySection,
)

RULE_WIDTH = 50
MIN_NAME_WIDTH = 8


def parse_section(name: Optional[str]) -> Optional[ReportSection]:
    """Map a section name to ReportSection. Unknown or missing names mean the full report."""
    if name is None:
        return None
    try:
        return ReportSection(name.lower())
    except ValueError:
        return None


def header(title: str, width: int = RULE_WIDTH) -> str:
    line = "─" * width
    return f"{line}\n  {title}\n{line}"


def bar(percentage: float) -> str:
    return "█" * int(percentage / 2)


# =============================================================================
# Text Rendering
# =============================================================================

def render_summary(s: SummarySection) -> str:
    lines = [
        header("Summary"),
        f"  Total questions : {s.total_questions}",
        f"  Total file size : {s.file_size}",
        f"  Files           : {s.file_count}",
    ]
    if s.files:
        for f in s.files:
            name = f.name[:28].ljust(28)
            size = f.file_size[:8].ljust(8)
            lines.append(f"    {name}  {f.question_count:5d} questions  {size}  {f.format}")
    if s.generated_date:
        lines.append(f"  Latest generated: {s.generated_date}")
    lines.append("")
    return "\n".join(lines)


def _render_counts(title: str, entries: List[Union[CategoryEntry, SourceEntry]], with_bar: bool) -> str:
    lines = [header(title)]
    width = max([len(e.name) for e in entries] + [MIN_NAME_WIDTH])
    for e in entries:
        row = f"  {e.name.ljust(width)}  {e.count:4d}  ({e.percentage:5.1f}%)"
        if with_bar:
            row += f"  {bar(e.percentage)}"
        lines.append(row)
    lines.append("")
    return "\n".join(lines)


def render_categories(categories: List[CategoryEntry]) -> str:
    return _render_counts(f"Categories ({len(categories)} topics)", categories, with_bar=True)


def render_sources(sources: List[SourceEntry]) -> str:
    return _render_counts("Sources", sources, with_bar=False)


def render_difficulty(difficulty: Optional[List[DifficultyEntry]]) -> str:
    lines = [header("Difficulty")]
    if not difficulty:
        lines.append("  (not available: game data format has no difficulty field)")
        lines.append("")
        return "\n".join(lines)

    for d in difficulty:
        lines.append(f"  {d.level.ljust(10)}  {d.count:4d}  ({d.percentage:5.1f}%)  {bar(d.percentage)}")
    lines.append("")
    return "\n".join(lines)


def render_hints(h: HintSection) -> str:
    total = h.with_hints + h.without_hints
    pct = h.with_hints / total * 100 if total > 0 else 0.0
    lines = [
        header("Hints"),
        f"  With hints    : {h.with_hints} ({pct:.1f}%)",
        f"  Without hints : {h.without_hints}",
    ]
    if h.sample_hints:
        lines.append("  Sample hints  :")
        for hint in h.sample_hints:
            lines.append(f"    - {hint}")
    lines.append("")
    return "\n".join(lines)


def render_question_length(length: LengthSection) -> str:
    lines = [
        header("Question Length"),
        f"  Shortest : {length.min_chars} chars, \"{length.min_question}\"",
        f"  Longest  : {length.max_chars} chars, \"{length.max_question}\"",
        f"  Average  : {length.avg_chars} chars",
        "",
    ]
    return "\n".join(lines)


def render_answer_stats(a: AnswerStatsSection) -> str:
    lines = [
        header("Answer Stats"),
        f"  Avg answers/question : {a.avg_answers_per_question:.1f}",
        "  Correct answer position distribution:",
    ]
    for key in sorted(a.correct_position_distribution):
        lines.append(f"    {key} : {a.correct_position_distribution[key]}")
    lines.append("")
    return "\n".join(lines)


TEXT_RENDERERS: Dict[ReportSection, Callable[[ReportData], str]] = {
    ReportSection.SUMMARY: lambda r: render_summary(r.summary),
    ReportSection.CATEGORIES: lambda r: render_categories(r.categories),
    ReportSection.SOURCES: lambda r: render_sources(r.sources),
    ReportSection.DIFFICULTY: lambda r: render_difficulty(r.difficulty),
    ReportSection.HINTS: lambda r: render_hints(r.hints),
    ReportSection.LENGTH: lambda r: render_question_length(r.question_length),
    ReportSection.ANSWERS: lambda r: render_answer_stats(r.answer_stats),
}


def render_text(report: ReportData, section: Optional[str] = None) -> str:
    """Render one section, or every section in order when section is None/unknown."""
    selected = parse_section(section)
    sections = [selected] if selected else list(ReportSection)
    return "\n".join(TEXT_RENDERERS[s](report) for s in sections)


# =============================================================================
# JSON Rendering
# =============================================================================

def _dump(value: Any) -> Any:
    if isinstance(value, list):
        return [_dump(v) for v in value]
    return value.model_dump(mode="json", by_alias=True)


SECTION_VALUES: Dict[ReportSection, Callable[[ReportData], Any]] = {
    ReportSection.SUMMARY: lambda r: r.summary,
    ReportSection.CATEGORIES: lambda r: r.categories,
    ReportSection.SOURCES: lambda r: r.sources,
    ReportSection.DIFFICULTY: lambda r: r.difficulty or [],
    ReportSection.HINTS: lambda r: r.hints,
    ReportSection.LENGTH: lambda r: r.question_length,
    ReportSection.ANSWERS: lambda r: r.answer_stats,
}


def report_to_dict(report: ReportData, section: Optional[str] = None) -> Any:
    """The JSON-ready value of the whole report or of a single section."""
    selected = parse_section(section)
    if selected is None:
        return _dump(report)
    return _dump(SECTION_VALUES[selected](report))


def render_json(report: ReportData, section: Optional[str] = None) -> str:
    return json.dumps(report_to_dict(report, section), indent=2, sort_keys=True, ensure_ascii=False)
