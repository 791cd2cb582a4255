"""
Explanation parser: raw provider text -> summary + ordered steps.

Provider identity never changes parsing; the same rules apply to model
output and to local fallback text:

- Paragraphs are separated by blank lines; empty ones are dropped
- The first paragraph is the summary
- Every other paragraph is one step. A first line ending in ":" or starting
  with an ordinal ("1.", "2)") is the step title when a body follows it;
  otherwise the step is titled "Step N" and keeps the whole paragraph
- Titles get a topical marker by keyword, or a rotating one by position
- A "Formula: ..." line inside a step body is lifted into step.formula
- No steps at all: one step holding the entire raw text
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

try:
    from ..models.content import ExplanationStep
except ImportError:
    from src.models.content import ExplanationStep


_PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n")
_ORDINAL = re.compile(r"^\s*\d+\s*[.)]\s*")
_FORMULA_LINE = re.compile(r"^\s*formula\s*:\s*(.+?)\s*$", re.IGNORECASE)

# (marker, keywords) checked in order against the lowercase title
TOPIC_MARKERS = (
    ("📚", ("introduction", "intro", "overview", "what is", "hook")),
    ("🔑", ("key concept", "concept", "definition", "principle", "key idea", "main idea")),
    ("💡", ("example",)),
    ("🎯", ("analogy", "imagine", "compare")),
    ("🌍", ("application", "real world", "real-world", "everyday", "in practice")),
    ("✍️", ("practice", "exercise", "try it", "your turn")),
)
ROTATING_MARKERS = ("📖", "✨", "🧠")

DEFAULT_STEP_TITLE = "Step {n}"
DEFAULT_SUMMARY = "Let's explore {topic} together, one step at a time."


@dataclass
class ParsedExplanation:
    """Summary plus at least one step."""

    summary: str
    steps: List[ExplanationStep]


def split_paragraphs(text: str) -> List[str]:
    """Non-empty, stripped paragraphs in order."""
    normalized = (text or "").replace("\r\n", "\n")
    return [p.strip() for p in _PARAGRAPH_BREAK.split(normalized) if p.strip()]


def choose_marker(title: str, position: int) -> str:
    """Topical marker for a title, or a rotating one indexed by position."""
    lowered = title.lower()
    for marker, keywords in TOPIC_MARKERS:
        if any(keyword in lowered for keyword in keywords):
            return marker
    return ROTATING_MARKERS[position % len(ROTATING_MARKERS)]


def _heading(line: str) -> Optional[str]:
    """Title text if the line looks like a step heading, else None."""
    stripped = line.strip()
    is_ordinal = bool(_ORDINAL.match(stripped))
    if not (is_ordinal or stripped.endswith(":")):
        return None
    title = _ORDINAL.sub("", stripped).rstrip(":").strip()
    return title or None


def _lift_formula(body: str) -> tuple[str, Optional[str]]:
    formula = None
    kept = []
    for line in body.split("\n"):
        match = _FORMULA_LINE.match(line)
        if match and formula is None:
            formula = match.group(1)
            continue
        kept.append(line)
    return "\n".join(kept).strip(), formula


def parse_step(paragraph: str, step_id: int, position: int) -> ExplanationStep:
    """
    Turn one paragraph into a step.

    Args:
        paragraph: Stripped, non-empty paragraph
        step_id: 1-based step number
        position: Paragraph index in the raw text (drives rotating markers)
    """
    first_line, _, rest = paragraph.partition("\n")
    title = _heading(first_line) if rest.strip() else None

    if title is not None:
        body = rest.strip()
    else:
        title = DEFAULT_STEP_TITLE.format(n=step_id)
        body = paragraph

    content, formula = _lift_formula(body)
    if not content:
        content = body

    return ExplanationStep(
        id=step_id,
        title=f"{choose_marker(title, position)} {title}",
        content=content,
        formula=formula,
    )


def parse_explanation(text: str, topic: str = "") -> ParsedExplanation:
    """
    Parse raw explanation text into a summary and steps.

    Args:
        text: Raw text as returned by a provider or the fallback
        topic: Topic, used for the default summary

    Returns:
        ParsedExplanation whose steps list is never empty
    """
    paragraphs = split_paragraphs(text)

    if paragraphs:
        summary = paragraphs[0]
    else:
        summary = DEFAULT_SUMMARY.format(topic=topic or "this topic")

    steps = [
        parse_step(paragraph, step_id=index, position=index)
        for index, paragraph in enumerate(paragraphs[1:], start=1)
    ]

    if not steps:
        steps = [
            ExplanationStep(
                id=1,
                title=f"{ROTATING_MARKERS[0]} {DEFAULT_STEP_TITLE.format(n=1)}",
                content=(text or "").strip(),
            )
        ]

    return ParsedExplanation(summary=summary, steps=steps)
