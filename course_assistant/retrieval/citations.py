"""
Citation building and context formatting.

Pure functions over RetrievedPassage lists; no network or storage access.
"""

from typing import List

from course_assistant.config.constants import (
    CITATION_ELLIPSIS,
    CITATION_EXCERPT_LENGTH,
    CITATION_SOURCE_PREFIX,
)
from course_assistant.models import Citation, Passage, RetrievedPassage
from course_assistant.utils.helpers import truncate_text


def source_label(passage: Passage) -> str:
    """
    "Syllabus", then " Week {n}" and " - {topic}" when known.

    Example:
        week_number=7, topic="Midterm" -> "Syllabus Week 7 - Midterm"
    """
    label = CITATION_SOURCE_PREFIX
    if passage.week_number is not None:
        label += f" Week {passage.week_number}"
    if passage.topic:
        label += f" - {passage.topic}"
    return label


def build_citations(passages: List[RetrievedPassage]) -> List[Citation]:
    """
    Map retrieved passages to citations, one per passage, in order.

    Each excerpt is the first 200 characters of the passage followed by
    "...", so it is never longer than 203 characters.
    """
    return [
        Citation(
            source=source_label(rp.passage),
            content=truncate_text(rp.passage.content, CITATION_EXCERPT_LENGTH, CITATION_ELLIPSIS),
            page=rp.passage.page_number,
        )
        for rp in passages
    ]


def combine_passages_into_context(passages: List[RetrievedPassage]) -> str:
    """
    Join passages into one context block for the synthesis prompt.

    Each block starts with "[Source i]" followed by whatever of page, week
    and topic is known, then the passage text on the next line.
    """
    blocks = []
    for i, rp in enumerate(passages, start=1):
        header = f"[Source {i}]"
        if rp.passage.page_number is not None:
            header += f" Page {rp.passage.page_number}"
        if rp.passage.week_number is not None:
            header += f" Week {rp.passage.week_number}"
        if rp.passage.topic:
            header += f" - {rp.passage.topic}"
        blocks.append(f"{header}\n{rp.passage.content}")
    return "\n\n".join(blocks)
