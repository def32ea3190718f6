"""
Retrieval engine and citation helpers.
"""

from course_assistant.retrieval.base_retriever import RetrieverInterface
from course_assistant.retrieval.citations import (
    build_citations,
    combine_passages_into_context,
    source_label,
)
from course_assistant.retrieval.course_retriever import CourseRetriever

__all__ = [
    "RetrieverInterface",
    "CourseRetriever",
    "build_citations",
    "combine_passages_into_context",
    "source_label",
]
