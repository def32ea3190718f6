"""
Boundary mapping from backend rows to Passage.

Backends return rows in slightly different shapes (flat Supabase rows,
Chroma document + metadata pairs, nested joined relations). Everything is
converted here so the rest of the pipeline never branches on row shape.
"""

from typing import Any, Dict, Mapping, Optional, Sequence

from course_assistant.config.constants import ContentType
from course_assistant.models import Passage, RetrievedPassage


def _first(value: Any) -> Any:
    # PostgREST returns joined relations either as an object or a one-element list
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


def _content_type(value: Any) -> ContentType:
    if isinstance(value, ContentType):
        return value
    try:
        return ContentType(str(value).lower())
    except ValueError:
        # Untagged rows are treated as policy, as ingestion defaults ties to policy
        return ContentType.POLICY


def passage_from_row(row: Mapping[str, Any], course_id: Optional[str] = None) -> Passage:
    """
    Build a Passage from a backend row.

    Args:
        row: Mapping with at least "content"; other keys are optional:
             course_id, content_type, page_number, week_number, topic,
             embedding, metadata, id
        course_id: Fallback course id when the row does not carry one
                   (the store was already filtered by course)

    Returns:
        Passage: Normalized passage
    """
    metadata = _first(row.get("metadata")) or {}
    embedding: Sequence[float] = row.get("embedding")
    if embedding is None:
        embedding = ()
    elif isinstance(embedding, str):
        # pgvector columns come back from PostgREST as "[0.1,0.2,...]"
        embedding = [v for v in embedding.strip("[]").split(",") if v.strip()]

    row_id = row.get("id")
    return Passage(
        content=row.get("content") or "",
        course_id=str(row.get("course_id") or course_id or ""),
        content_type=_content_type(row.get("content_type")),
        page_number=_optional_int(row.get("page_number")),
        week_number=_optional_int(row.get("week_number")),
        topic=row.get("topic") or None,
        embedding=tuple(float(v) for v in embedding),
        metadata=dict(metadata),
        id=str(row_id) if row_id is not None else None,
    )


def retrieved_passage_from_row(
    row: Mapping[str, Any],
    score: Optional[float] = None,
    course_id: Optional[str] = None,
) -> RetrievedPassage:
    """
    Build a RetrievedPassage; score defaults to the row's "similarity" field.
    """
    if score is None:
        score = float(row.get("similarity") or 0.0)
    return RetrievedPassage(passage=passage_from_row(row, course_id=course_id), score=score)


def passage_to_metadata(passage: Passage) -> Dict[str, Any]:
    """
    Flatten a Passage into scalar metadata (Chroma rejects None values).
    """
    metadata: Dict[str, Any] = {
        "course_id": passage.course_id,
        "content_type": passage.content_type.value,
    }
    if passage.page_number is not None:
        metadata["page_number"] = passage.page_number
    if passage.week_number is not None:
        metadata["week_number"] = passage.week_number
    if passage.topic:
        metadata["topic"] = passage.topic
    return metadata
