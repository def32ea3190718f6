"""
Data types shared across the answer pipeline.

Every component works with these normalized types; raw backend rows are
converted once at the storage boundary (see storage/mapping.py).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from course_assistant.config.constants import ContentType, EscalationStatus, Route


@dataclass(frozen=True)
class Passage:
    """
    A retrievable unit of course content.

    Attributes:
        content: The passage text
        course_id: Owning course
        content_type: policy or concept
        page_number / week_number / topic: Optional citation metadata
        embedding: Fixed-dimension vector, immutable once stored
        metadata: Free-form metadata carried from ingestion
        id: Backend identifier, when known
    """
    content: str
    course_id: str
    content_type: ContentType
    page_number: Optional[int] = None
    week_number: Optional[int] = None
    topic: Optional[str] = None
    embedding: Tuple[float, ...] = ()
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)
    id: Optional[str] = None


@dataclass(frozen=True)
class RetrievedPassage:
    """A Passage plus the similarity score assigned by one retrieval call."""
    passage: Passage
    score: float


@dataclass(frozen=True)
class RoutingDecision:
    route: Route
    confidence: float
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "route": self.route.value,
            "confidence": self.confidence,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class Citation:
    """User-facing reference back to a retrieved passage."""
    source: str
    content: str
    page: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"source": self.source, "content": self.content}
        if self.page is not None:
            data["page"] = self.page
        return data


@dataclass
class AgentResponse:
    """
    Answer (or escalation notice) returned to the surrounding application.

    route and escalation_id are filled in by the AnswerPipeline; agents leave
    them empty.
    """
    response: str
    citations: List[Citation] = field(default_factory=list)
    confidence: float = 0.0
    should_escalate: bool = False
    route: Optional[Route] = None
    escalation_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "response": self.response,
            "citations": [c.to_dict() for c in self.citations],
            "confidence": self.confidence,
            "shouldEscalate": self.should_escalate,
            "route": self.route.value if self.route else None,
            "escalationId": self.escalation_id,
        }


@dataclass
class Escalation:
    """Persisted request for instructor review."""
    course_id: str
    student_id: str
    query: str
    category: Optional[str] = None
    status: EscalationStatus = EscalationStatus.PENDING
    response: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None

    def to_record(self) -> Dict[str, Any]:
        """Row shape used for inserts (backend fills id/created_at)."""
        return {
            "course_id": self.course_id,
            "student_id": self.student_id,
            "query": self.query,
            "status": self.status.value,
            "category": self.category,
        }

    @classmethod
    def from_record(cls, row: Dict[str, Any]) -> "Escalation":
        return cls(
            id=row.get("id"),
            course_id=row["course_id"],
            student_id=row["student_id"],
            query=row["query"],
            category=row.get("category"),
            status=EscalationStatus(row.get("status") or EscalationStatus.PENDING.value),
            response=row.get("response"),
            created_at=_parse_timestamp(row.get("created_at")),
            resolved_at=_parse_timestamp(row.get("resolved_at")),
        )


@dataclass(frozen=True)
class EscalationResult:
    escalation_id: str
    message: str
    student_name: str


@dataclass(frozen=True)
class CompletionResult:
    """Text returned by a completion provider, with optional token usage."""
    text: str
    usage: Optional[Dict[str, int]] = None


@dataclass
class ChatLogEntry:
    course_id: str
    student_id: str
    message: str
    response: str
    route: Route
    citations: List[Citation] = field(default_factory=list)
    escalation_id: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        return {
            "course_id": self.course_id,
            "user_id": self.student_id,
            "message": self.message.strip(),
            "response": self.response,
            "agent": self.route.value,
            "citations": [c.to_dict() for c in self.citations] or None,
            "escalation_id": self.escalation_id,
        }


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    # PostgREST returns ISO-8601; "Z" suffix is not accepted before Python 3.11
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
