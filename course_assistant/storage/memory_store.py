"""
In-process stores.

Used in offline mode and by the test suite. The content store ranks by
cosine similarity over the stored embeddings and can be constructed with
similarity search disabled to exercise the unranked fallback.
"""

import math
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from course_assistant.config.constants import ContentType, EscalationStatus
from course_assistant.models import ChatLogEntry, Escalation, Passage, RetrievedPassage
from course_assistant.storage.base_store import (
    ChatLogStoreInterface,
    ContentStoreInterface,
    EscalationStoreInterface,
)
from course_assistant.utils.exceptions import SimilaritySearchUnavailableError


def cosine_similarity(a: List[float], b: List[float]) -> float:
    if len(a) != len(b):
        raise ValueError("Vectors must have the same length")

    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    denominator = norm_a * norm_b
    if denominator == 0:
        return 0.0
    return dot / denominator


class InMemoryContentStore(ContentStoreInterface):

    def __init__(
        self,
        passages: Optional[List[Passage]] = None,
        similarity_search_enabled: bool = True,
    ) -> None:
        self._passages: List[Passage] = []
        self.similarity_search_enabled = similarity_search_enabled
        if passages:
            self.add_passages(passages)

    def _filtered(self, course_id: str, content_type: Optional[ContentType]) -> List[Passage]:
        return [
            p for p in self._passages
            if p.course_id == course_id
            and (content_type is None or p.content_type == content_type)
        ]

    def similarity_search(
        self,
        query_vector: List[float],
        course_id: str,
        content_type: Optional[ContentType],
        limit: int,
    ) -> List[RetrievedPassage]:
        if not self.similarity_search_enabled:
            raise SimilaritySearchUnavailableError("In-memory similarity search disabled")

        scored = [
            RetrievedPassage(
                passage=p,
                # Clamp cosine into [0, 1] like 1 - cosine distance from pgvector/Chroma
                score=max(0.0, min(1.0, cosine_similarity(query_vector, list(p.embedding)))),
            )
            for p in self._filtered(course_id, content_type)
            if p.embedding
        ]
        scored.sort(key=lambda r: r.score, reverse=True)
        return scored[:limit]

    def scan_filter(
        self,
        course_id: str,
        content_type: Optional[ContentType],
        limit: int,
    ) -> List[Passage]:
        return self._filtered(course_id, content_type)[:limit]

    def add_passages(self, passages: List[Passage]) -> List[str]:
        ids = []
        for passage in passages:
            if passage.id is None:
                passage = Passage(
                    content=passage.content,
                    course_id=passage.course_id,
                    content_type=passage.content_type,
                    page_number=passage.page_number,
                    week_number=passage.week_number,
                    topic=passage.topic,
                    embedding=passage.embedding,
                    metadata=passage.metadata,
                    id=str(uuid.uuid4()),
                )
            self._passages.append(passage)
            ids.append(passage.id)
        return ids

    def __len__(self) -> int:
        return len(self._passages)


class InMemoryEscalationStore(EscalationStoreInterface):

    def __init__(self, profiles: Optional[Dict[str, Dict[str, Any]]] = None) -> None:
        self.escalations: Dict[str, Escalation] = {}
        self.profiles: Dict[str, Dict[str, Any]] = dict(profiles or {})

    def insert_escalation(self, escalation: Escalation) -> str:
        escalation_id = str(uuid.uuid4())
        self.escalations[escalation_id] = Escalation(
            id=escalation_id,
            course_id=escalation.course_id,
            student_id=escalation.student_id,
            query=escalation.query,
            category=escalation.category,
            status=EscalationStatus.PENDING,
            created_at=datetime.now(timezone.utc),
        )
        return escalation_id

    def get_escalation(self, escalation_id: str) -> Optional[Escalation]:
        return self.escalations.get(escalation_id)

    def get_profile(self, student_id: str) -> Optional[Dict[str, Any]]:
        return self.profiles.get(student_id)


class InMemoryChatLogStore(ChatLogStoreInterface):

    def __init__(self) -> None:
        self.entries: List[ChatLogEntry] = []

    def insert_chat_log(self, entry: ChatLogEntry) -> None:
        self.entries.append(entry)
