"""
Storage interfaces consumed by the answer pipeline.

- ContentStoreInterface: course passages with vector similarity search and
  an unranked filtered scan for when similarity search is not provisioned.
- EscalationStoreInterface: escalation inserts/reads and profile lookups.
- ChatLogStoreInterface: conversation log inserts.

Passages are read-only to the pipeline; add_passages is used by ingestion
only and always inserts new rows.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from course_assistant.config.constants import ContentType
from course_assistant.models import ChatLogEntry, Escalation, Passage, RetrievedPassage


class ContentStoreInterface(ABC):

    @abstractmethod
    def similarity_search(
        self,
        query_vector: List[float],
        course_id: str,
        content_type: Optional[ContentType],
        limit: int,
    ) -> List[RetrievedPassage]:
        """
        Return up to `limit` passages of the course, most similar first.

        Raises:
            SimilaritySearchUnavailableError: If the backend cannot rank
            Exception: Any other backend failure (mapped by the caller)
        """
        pass

    @abstractmethod
    def scan_filter(
        self,
        course_id: str,
        content_type: Optional[ContentType],
        limit: int,
    ) -> List[Passage]:
        """Return up to `limit` passages of the course, in no particular order."""
        pass

    @abstractmethod
    def add_passages(self, passages: List[Passage]) -> List[str]:
        """Insert passages (with embeddings) and return their ids."""
        pass


class EscalationStoreInterface(ABC):

    @abstractmethod
    def insert_escalation(self, escalation: Escalation) -> str:
        """
        Insert an escalation record and return its id.

        Raises:
            EscalationPersistenceError: If the record was not saved
        """
        pass

    @abstractmethod
    def get_escalation(self, escalation_id: str) -> Optional[Escalation]:
        pass

    @abstractmethod
    def get_profile(self, student_id: str) -> Optional[Dict[str, Any]]:
        """Return the student's profile row ({"name": ..., ...}) or None."""
        pass


class ChatLogStoreInterface(ABC):

    @abstractmethod
    def insert_chat_log(self, entry: ChatLogEntry) -> None:
        pass
