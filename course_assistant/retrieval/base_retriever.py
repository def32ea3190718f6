"""
Base retriever interface and abstract base class.

This module defines the RetrieverInterface using Dependency Inversion Principle.
Agents depend on this abstraction rather than on a concrete retrieval engine,
so tests can hand them a stub retriever.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from course_assistant.config.constants import ContentType
from course_assistant.models import RetrievedPassage


class RetrieverInterface(ABC):
    """
    Abstract interface for all retrievers (Dependency Inversion Principle).

    All retrievers must implement:
    - retrieve(): Query the content store and return scored passages
    """

    @abstractmethod
    def retrieve(
        self,
        query: str,
        course_id: str,
        content_type: Optional[ContentType] = None,
        limit: int = 5,
        score_threshold: Optional[float] = None,
    ) -> List[RetrievedPassage]:
        """
        Retrieve the passages of a course most relevant to the query.

        Args:
            query: Question text
            course_id: Course to search in
            content_type: Restrict to policy or concept passages (None = both)
            limit: Maximum number of passages to return
            score_threshold: Drop passages scoring below this value (None = keep all)

        Returns:
            List[RetrievedPassage]: At most `limit` passages, highest score first.
            An empty list means nothing relevant was found.

        Raises:
            RetrievalError: If embedding or the store query fails
        """
        pass

    def validate_query(self, query: str) -> bool:
        """
        Validate that a query is acceptable for retrieval.

        Args:
            query: Query string to validate

        Returns:
            bool: True if query is valid, False otherwise
        """
        if not query or not isinstance(query, str):
            return False
        if len(query.strip()) == 0:
            return False
        return True
