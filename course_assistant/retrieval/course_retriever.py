"""
CourseRetriever - the retrieval engine.

Flow:
1. Embed the query with the configured embedding provider
2. Ask the content store for 2 x limit candidates scoped to the course
   (and content type, when given)
3. If the store cannot rank, fall back to an unranked filtered scan where
   every passage gets the placeholder score 0.5
4. Drop candidates below the score threshold and return at most `limit`

With rank_by_similarity=False (deterministic embeddings, whose scores carry
no meaning) steps 1-2 are skipped and the scan is used directly.

Store and embedding failures raise RetrievalError; an empty list is a
normal outcome.
"""

from typing import List, Optional

from course_assistant.config.constants import UNRANKED_PLACEHOLDER_SCORE, ContentType
from course_assistant.models import RetrievedPassage
from course_assistant.providers.base_provider import EmbeddingProviderInterface
from course_assistant.retrieval.base_retriever import RetrieverInterface
from course_assistant.storage.base_store import ContentStoreInterface
from course_assistant.utils.exceptions import RetrievalError, SimilaritySearchUnavailableError
from course_assistant.utils.logger import logger


class CourseRetriever(RetrieverInterface):

    def __init__(
        self,
        embedding_provider: EmbeddingProviderInterface,
        content_store: ContentStoreInterface,
        candidate_multiplier: int = 2,
        rank_by_similarity: bool = True,
    ):
        self.embedding_provider = embedding_provider
        self.content_store = content_store
        self.candidate_multiplier = candidate_multiplier
        # False skips embedding and ranking and always uses the unranked scan
        self.rank_by_similarity = rank_by_similarity
        self.logger = logger

    def retrieve(
        self,
        query: str,
        course_id: str,
        content_type: Optional[ContentType] = None,
        limit: int = 5,
        score_threshold: Optional[float] = None,
    ) -> List[RetrievedPassage]:
        if not self.validate_query(query):
            raise ValueError("Query must be a non-empty string")
        if limit <= 0:
            return []

        if self.rank_by_similarity:
            try:
                query_vector = self.embedding_provider.embed(query)
            except Exception as e:
                error_msg = f"Error embedding query: {str(e)}"
                self.logger.error(error_msg)
                raise RetrievalError(error_msg) from e

            candidates = self._search(query_vector, course_id, content_type, limit)
        else:
            candidates = self._scan(course_id, content_type, limit)

        if score_threshold is not None:
            candidates = [c for c in candidates if c.score >= score_threshold]

        results = candidates[:limit]
        self.logger.info(
            f"[CourseRetriever] Retrieved {len(results)} passages "
            f"(course={course_id}, type={content_type.value if content_type else 'any'})"
        )
        return results

    def _search(
        self,
        query_vector: List[float],
        course_id: str,
        content_type: Optional[ContentType],
        limit: int,
    ) -> List[RetrievedPassage]:
        try:
            return self.content_store.similarity_search(
                query_vector,
                course_id,
                content_type,
                limit * self.candidate_multiplier,
            )
        except SimilaritySearchUnavailableError as e:
            self.logger.warning(
                f"[CourseRetriever] Similarity search unavailable ({e}); "
                f"falling back to unranked scan with score {UNRANKED_PLACEHOLDER_SCORE}"
            )
        except Exception as e:
            error_msg = f"Error querying content store: {str(e)}"
            self.logger.error(error_msg)
            raise RetrievalError(error_msg) from e

        return self._scan(course_id, content_type, limit)

    def _scan(
        self,
        course_id: str,
        content_type: Optional[ContentType],
        limit: int,
    ) -> List[RetrievedPassage]:
        try:
            passages = self.content_store.scan_filter(course_id, content_type, limit)
        except Exception as e:
            error_msg = f"Error scanning content store: {str(e)}"
            self.logger.error(error_msg)
            raise RetrievalError(error_msg) from e

        return [RetrievedPassage(passage=p, score=UNRANKED_PLACEHOLDER_SCORE) for p in passages]
