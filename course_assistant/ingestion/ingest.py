"""
CourseContentIngestor - turns course material into stored passages.

Flow per page: chunk -> skip empty chunks -> categorise -> embed (batched)
-> insert. Ingestion only inserts; existing passages are never modified.
"""

from dataclasses import dataclass
from typing import List, Optional

from course_assistant.ingestion.chunker import categorize_chunk, chunk_text
from course_assistant.models import Passage
from course_assistant.providers.base_provider import EmbeddingProviderInterface
from course_assistant.storage.base_store import ContentStoreInterface
from course_assistant.utils.exceptions import IngestionError
from course_assistant.utils.logger import logger


@dataclass(frozen=True)
class PageText:
    text: str
    page_number: Optional[int] = None


class CourseContentIngestor:

    def __init__(
        self,
        embedding_provider: EmbeddingProviderInterface,
        content_store: ContentStoreInterface,
        chunk_size: int = 250,
        chunk_overlap: int = 50,
    ) -> None:
        self.embedding_provider = embedding_provider
        self.content_store = content_store
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.logger = logger

    def build_passages(
        self,
        course_id: str,
        pages: List[PageText],
        week_number: Optional[int] = None,
        topic: Optional[str] = None,
    ) -> List[Passage]:
        """Chunk and categorise pages into passages without embeddings."""
        passages: List[Passage] = []
        for page in pages:
            if not page.text or not page.text.strip():
                self.logger.warning(f"[Ingestor] Skipping empty page {page.page_number}")
                continue

            for chunk in chunk_text(page.text, self.chunk_size, self.chunk_overlap):
                if not chunk.strip():
                    continue
                passages.append(
                    Passage(
                        content=chunk.strip(),
                        course_id=course_id,
                        content_type=categorize_chunk(chunk),
                        page_number=page.page_number,
                        week_number=week_number,
                        topic=topic,
                        metadata={
                            "course_id": course_id,
                            "page_number": page.page_number,
                            "week_number": week_number,
                            "topic": topic,
                        },
                    )
                )
        return passages

    def ingest(
        self,
        course_id: str,
        pages: List[PageText],
        week_number: Optional[int] = None,
        topic: Optional[str] = None,
    ) -> List[str]:
        """
        Chunk, categorise, embed and store course material.

        Returns:
            List[str]: Ids of the inserted passages

        Raises:
            IngestionError: If no valid chunk was produced, or embedding or
            storing failed
        """
        passages = self.build_passages(course_id, pages, week_number=week_number, topic=topic)
        if not passages:
            raise IngestionError(f"No valid chunks produced for course {course_id}")

        try:
            vectors = self.embedding_provider.embed_many([p.content for p in passages])
        except Exception as e:
            raise IngestionError(f"Failed to embed course material: {e}") from e

        embedded = [
            Passage(
                content=p.content,
                course_id=p.course_id,
                content_type=p.content_type,
                page_number=p.page_number,
                week_number=p.week_number,
                topic=p.topic,
                embedding=tuple(vector),
                metadata=p.metadata,
            )
            for p, vector in zip(passages, vectors)
        ]

        try:
            ids = self.content_store.add_passages(embedded)
        except Exception as e:
            raise IngestionError(f"Failed to store course material: {e}") from e

        self.logger.info(f"[Ingestor] Stored {len(ids)} passages for course {course_id}")
        return ids
