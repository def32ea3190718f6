"""
ChromaDB-backed content store.

Passages live in a single collection configured for cosine distance;
course and content type are stored as metadata and applied as `where`
filters. Scores are 1 - distance, clamped into [0, 1].
"""

import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

import chromadb
from chromadb.config import Settings

from course_assistant.config.constants import ContentType
from course_assistant.models import Passage, RetrievedPassage
from course_assistant.storage.base_store import ContentStoreInterface
from course_assistant.storage.mapping import (
    passage_from_row,
    passage_to_metadata,
    retrieved_passage_from_row,
)
from course_assistant.utils.logger import logger


def _where_clause(course_id: str, content_type: Optional[ContentType]) -> Dict[str, Any]:
    conditions: List[Dict[str, Any]] = [{"course_id": course_id}]
    if content_type is not None:
        conditions.append({"content_type": content_type.value})
    if len(conditions) == 1:
        return conditions[0]
    return {"$and": conditions}


def _row(document: str, metadata: Optional[Dict[str, Any]], row_id: str) -> Dict[str, Any]:
    row: Dict[str, Any] = dict(metadata or {})
    row["content"] = document or ""
    row["id"] = row_id
    return row


class ChromaContentStore(ContentStoreInterface):
    """
    Content store backed by a ChromaDB collection.

    Args:
        collection_name: Name of the collection holding course passages
        persist_directory: On-disk location; None uses an in-process ephemeral client
        client: Pre-built chromadb client (tests)
    """

    def __init__(
        self,
        collection_name: str,
        persist_directory: Optional[Path] = None,
        client: Any = None,
    ):
        self.logger = logger
        self.collection_name = collection_name

        if client is not None:
            self.chroma_client = client
        elif persist_directory is not None:
            Path(persist_directory).mkdir(parents=True, exist_ok=True)
            self.chroma_client = chromadb.PersistentClient(
                path=str(persist_directory),
                settings=Settings(anonymized_telemetry=False, allow_reset=True),
            )
        else:
            self.chroma_client = chromadb.EphemeralClient(
                settings=Settings(anonymized_telemetry=False, allow_reset=True),
            )

        self.collection = self.chroma_client.get_or_create_collection(
            name=collection_name,
            metadata={"hnsw:space": "cosine"},
        )
        self.logger.info(f"[ChromaContentStore] Using collection '{collection_name}'")

    def similarity_search(
        self,
        query_vector: List[float],
        course_id: str,
        content_type: Optional[ContentType],
        limit: int,
    ) -> List[RetrievedPassage]:
        results = self.collection.query(
            query_embeddings=[list(query_vector)],
            n_results=limit,
            where=_where_clause(course_id, content_type),
            include=["metadatas", "documents", "distances"],
        )

        retrieved: List[RetrievedPassage] = []
        if results and results.get("ids") and len(results["ids"][0]) > 0:
            for i in range(len(results["ids"][0])):
                row = _row(
                    results["documents"][0][i] if results.get("documents") else "",
                    results["metadatas"][0][i] if results.get("metadatas") else {},
                    results["ids"][0][i],
                )
                distance = results["distances"][0][i] if results.get("distances") else 1.0
                score = max(0.0, min(1.0, 1.0 - distance))
                retrieved.append(retrieved_passage_from_row(row, score=score, course_id=course_id))

        self.logger.debug(f"[ChromaContentStore] {len(retrieved)} ranked passages for course {course_id}")
        return retrieved

    def scan_filter(
        self,
        course_id: str,
        content_type: Optional[ContentType],
        limit: int,
    ) -> List[Passage]:
        results = self.collection.get(
            where=_where_clause(course_id, content_type),
            limit=limit,
            include=["metadatas", "documents"],
        )

        ids = results.get("ids") or []
        documents = results.get("documents") or [""] * len(ids)
        metadatas = results.get("metadatas") or [{}] * len(ids)
        return [
            passage_from_row(_row(documents[i], metadatas[i], ids[i]), course_id=course_id)
            for i in range(len(ids))
        ]

    def add_passages(self, passages: List[Passage]) -> List[str]:
        if not passages:
            return []

        ids = [p.id or str(uuid.uuid4()) for p in passages]
        self.collection.add(
            ids=ids,
            documents=[p.content for p in passages],
            embeddings=[list(p.embedding) for p in passages],
            metadatas=[passage_to_metadata(p) for p in passages],
        )
        self.logger.info(f"[ChromaContentStore] Added {len(ids)} passages")
        return ids
