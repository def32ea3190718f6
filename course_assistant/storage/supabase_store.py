"""
Supabase (PostgREST + pgvector) stores.

- SupabaseContentStore: `match_documents` RPC for similarity search, plain
  table reads for the unranked scan, inserts for ingestion.
- SupabaseEscalationStore: `escalations` and `profiles` tables.
- SupabaseChatLogStore: `chat_logs` table.

All three accept an already-built client; `create_supabase_client` builds
one from configuration.
"""

from typing import Any, Dict, List, Optional

from supabase import Client, create_client

from course_assistant.config.constants import (
    CHAT_LOGS_TABLE,
    COURSE_CONTENT_TABLE,
    ESCALATIONS_TABLE,
    MATCH_DOCUMENTS_RPC,
    MISSING_FUNCTION_ERROR_CODES,
    PROFILES_TABLE,
    ContentType,
)
from course_assistant.config.settings import Config
from course_assistant.models import ChatLogEntry, Escalation, Passage, RetrievedPassage
from course_assistant.storage.base_store import (
    ChatLogStoreInterface,
    ContentStoreInterface,
    EscalationStoreInterface,
)
from course_assistant.storage.mapping import passage_from_row, retrieved_passage_from_row
from course_assistant.utils.exceptions import (
    ConfigurationError,
    EscalationPersistenceError,
    SimilaritySearchUnavailableError,
)
from course_assistant.utils.logger import logger


def create_supabase_client(settings: Config) -> Client:
    if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
        raise ConfigurationError("SUPABASE_URL and SUPABASE_KEY are required for the supabase backend")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


class SupabaseContentStore(ContentStoreInterface):

    def __init__(self, client: Client):
        self.db = client
        self.logger = logger

    def similarity_search(
        self,
        query_vector: List[float],
        course_id: str,
        content_type: Optional[ContentType],
        limit: int,
    ) -> List[RetrievedPassage]:
        params = {
            "query_embedding": list(query_vector),
            "match_count": limit,
            "filter_course_id": course_id,
            "filter_content_type": content_type.value if content_type else None,
        }
        try:
            result = self.db.rpc(MATCH_DOCUMENTS_RPC, params).execute()
        except Exception as e:
            if getattr(e, "code", None) in MISSING_FUNCTION_ERROR_CODES:
                raise SimilaritySearchUnavailableError(
                    f"RPC '{MATCH_DOCUMENTS_RPC}' is not available: {e}"
                ) from e
            raise

        rows = result.data or []
        return [
            retrieved_passage_from_row(row, score=max(0.0, min(1.0, float(row.get("similarity") or 0.0))), course_id=course_id)
            for row in rows
        ]

    def scan_filter(
        self,
        course_id: str,
        content_type: Optional[ContentType],
        limit: int,
    ) -> List[Passage]:
        query = self.db.table(COURSE_CONTENT_TABLE).select("*").eq("course_id", course_id)
        if content_type is not None:
            query = query.eq("content_type", content_type.value)
        result = query.limit(limit).execute()
        return [passage_from_row(row, course_id=course_id) for row in (result.data or [])]

    def add_passages(self, passages: List[Passage]) -> List[str]:
        if not passages:
            return []

        records = [
            {
                "course_id": p.course_id,
                "content": p.content,
                "content_type": p.content_type.value,
                "page_number": p.page_number,
                "week_number": p.week_number,
                "topic": p.topic,
                "embedding": list(p.embedding),
                "metadata": p.metadata,
            }
            for p in passages
        ]
        result = self.db.table(COURSE_CONTENT_TABLE).insert(records).execute()
        ids = [str(row["id"]) for row in (result.data or []) if row.get("id") is not None]
        self.logger.info(f"[SupabaseContentStore] Inserted {len(ids)} passages")
        return ids


class SupabaseEscalationStore(EscalationStoreInterface):

    def __init__(self, client: Client):
        self.db = client
        self.logger = logger

    def insert_escalation(self, escalation: Escalation) -> str:
        try:
            result = self.db.table(ESCALATIONS_TABLE).insert(escalation.to_record()).execute()
        except Exception as e:
            raise EscalationPersistenceError(f"Failed to create escalation: {e}") from e

        if not result.data or not result.data[0].get("id"):
            raise EscalationPersistenceError("Failed to create escalation: no row returned")
        return str(result.data[0]["id"])

    def get_escalation(self, escalation_id: str) -> Optional[Escalation]:
        result = (
            self.db.table(ESCALATIONS_TABLE)
            .select("*")
            .eq("id", escalation_id)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return Escalation.from_record(result.data[0])

    def get_profile(self, student_id: str) -> Optional[Dict[str, Any]]:
        result = (
            self.db.table(PROFILES_TABLE)
            .select("name")
            .eq("id", student_id)
            .limit(1)
            .execute()
        )
        return result.data[0] if result.data else None


class SupabaseChatLogStore(ChatLogStoreInterface):

    def __init__(self, client: Client):
        self.db = client
        self.logger = logger

    def insert_chat_log(self, entry: ChatLogEntry) -> None:
        self.db.table(CHAT_LOGS_TABLE).insert(entry.to_record()).execute()
        self.logger.debug(f"[SupabaseChatLogStore] Logged {entry.route.value} message for course {entry.course_id}")
