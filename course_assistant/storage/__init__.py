"""
Storage backends.

Chroma and Supabase backends are imported from their own modules so that
offline use does not need their clients configured.
"""

from course_assistant.storage.base_store import (
    ChatLogStoreInterface,
    ContentStoreInterface,
    EscalationStoreInterface,
)
from course_assistant.storage.mapping import passage_from_row, retrieved_passage_from_row
from course_assistant.storage.memory_store import (
    InMemoryChatLogStore,
    InMemoryContentStore,
    InMemoryEscalationStore,
)

__all__ = [
    "ChatLogStoreInterface",
    "ContentStoreInterface",
    "EscalationStoreInterface",
    "passage_from_row",
    "retrieved_passage_from_row",
    "InMemoryChatLogStore",
    "InMemoryContentStore",
    "InMemoryEscalationStore",
]
