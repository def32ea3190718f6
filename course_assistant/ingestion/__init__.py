from course_assistant.ingestion.chunker import categorize_chunk, chunk_text, count_tokens
from course_assistant.ingestion.ingest import CourseContentIngestor, PageText

__all__ = [
    "categorize_chunk",
    "chunk_text",
    "count_tokens",
    "CourseContentIngestor",
    "PageText",
]
