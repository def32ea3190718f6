"""
PDF loading for course-material ingestion.

Only extracts per-page text; structure and metadata come from the caller
(week number, topic).
"""

from pathlib import Path
from typing import List

from pypdf import PdfReader

from course_assistant.ingestion.ingest import PageText
from course_assistant.utils.exceptions import IngestionError
from course_assistant.utils.logger import logger


def load_pdf_pages(file_path: Path) -> List[PageText]:
    """
    Read a PDF and return one PageText per page (1-based page numbers).

    Raises:
        IngestionError: If the file is missing or cannot be parsed
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise IngestionError(f"PDF file not found: {file_path}")

    try:
        reader = PdfReader(str(file_path))
        pages = [
            PageText(text=page.extract_text() or "", page_number=page_num)
            for page_num, page in enumerate(reader.pages, start=1)
        ]
    except Exception as e:
        raise IngestionError(f"Failed to parse PDF {file_path}: {e}") from e

    logger.info(f"Extracted text from {len(pages)} pages of {file_path.name}")
    return pages
