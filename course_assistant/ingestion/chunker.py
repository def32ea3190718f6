"""
Course-material chunking and categorisation.

This module implements:
- chunk_text: paragraph-first, sentence-second splitting bounded by a token
  budget (counted with tiktoken), with a token overlap between chunks
- categorize_chunk: policy vs concept tagging by keyword counts
"""

import re
from functools import lru_cache
from typing import List

import tiktoken

from course_assistant.config.constants import (
    INGEST_CONCEPT_KEYWORDS,
    INGEST_POLICY_KEYWORDS,
    ContentType,
)
from course_assistant.utils.helpers import normalize_text


@lru_cache(maxsize=1)
def _get_tokenizer():
    return tiktoken.get_encoding("cl100k_base")  # GPT tokenizer


def count_tokens(text: str) -> int:
    return len(_get_tokenizer().encode(text))


def _overlap_tail(text: str, overlap_tokens: int) -> str:
    if overlap_tokens <= 0:
        return ""
    tokens = _get_tokenizer().encode(text)
    if len(tokens) <= overlap_tokens:
        return text
    return _get_tokenizer().decode(tokens[-overlap_tokens:]).strip()


def _split_oversized(text: str, chunk_size: int) -> List[str]:
    """Split a paragraph that exceeds the budget at sentence, then token, boundaries."""
    pieces: List[str] = []
    current = ""
    for sentence in re.split(r"(?<=[.!?])\s+", text):
        sentence = sentence.strip()
        if not sentence:
            continue
        if count_tokens(sentence) > chunk_size:
            if current:
                pieces.append(current)
                current = ""
            tokens = _get_tokenizer().encode(sentence)
            for start in range(0, len(tokens), chunk_size):
                pieces.append(_get_tokenizer().decode(tokens[start:start + chunk_size]).strip())
            continue
        candidate = f"{current} {sentence}" if current else sentence
        if current and count_tokens(candidate) > chunk_size:
            pieces.append(current)
            current = sentence
        else:
            current = candidate
    if current:
        pieces.append(current)
    return pieces


def chunk_text(text: str, chunk_size: int = 250, chunk_overlap: int = 50) -> List[str]:
    """
    Split text into chunks of at most roughly `chunk_size` tokens.

    Paragraphs (blank-line separated) are packed together while they fit;
    a paragraph larger than the budget is split by sentences. Each new chunk
    starts with the last `chunk_overlap` tokens of the previous one.

    Args:
        text: Raw page text
        chunk_size: Token budget per chunk
        chunk_overlap: Tokens carried over from the previous chunk

    Returns:
        List[str]: Non-empty chunks in document order ([] for blank text)
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    if chunk_overlap >= chunk_size:
        raise ValueError("chunk_overlap must be smaller than chunk_size")

    paragraphs = [normalize_text(p) for p in re.split(r"\n\s*\n+", text or "")]
    paragraphs = [p for p in paragraphs if p]

    units: List[str] = []
    for paragraph in paragraphs:
        if count_tokens(paragraph) > chunk_size:
            units.extend(_split_oversized(paragraph, chunk_size))
        else:
            units.append(paragraph)

    chunks: List[str] = []
    current = ""
    for unit in units:
        candidate = f"{current}\n\n{unit}" if current else unit
        if current and count_tokens(candidate) > chunk_size:
            chunks.append(current)
            tail = _overlap_tail(current, chunk_overlap)
            current = f"{tail} {unit}" if tail else unit
        else:
            current = candidate
    if current.strip():
        chunks.append(current.strip())

    return chunks


def categorize_chunk(text: str) -> ContentType:
    """
    Tag a chunk as policy or concept by counting keyword hits.

    Each keyword counts once. Ties (including no hits) go to policy.
    """
    lower_text = (text or "").lower()
    policy_score = sum(1 for kw in INGEST_POLICY_KEYWORDS if kw in lower_text)
    concept_score = sum(1 for kw in INGEST_CONCEPT_KEYWORDS if kw in lower_text)
    return ContentType.POLICY if policy_score >= concept_score else ContentType.CONCEPT
