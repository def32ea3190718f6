"""
Helper utility functions.

This module contains common utility functions used throughout the application:
- Text normalization and truncation
- Sentence splitting and query term extraction (extractive answering)
- Score aggregation
"""

import re
from typing import List, Sequence


# Words that carry no information for locating an answer in course text.
QUERY_STOPWORDS = {
    "a", "about", "an", "and", "any", "are", "at", "be", "can", "class", "course",
    "could", "do", "does", "for", "from", "have", "how", "i", "in", "is", "it",
    "its", "me", "my", "of", "on", "or", "our", "please", "should", "tell", "that",
    "the", "there", "this", "to", "was", "we", "what", "when", "where", "which",
    "who", "why", "will", "with", "would", "you", "your",
}


def normalize_text(text: str) -> str:
    """
    Normalize text for processing.

    Performs basic text normalization:
    - Removes extra whitespace
    - Normalizes line breaks
    - Trims leading/trailing whitespace

    Args:
        text: Text to normalize

    Returns:
        str: Normalized text

    Example:
        >>> normalize_text("  Hello   world  \\n\\n")
        "Hello world"
    """
    text = re.sub(r'\s+', ' ', text)
    return text.strip()


def truncate_text(text: str, max_chars: int, marker: str = "...") -> str:
    """
    Cut text to max_chars characters and append marker.

    The marker is always appended, so the result is at most
    max_chars + len(marker) characters long.
    """
    return text[:max_chars] + marker


def split_sentences(text: str) -> List[str]:
    """
    Split text into sentences at terminal punctuation and line breaks.

    Args:
        text: Text to split

    Returns:
        List[str]: Non-empty, stripped sentences in document order

    Example:
        >>> split_sentences("Midterm Exam - Week 7. Final in Week 15!")
        ['Midterm Exam - Week 7.', 'Final in Week 15!']
    """
    parts = re.split(r'(?<=[.!?])\s+|\n+', text)
    return [part.strip() for part in parts if part and part.strip()]


def extract_query_terms(query: str) -> List[str]:
    """
    Extract the informative terms of a question, longest first.

    Stopwords and tokens shorter than three characters are dropped.
    Duplicates are removed while preserving the first occurrence.
    """
    tokens = re.findall(r"[a-z0-9']+", query.lower())
    seen = set()
    terms: List[str] = []
    for token in tokens:
        token = token.strip("'")
        if len(token) < 3 or token in QUERY_STOPWORDS or token in seen:
            continue
        seen.add(token)
        terms.append(token)
    # Stable sort keeps query order among equal lengths
    return sorted(terms, key=len, reverse=True)


def mean_score(scores: Sequence[float]) -> float:
    """Arithmetic mean of scores; 0.0 for an empty sequence."""
    if not scores:
        return 0.0
    return sum(scores) / len(scores)
