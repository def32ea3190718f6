"""
Answer synthesizers.

An answering agent hands its retrieved passages to a synthesizer, which turns
them into answer text:

- CompletionSynthesizer: prompts the completion provider with the combined
  context and the question.
- ExtractiveSynthesizer: no model call; returns the first sentence of the
  retrieved passages that contains one of the question's terms. Used in
  offline mode and in tests so the retrieval, confidence and escalation
  logic can be checked without generation.
"""

import re
from abc import ABC, abstractmethod
from typing import List

from course_assistant.config.constants import EXTRACTIVE_NOT_FOUND_ANSWER
from course_assistant.models import RetrievedPassage
from course_assistant.providers.base_provider import CompletionProviderInterface
from course_assistant.retrieval.citations import combine_passages_into_context
from course_assistant.utils.helpers import extract_query_terms, split_sentences


class AnswerSynthesizerInterface(ABC):

    @abstractmethod
    def synthesize(self, query: str, passages: List[RetrievedPassage], system_prompt: str) -> str:
        """
        Produce answer text from the passages.

        Raises:
            GenerationError: If the underlying provider fails
        """
        pass


class CompletionSynthesizer(AnswerSynthesizerInterface):

    def __init__(self, completion_provider: CompletionProviderInterface) -> None:
        self.completion_provider = completion_provider

    def synthesize(self, query: str, passages: List[RetrievedPassage], system_prompt: str) -> str:
        context = combine_passages_into_context(passages)
        prompt = (
            "Use the following context from the course materials to answer the question. "
            "Always cite your sources using page numbers or week numbers when available.\n\n"
            "Context:\n"
            f"{context}\n\n"
            f"Question: {query}\n\n"
            "Answer using ONLY the context above. If the information is not in the context, "
            "respond with \"I don't know\" and escalate to the professor."
        )
        result = self.completion_provider.complete(prompt=prompt, system_prompt=system_prompt)
        return result.text


class ExtractiveSynthesizer(AnswerSynthesizerInterface):
    """
    Keyword extraction over the retrieved passages.

    Query terms are tried longest first; for each term the passages are
    scanned sentence by sentence in retrieval order and the first sentence
    containing the term as a whole word is returned. When no term occurs the fixed
    "I don't know" answer is returned, which the agent treats as a refusal.
    """

    def synthesize(self, query: str, passages: List[RetrievedPassage], system_prompt: str) -> str:
        sentences: List[str] = []
        for rp in passages:
            sentences.extend(split_sentences(rp.passage.content))

        for term in extract_query_terms(query):
            pattern = re.compile(rf"\b{re.escape(term)}\b")
            for sentence in sentences:
                if pattern.search(sentence.lower()):
                    return sentence

        return EXTRACTIVE_NOT_FOUND_ANSWER
