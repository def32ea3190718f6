"""
Base answering agent.

Policy and concept agents share one algorithm and differ only in the content
type they retrieve, their instructions and their "no information" message:

1. Retrieve up to `limit` passages of the agent's content type, keeping only
   those scoring at least `score_threshold`.
2. No passages -> escalate with confidence 0.0.
3. Mean score below the threshold -> escalate with confidence = mean score.
4. Synthesize an answer from the passages.
5. Refusal markers in the answer -> escalate with confidence = mean score.
6. Otherwise return the answer with citations and confidence = mean score.

Any exception along the way is logged and turned into an escalation with
confidence 0.0; answer() never raises.
"""

from __future__ import annotations

from typing import List

from course_assistant.config.constants import (
    ERROR_MESSAGE,
    NOT_CONFIDENT_MESSAGE,
    REFUSAL_MARKERS,
    ContentType,
)
from course_assistant.agents.synthesizers import AnswerSynthesizerInterface
from course_assistant.models import AgentResponse, RetrievedPassage
from course_assistant.retrieval.base_retriever import RetrieverInterface
from course_assistant.retrieval.citations import build_citations
from course_assistant.utils.helpers import mean_score
from course_assistant.utils.logger import logger


def contains_refusal(text: str) -> bool:
    lower_text = (text or "").lower()
    return any(marker in lower_text for marker in REFUSAL_MARKERS)


class AnsweringAgent:
    """
    Abstract base class for answering agents.

    Subclasses set:
    - agent_name: used in log lines
    - content_type: the passage category the agent retrieves
    - system_prompt: instructions for the completion provider
    - no_information_message: returned when nothing usable was retrieved
    """

    agent_name: str = "AnsweringAgent"
    content_type: ContentType
    system_prompt: str = ""
    no_information_message: str = ""

    def __init__(
        self,
        retriever: RetrieverInterface,
        synthesizer: AnswerSynthesizerInterface,
        score_threshold: float = 0.7,
        limit: int = 5,
    ) -> None:
        self.retriever = retriever
        self.synthesizer = synthesizer
        self.score_threshold = score_threshold
        self.limit = limit
        self.logger = logger

    def answer(self, query: str, course_id: str) -> AgentResponse:
        self.logger.info(f"[{self.agent_name}] Handling query for course {course_id}")

        try:
            passages = self.retriever.retrieve(
                query,
                course_id,
                content_type=self.content_type,
                limit=self.limit,
                score_threshold=self.score_threshold,
            )

            if not passages:
                self.logger.info(f"[{self.agent_name}] No passages retrieved; escalating")
                return self._escalate(self.no_information_message, 0.0)

            avg_score = mean_score([p.score for p in passages])
            if avg_score < self.score_threshold:
                self.logger.info(
                    f"[{self.agent_name}] Average score {avg_score:.3f} below "
                    f"threshold {self.score_threshold}; escalating"
                )
                return self._escalate(NOT_CONFIDENT_MESSAGE, avg_score)

            answer_text = self.synthesizer.synthesize(query, passages, self.system_prompt)

            if contains_refusal(answer_text):
                self.logger.info(f"[{self.agent_name}] Generated answer is a refusal; escalating")
                return self._escalate(self.no_information_message, avg_score)

            return self._answered(answer_text, passages, avg_score)

        except Exception as e:
            self.logger.error(f"[{self.agent_name}] Error processing query: {e}", exc_info=True)
            return self._escalate(ERROR_MESSAGE, 0.0)

    def _escalate(self, message: str, confidence: float) -> AgentResponse:
        return AgentResponse(
            response=message,
            citations=[],
            confidence=confidence,
            should_escalate=True,
        )

    def _answered(self, text: str, passages: List[RetrievedPassage], confidence: float) -> AgentResponse:
        return AgentResponse(
            response=text,
            citations=build_citations(passages),
            confidence=confidence,
            should_escalate=False,
        )
