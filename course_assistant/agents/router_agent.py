"""
QueryRouter implementation.

Responsibilities:
- Classify an incoming question into POLICY, CONCEPT or ESCALATE.
- Use a "model as a function" for classification when a completion provider
  is configured, with a deterministic keyword-based fallback.
- Never raise on a classification failure: the keyword strategy always
  produces a decision.

Note:
The QueryRouter does not answer questions. AnswerPipeline uses the decision
to pick the answering agent or to escalate directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from course_assistant.config.constants import (
    CLASSIFICATION_SYSTEM_PROMPT,
    CONCEPT_KEYWORDS,
    DEFAULT_ROUTE_CONFIDENCE,
    ESCALATE_KEYWORDS,
    KEYWORD_ESCALATE_CONFIDENCE,
    KEYWORD_MATCH_CONFIDENCE,
    MODEL_EXACT_CONFIDENCE,
    MODEL_PARTIAL_CONFIDENCE,
    POLICY_KEYWORDS,
    Route,
)
from course_assistant.models import RoutingDecision
from course_assistant.providers.base_provider import CompletionProviderInterface
from course_assistant.utils.exceptions import ClassificationError
from course_assistant.utils.logger import logger


class ClassificationStrategy(ABC):

    @abstractmethod
    def classify(self, query: str) -> RoutingDecision:
        pass


class KeywordClassificationStrategy(ClassificationStrategy):
    """
    Deterministic keyword classification.

    Lists are checked escalate -> policy -> concept, so a personal or
    emergency phrase wins over any policy keyword in the same question.
    """

    def classify(self, query: str) -> RoutingDecision:
        q = (query or "").lower()

        matched = next((kw for kw in ESCALATE_KEYWORDS if kw in q), None)
        if matched:
            return RoutingDecision(
                route=Route.ESCALATE,
                confidence=KEYWORD_ESCALATE_CONFIDENCE,
                reason=f"Escalate keyword matched: '{matched}'",
            )

        matched = next((kw for kw in POLICY_KEYWORDS if kw in q), None)
        if matched:
            return RoutingDecision(
                route=Route.POLICY,
                confidence=KEYWORD_MATCH_CONFIDENCE,
                reason=f"Policy keyword matched: '{matched}'",
            )

        matched = next((kw for kw in CONCEPT_KEYWORDS if kw in q), None)
        if matched:
            return RoutingDecision(
                route=Route.CONCEPT,
                confidence=KEYWORD_MATCH_CONFIDENCE,
                reason=f"Concept keyword matched: '{matched}'",
            )

        return RoutingDecision(
            route=Route.POLICY,
            confidence=DEFAULT_ROUTE_CONFIDENCE,
            reason="No keyword matched; defaulting to POLICY",
        )


class ModelClassificationStrategy(ClassificationStrategy):
    """
    Ask the completion provider for a single category token.

    The response is upper-cased and searched for POLICY, CONCEPT and
    ESCALATE in that order. Confidence is 0.9 when the response is exactly
    the token and 0.7 when the token is embedded in other text. Unparseable
    output routes to POLICY with the default confidence.
    """

    def __init__(self, completion_provider: CompletionProviderInterface) -> None:
        self.completion_provider = completion_provider
        self.logger = logger

    def classify(self, query: str) -> RoutingDecision:
        prompt = (
            f'Query: "{query}"\n\n'
            "Respond with ONLY the category name (POLICY, CONCEPT, or ESCALATE):"
        )

        try:
            result = self.completion_provider.complete(
                prompt=prompt,
                system_prompt=CLASSIFICATION_SYSTEM_PROMPT,
            )
        except Exception as e:
            raise ClassificationError(f"Model classification failed: {e}") from e

        category_text = (result.text or "").strip().upper()
        for route in (Route.POLICY, Route.CONCEPT, Route.ESCALATE):
            if route.value in category_text:
                confidence = MODEL_EXACT_CONFIDENCE if category_text == route.value else MODEL_PARTIAL_CONFIDENCE
                return RoutingDecision(
                    route=route,
                    confidence=confidence,
                    reason=f"Model classified as {route.value}",
                )

        self.logger.warning(
            f"[QueryRouter] Failed to parse classification {result.text!r}; defaulting to POLICY"
        )
        return RoutingDecision(
            route=Route.POLICY,
            confidence=DEFAULT_ROUTE_CONFIDENCE,
            reason=f"Unparseable model output {result.text!r}; defaulting to POLICY",
        )


class QueryRouter:
    """
    Router for student questions.

    Args:
        strategy: Primary classification strategy
        fallback: Strategy used when the primary one fails (keywords by default)
    """

    def __init__(
        self,
        strategy: Optional[ClassificationStrategy] = None,
        fallback: Optional[ClassificationStrategy] = None,
    ) -> None:
        self.fallback = fallback or KeywordClassificationStrategy()
        self.strategy = strategy or self.fallback
        self.logger = logger

    @classmethod
    def with_model(cls, completion_provider: CompletionProviderInterface) -> "QueryRouter":
        return cls(strategy=ModelClassificationStrategy(completion_provider))

    def classify(self, query: str) -> RoutingDecision:
        """
        Classify a question.

        Returns:
            RoutingDecision: route, confidence in [0, 1] and a short reason
        """
        try:
            decision = self.strategy.classify(query)
        except ClassificationError as e:
            self.logger.warning(f"[QueryRouter] {e}; falling back to keyword classification.")
            decision = self.fallback.classify(query)

        self.logger.info(
            f"[QueryRouter] Routed query to {decision.route.value} "
            f"(confidence={decision.confidence:.2f}, reason={decision.reason})"
        )
        return decision
