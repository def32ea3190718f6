"""
AnswerPipeline implementation.

This component wires the answering chain together:

1. Classify the question with the QueryRouter
2. ESCALATE -> create an escalation and return its confirmation message
3. POLICY / CONCEPT -> ask the matching agent; if it signals escalation,
   record an escalation (keeping the agent's message for the student)
4. Record the exchange in the chat log, when one is configured

Only EscalationPersistenceError propagates to the caller.
"""

from __future__ import annotations

from typing import Optional

from course_assistant.agents.base_agent import AnsweringAgent
from course_assistant.agents.escalation_handler import EscalationHandler
from course_assistant.agents.router_agent import QueryRouter
from course_assistant.config.constants import Route
from course_assistant.models import AgentResponse, ChatLogEntry
from course_assistant.storage.base_store import ChatLogStoreInterface
from course_assistant.utils.logger import logger


class AnswerPipeline:
    """
    High-level orchestration of router, agents and escalation handler.
    """

    def __init__(
        self,
        router: QueryRouter,
        policy_agent: AnsweringAgent,
        concept_agent: AnsweringAgent,
        escalation_handler: EscalationHandler,
        chat_log_store: Optional[ChatLogStoreInterface] = None,
    ) -> None:
        self.logger = logger
        self.router = router
        self.agents = {
            Route.POLICY: policy_agent,
            Route.CONCEPT: concept_agent,
        }
        self.escalation_handler = escalation_handler
        self.chat_log_store = chat_log_store

    def handle_question(self, query: str, course_id: str, student_id: str) -> AgentResponse:
        """
        Execute the full chain for one question.

        Returns:
            AgentResponse: answer or escalation notice, with route and
            escalation_id filled in

        Raises:
            ValueError: On an empty query, course id or student id
            EscalationPersistenceError: If an escalation could not be saved
        """
        if not isinstance(query, str) or not query.strip():
            raise ValueError("Query must be a non-empty string")
        if not course_id or not student_id:
            raise ValueError("course_id and student_id are required")

        self.logger.info(f"[AnswerPipeline] Received question for course {course_id}")

        decision = self.router.classify(query)

        if decision.route == Route.ESCALATE:
            escalation = self.escalation_handler.create_escalation(
                query, course_id, student_id, decision.route.value
            )
            response = AgentResponse(
                response=escalation.message,
                citations=[],
                confidence=0.0,
                should_escalate=True,
                escalation_id=escalation.escalation_id,
            )
        else:
            response = self.agents[decision.route].answer(query, course_id)
            if response.should_escalate:
                escalation = self.escalation_handler.create_escalation(
                    query, course_id, student_id, decision.route.value
                )
                response.escalation_id = escalation.escalation_id

        response.route = decision.route
        self._log_conversation(query, course_id, student_id, response)
        return response

    def _log_conversation(
        self,
        query: str,
        course_id: str,
        student_id: str,
        response: AgentResponse,
    ) -> None:
        if self.chat_log_store is None:
            return

        entry = ChatLogEntry(
            course_id=course_id,
            student_id=student_id,
            message=query,
            response=response.response,
            route=response.route,
            citations=response.citations,
            escalation_id=response.escalation_id,
        )
        try:
            self.chat_log_store.insert_chat_log(entry)
        except Exception as e:
            self.logger.error(f"[AnswerPipeline] Error logging conversation: {e}")
