"""
EscalationHandler implementation.

Creates escalation records for instructor review: questions routed to
ESCALATE directly and questions an answering agent could not answer.
A failure to save the record is the one error that reaches the caller.
"""

from __future__ import annotations

from typing import Optional

from course_assistant.config.constants import (
    DEFAULT_STUDENT_NAME,
    ESCALATION_REFERENCE_LENGTH,
    EscalationStatus,
)
from course_assistant.models import Escalation, EscalationResult
from course_assistant.storage.base_store import EscalationStoreInterface
from course_assistant.utils.exceptions import EscalationPersistenceError
from course_assistant.utils.logger import logger


def escalation_message(escalation_id: str) -> str:
    return (
        "Your question has been escalated to the professor for review. "
        "They will respond to you directly. "
        f"Reference ID: {escalation_id[:ESCALATION_REFERENCE_LENGTH]}"
    )


class EscalationHandler:

    def __init__(self, store: EscalationStoreInterface) -> None:
        self.store = store
        self.logger = logger

    def create_escalation(
        self,
        query: str,
        course_id: str,
        student_id: str,
        category: Optional[str] = None,
    ) -> EscalationResult:
        """
        Insert a pending escalation and build the confirmation message.

        No de-duplication: the same question may be escalated any number of
        times.

        Args:
            query: The student's question, verbatim
            course_id: Course the question was asked in
            student_id: Student who asked
            category: Route that produced the escalation (POLICY/CONCEPT/ESCALATE)

        Returns:
            EscalationResult: id, confirmation message with an 8-character
            reference and the student's display name

        Raises:
            EscalationPersistenceError: If the record could not be saved
        """
        record = Escalation(
            course_id=course_id,
            student_id=student_id,
            query=query,
            category=category,
            status=EscalationStatus.PENDING,
        )

        try:
            escalation_id = self.store.insert_escalation(record)
        except EscalationPersistenceError:
            self.logger.error("[EscalationHandler] Failed to save escalation", exc_info=True)
            raise
        except Exception as e:
            self.logger.error(f"[EscalationHandler] Failed to save escalation: {e}", exc_info=True)
            raise EscalationPersistenceError(f"Failed to create escalation: {e}") from e

        if not escalation_id:
            raise EscalationPersistenceError("Failed to create escalation: no id returned")

        student_name = self._student_name(student_id)
        self.logger.info(
            f"[EscalationHandler] Created escalation {escalation_id} "
            f"(course={course_id}, category={category})"
        )
        return EscalationResult(
            escalation_id=escalation_id,
            message=escalation_message(escalation_id),
            student_name=student_name,
        )

    def get_escalation(self, escalation_id: str) -> Optional[Escalation]:
        try:
            return self.store.get_escalation(escalation_id)
        except Exception as e:
            self.logger.error(f"[EscalationHandler] Error fetching escalation {escalation_id}: {e}")
            return None

    def _student_name(self, student_id: str) -> str:
        try:
            profile = self.store.get_profile(student_id)
        except Exception as e:
            self.logger.warning(f"[EscalationHandler] Profile lookup failed for {student_id}: {e}")
            return DEFAULT_STUDENT_NAME
        if not profile:
            return DEFAULT_STUDENT_NAME
        return profile.get("name") or DEFAULT_STUDENT_NAME
