"""Tests for EscalationHandler."""

import pytest
from unittest.mock import Mock

from course_assistant.agents.escalation_handler import EscalationHandler
from course_assistant.config.constants import EscalationStatus
from course_assistant.storage.base_store import EscalationStoreInterface
from course_assistant.storage.memory_store import InMemoryEscalationStore
from course_assistant.utils.exceptions import EscalationPersistenceError


def _failing_store(**side_effects) -> Mock:
    store = Mock(spec=EscalationStoreInterface)
    store.insert_escalation.return_value = "0123456789abcdef"
    store.get_profile.return_value = None
    for method, effect in side_effects.items():
        getattr(store, method).side_effect = effect
    return store


def test_create_escalation_inserts_pending_record():
    store = InMemoryEscalationStore()
    handler = EscalationHandler(store)

    result = handler.create_escalation("I am sick", "course-1", "student-1", "ESCALATE")

    saved = store.get_escalation(result.escalation_id)
    assert saved.status == EscalationStatus.PENDING
    assert saved.category == "ESCALATE"
    assert saved.query == "I am sick"
    assert saved.course_id == "course-1"
    assert saved.student_id == "student-1"
    assert saved.created_at is not None


def test_message_embeds_eight_character_reference():
    handler = EscalationHandler(_failing_store())

    result = handler.create_escalation("q", "course-1", "student-1")

    assert result.escalation_id == "0123456789abcdef"
    assert result.message == (
        "Your question has been escalated to the professor for review. "
        "They will respond to you directly. Reference ID: 01234567"
    )


def test_profile_name_is_used_when_present():
    handler = EscalationHandler(InMemoryEscalationStore(profiles={"student-1": {"name": "Ada Lovelace"}}))

    assert handler.create_escalation("q", "course-1", "student-1").student_name == "Ada Lovelace"


@pytest.mark.parametrize(
    "store",
    [
        InMemoryEscalationStore(),
        InMemoryEscalationStore(profiles={"student-1": {"name": None}}),
        _failing_store(get_profile=RuntimeError("profiles table missing")),
    ],
    ids=["no_profile", "blank_name", "lookup_error"],
)
def test_missing_profile_does_not_fail_escalation(store):
    result = EscalationHandler(store).create_escalation("q", "course-1", "student-1")

    assert result.student_name == "Student"
    assert "Reference ID: " in result.message


@pytest.mark.parametrize(
    "error",
    [RuntimeError("insert failed"), EscalationPersistenceError("insert failed")],
    ids=["backend_error", "persistence_error"],
)
def test_persistence_failure_propagates(error):
    handler = EscalationHandler(_failing_store(insert_escalation=error))

    with pytest.raises(EscalationPersistenceError):
        handler.create_escalation("q", "course-1", "student-1")


def test_empty_id_is_a_persistence_failure():
    store = _failing_store()
    store.insert_escalation.return_value = ""

    with pytest.raises(EscalationPersistenceError):
        EscalationHandler(store).create_escalation("q", "course-1", "student-1")


def test_repeated_escalations_are_not_deduplicated():
    store = InMemoryEscalationStore()
    handler = EscalationHandler(store)

    first = handler.create_escalation("same question", "course-1", "student-1")
    second = handler.create_escalation("same question", "course-1", "student-1")

    assert first.escalation_id != second.escalation_id
    assert len(store.escalations) == 2


def test_get_escalation():
    handler = EscalationHandler(InMemoryEscalationStore())
    created = handler.create_escalation("q", "course-1", "student-1", "POLICY")

    assert handler.get_escalation(created.escalation_id).category == "POLICY"
    assert handler.get_escalation("does-not-exist") is None


def test_get_escalation_failure_returns_none():
    handler = EscalationHandler(_failing_store(get_escalation=RuntimeError("network")))

    assert handler.get_escalation("abc") is None
