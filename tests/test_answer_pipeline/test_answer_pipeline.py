"""End-to-end tests for AnswerPipeline on the offline context."""

import pytest
from unittest.mock import Mock

from course_assistant.agents.context import AssistantContext, build_context
from course_assistant.config.constants import POLICY_NO_INFORMATION_MESSAGE, Route
from course_assistant.helpers.demo_data import DEMO_COURSE_ID
from course_assistant.providers.base_provider import EmbeddingProviderInterface
from course_assistant.providers.deterministic_provider import DeterministicCompletionProvider
from course_assistant.storage.base_store import ChatLogStoreInterface, EscalationStoreInterface
from course_assistant.storage.memory_store import InMemoryChatLogStore, InMemoryContentStore, InMemoryEscalationStore
from course_assistant.utils.exceptions import EscalationPersistenceError
from tests.test_answer_pipeline.data import ANSWERED_CASES, ESCALATED_CASES


@pytest.mark.parametrize("query, expected_route", ESCALATED_CASES, ids=lambda v: str(v)[:30])
def test_personal_questions_are_escalated_directly(context: AssistantContext, query, expected_route):
    response = context.pipeline.handle_question(query, "course-1", "student-1")

    assert response.route == expected_route
    assert response.should_escalate
    assert response.confidence == 0.0
    assert response.citations == []
    assert response.response.startswith("Your question has been escalated to the professor")
    assert response.response.endswith(response.escalation_id[:8])

    saved = context.escalation_store.get_escalation(response.escalation_id)
    assert saved.category == "ESCALATE"
    assert saved.query == query


def test_escalation_is_logged(context: AssistantContext):
    response = context.pipeline.handle_question("I am sick and need an extension", "course-1", "student-1")

    (entry,) = context.chat_log_store.entries
    assert entry.message == "I am sick and need an extension"
    assert entry.route == Route.ESCALATE
    assert entry.escalation_id == response.escalation_id
    assert entry.response == response.response


def test_unanswerable_question_escalates_with_route_category(context: AssistantContext):
    response = context.pipeline.handle_question("When is the midterm exam?", "course-1", "student-1")

    assert response.route == Route.POLICY
    assert response.should_escalate
    assert response.response == POLICY_NO_INFORMATION_MESSAGE
    assert response.escalation_id is not None
    assert context.escalation_store.get_escalation(response.escalation_id).category == "POLICY"


@pytest.mark.parametrize("query, expected_route, expected_fragment", ANSWERED_CASES, ids=lambda v: str(v)[:30])
def test_demo_course_questions_are_answered(demo_context: AssistantContext, query, expected_route, expected_fragment):
    response = demo_context.pipeline.handle_question(query, DEMO_COURSE_ID, "student-1")

    assert response.route == expected_route
    assert not response.should_escalate
    assert response.escalation_id is None
    assert expected_fragment in response.response
    assert response.confidence == pytest.approx(0.5)
    assert response.citations
    assert demo_context.escalation_store.escalations == {}


def test_demo_midterm_answer_cites_policy_passages(demo_context: AssistantContext):
    response = demo_context.pipeline.handle_question("When is the midterm exam?", DEMO_COURSE_ID, "student-1")

    assert len(response.citations) == 4
    assert response.citations[0].page == 2
    assert all(c.source.startswith("Syllabus") for c in response.citations)


def test_other_course_content_is_not_used(demo_context: AssistantContext):
    response = demo_context.pipeline.handle_question("When is the midterm exam?", "another-course", "student-1")

    assert response.should_escalate
    assert response.response == POLICY_NO_INFORMATION_MESSAGE


@pytest.mark.parametrize(
    "query, course_id, student_id",
    [("", "course-1", "student-1"), ("   ", "course-1", "student-1"), ("q?", "", "student-1"), ("q?", "course-1", "")],
    ids=["empty_query", "blank_query", "no_course", "no_student"],
)
def test_invalid_input_is_rejected(context: AssistantContext, query, course_id, student_id):
    with pytest.raises(ValueError):
        context.pipeline.handle_question(query, course_id, student_id)


def test_escalation_persistence_failure_propagates(context: AssistantContext):
    store = Mock(spec=EscalationStoreInterface)
    store.get_profile.return_value = None
    store.insert_escalation.side_effect = RuntimeError("database unavailable")
    context.escalation_handler.store = store

    with pytest.raises(EscalationPersistenceError):
        context.pipeline.handle_question("I have a family emergency", "course-1", "student-1")


def test_chat_log_failure_does_not_fail_the_request(context: AssistantContext):
    chat_log_store = Mock(spec=ChatLogStoreInterface)
    chat_log_store.insert_chat_log.side_effect = RuntimeError("chat_logs table missing")
    context.pipeline.chat_log_store = chat_log_store

    response = context.pipeline.handle_question("I am sick", "course-1", "student-1")

    assert response.should_escalate
    chat_log_store.insert_chat_log.assert_called_once()


def test_offline_context_scans_instead_of_ranking(demo_context: AssistantContext):
    assert demo_context.content_store.similarity_search_enabled
    assert not demo_context.retriever.rank_by_similarity

    response = demo_context.pipeline.handle_question("When is the midterm exam?", DEMO_COURSE_ID, "student-1")

    assert not response.should_escalate
    assert "November 18" in response.response


def test_live_embeddings_rank_by_similarity():
    embedding_provider = Mock(spec=EmbeddingProviderInterface)
    embedding_provider.is_deterministic = False

    context = build_context(
        embedding_provider=embedding_provider,
        completion_provider=DeterministicCompletionProvider(),
        content_store=InMemoryContentStore(),
        escalation_store=InMemoryEscalationStore(),
        chat_log_store=InMemoryChatLogStore(),
    )

    assert context.retriever.rank_by_similarity
