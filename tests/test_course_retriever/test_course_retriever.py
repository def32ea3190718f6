"""Tests for CourseRetriever."""

import pytest
from unittest.mock import Mock

from course_assistant.config.constants import ContentType
from course_assistant.models import Passage
from course_assistant.providers.base_provider import EmbeddingProviderInterface
from course_assistant.retrieval.course_retriever import CourseRetriever
from course_assistant.storage.base_store import ContentStoreInterface
from course_assistant.storage.memory_store import InMemoryContentStore
from course_assistant.utils.exceptions import RetrievalError, SimilaritySearchUnavailableError
from tests.test_course_retriever.data import QUERY_VECTOR, STORED_PASSAGES, THRESHOLD_CASES


def _embedding_provider(vector=None, error=None) -> Mock:
    provider = Mock(spec=EmbeddingProviderInterface)
    if error is not None:
        provider.embed.side_effect = error
    else:
        provider.embed.return_value = list(vector or QUERY_VECTOR)
    return provider


def _store(similarity_search_enabled: bool = True, course_id: str = "course-1") -> InMemoryContentStore:
    return InMemoryContentStore(
        passages=[
            Passage(
                content=item["content"],
                course_id=course_id,
                content_type=item["content_type"],
                embedding=item["embedding"],
            )
            for item in STORED_PASSAGES
        ],
        similarity_search_enabled=similarity_search_enabled,
    )


@pytest.mark.parametrize(
    "score_threshold, content_type, expected",
    THRESHOLD_CASES,
    ids=lambda v: v.value if isinstance(v, ContentType) else str(v),
)
def test_threshold_and_content_type_filtering(score_threshold, content_type, expected):
    retriever = CourseRetriever(_embedding_provider(), _store())

    results = retriever.retrieve(
        "when is the exam",
        "course-1",
        content_type=content_type,
        limit=5,
        score_threshold=score_threshold,
    )

    assert [r.passage.content for r in results] == expected
    if score_threshold is not None:
        assert all(r.score >= score_threshold for r in results)
    assert [r.score for r in results] == sorted((r.score for r in results), reverse=True)


def test_limit_caps_results_and_requests_twice_as_many_candidates():
    store = Mock(spec=ContentStoreInterface)
    store.similarity_search.return_value = []
    retriever = CourseRetriever(_embedding_provider(), store)

    retriever.retrieve("question", "course-1", content_type=ContentType.POLICY, limit=3)

    store.similarity_search.assert_called_once_with(QUERY_VECTOR, "course-1", ContentType.POLICY, 6)


def test_results_are_sliced_to_limit():
    retriever = CourseRetriever(_embedding_provider(), _store())

    results = retriever.retrieve("question", "course-1", limit=2)

    assert [r.passage.content for r in results] == ["Exam schedule passage", "Grading passage"]


def test_other_course_passages_are_never_returned():
    retriever = CourseRetriever(_embedding_provider(), _store(course_id="course-2"))

    assert retriever.retrieve("question", "course-1") == []


def test_empty_store_returns_empty_list():
    retriever = CourseRetriever(_embedding_provider(), InMemoryContentStore())

    assert retriever.retrieve("question", "course-1", score_threshold=0.7) == []


def test_unavailable_similarity_search_falls_back_to_unranked_scan():
    retriever = CourseRetriever(_embedding_provider(), _store(similarity_search_enabled=False))

    results = retriever.retrieve("question", "course-1", content_type=ContentType.POLICY, limit=2)

    assert len(results) == 2
    assert all(r.score == 0.5 for r in results)
    assert all(r.passage.content_type == ContentType.POLICY for r in results)


def test_unranked_scan_results_respect_threshold():
    retriever = CourseRetriever(_embedding_provider(), _store(similarity_search_enabled=False))

    assert retriever.retrieve("question", "course-1", score_threshold=0.7) == []
    assert len(retriever.retrieve("question", "course-1", score_threshold=0.5)) == 4


def test_scan_uses_limit_not_candidate_count():
    store = Mock(spec=ContentStoreInterface)
    store.similarity_search.side_effect = SimilaritySearchUnavailableError("missing rpc")
    store.scan_filter.return_value = []
    retriever = CourseRetriever(_embedding_provider(), store)

    retriever.retrieve("question", "course-1", content_type=ContentType.CONCEPT, limit=5)

    store.scan_filter.assert_called_once_with("course-1", ContentType.CONCEPT, 5)


def test_store_failure_raises_retrieval_error():
    store = Mock(spec=ContentStoreInterface)
    store.similarity_search.side_effect = RuntimeError("connection refused")
    retriever = CourseRetriever(_embedding_provider(), store)

    with pytest.raises(RetrievalError):
        retriever.retrieve("question", "course-1")
    store.scan_filter.assert_not_called()


def test_scan_failure_raises_retrieval_error():
    store = Mock(spec=ContentStoreInterface)
    store.similarity_search.side_effect = SimilaritySearchUnavailableError("missing rpc")
    store.scan_filter.side_effect = RuntimeError("table missing")
    retriever = CourseRetriever(_embedding_provider(), store)

    with pytest.raises(RetrievalError):
        retriever.retrieve("question", "course-1")


def test_embedding_failure_raises_retrieval_error():
    retriever = CourseRetriever(_embedding_provider(error=TimeoutError("timed out")), _store())

    with pytest.raises(RetrievalError):
        retriever.retrieve("question", "course-1")


def test_empty_query_is_rejected():
    retriever = CourseRetriever(_embedding_provider(), _store())

    with pytest.raises(ValueError):
        retriever.retrieve("   ", "course-1")


def test_unranked_mode_scans_without_embedding():
    provider = _embedding_provider()
    store = Mock(spec=ContentStoreInterface)
    store.scan_filter.return_value = [
        Passage(content="Exam schedule passage", course_id="course-1", content_type=ContentType.POLICY)
    ]
    retriever = CourseRetriever(provider, store, rank_by_similarity=False)

    results = retriever.retrieve("question", "course-1", content_type=ContentType.POLICY, limit=3, score_threshold=0.5)

    assert [(r.passage.content, r.score) for r in results] == [("Exam schedule passage", 0.5)]
    store.scan_filter.assert_called_once_with("course-1", ContentType.POLICY, 3)
    store.similarity_search.assert_not_called()
    provider.embed.assert_not_called()
