"""
Pytest configuration and shared fixtures for tests.

Every fixture uses the deterministic providers and in-memory stores, so no
test needs network access or credentials.
"""

import pytest
from typing import Callable, Generator, List, Optional, Tuple
from logging import Logger

from course_assistant.agents.context import AssistantContext
from course_assistant.config.constants import ContentType
from course_assistant.helpers.assistant_helper import init
from course_assistant.models import Passage, RetrievedPassage
from course_assistant.providers.deterministic_provider import (
    DeterministicCompletionProvider,
    HashingEmbeddingProvider,
)
from course_assistant.retrieval.base_retriever import RetrieverInterface
from course_assistant.storage.memory_store import (
    InMemoryChatLogStore,
    InMemoryContentStore,
    InMemoryEscalationStore,
)


class StubRetriever(RetrieverInterface):
    """Returns a fixed result list and records the calls it received."""

    def __init__(self, results: Optional[List[RetrievedPassage]] = None, error: Optional[Exception] = None):
        self.results = results or []
        self.error = error
        self.calls = []

    def retrieve(self, query, course_id, content_type=None, limit=5, score_threshold=None):
        self.calls.append(
            {
                "query": query,
                "course_id": course_id,
                "content_type": content_type,
                "limit": limit,
                "score_threshold": score_threshold,
            }
        )
        if self.error is not None:
            raise self.error
        return list(self.results)


def _build_context(load_demo: bool) -> Tuple[Logger, AssistantContext]:
    return init(
        load_demo=load_demo,
        embedding_provider=HashingEmbeddingProvider(),
        completion_provider=DeterministicCompletionProvider(),
        content_store=InMemoryContentStore(),
        escalation_store=InMemoryEscalationStore(profiles={"student-1": {"name": "Ada Lovelace"}}),
        chat_log_store=InMemoryChatLogStore(),
    )


@pytest.fixture(scope="session")
def logger() -> Generator[Logger, None, None]:
    """
    Pytest fixture that provides the logger instance.

    Usage:
        def test_something(logger):
            logger.info("Test log message")
    """
    from course_assistant.utils.logger import logger as app_logger
    yield app_logger


@pytest.fixture
def context() -> Generator[AssistantContext, None, None]:
    """
    Fresh offline AssistantContext with an empty content store.

    Function-scoped: stores are mutable, so each test gets its own.
    """
    _, assistant_context = _build_context(load_demo=False)
    yield assistant_context


@pytest.fixture
def demo_context() -> Generator[AssistantContext, None, None]:
    """
    Offline AssistantContext seeded with the demo course.

    The store has similarity search enabled; the deterministic embeddings
    make the retriever use the unranked course scan, where every passage
    scores exactly the offline threshold (0.5).
    """
    _, assistant_context = _build_context(load_demo=True)
    yield assistant_context


@pytest.fixture
def make_passage() -> Callable[..., RetrievedPassage]:
    """Factory for RetrievedPassage objects."""

    def _make(
        content: str,
        score: float,
        content_type: ContentType = ContentType.POLICY,
        course_id: str = "course-1",
        page_number: Optional[int] = None,
        week_number: Optional[int] = None,
        topic: Optional[str] = None,
    ) -> RetrievedPassage:
        return RetrievedPassage(
            passage=Passage(
                content=content,
                course_id=course_id,
                content_type=content_type,
                page_number=page_number,
                week_number=week_number,
                topic=topic,
            ),
            score=score,
        )

    return _make


@pytest.fixture
def stub_retriever() -> Callable[..., StubRetriever]:
    """Factory for StubRetriever instances."""
    return StubRetriever
