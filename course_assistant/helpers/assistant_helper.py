from logging import Logger
from pathlib import Path
from typing import List, Optional

from course_assistant.agents.context import AssistantContext, build_context
from course_assistant.agents.router_agent import QueryRouter
from course_assistant.config.settings import Config
from course_assistant.helpers.cases import AnswerCase, RoutingCase
from course_assistant.helpers.demo_data import DEMO_COURSE_ID, demo_passages
from course_assistant.ingestion.pdf_loader import load_pdf_pages
from course_assistant.models import AgentResponse, Passage
from course_assistant.utils.exceptions import ConfigurationError, IngestionError
from course_assistant.utils.logger import logger


def load_demo_course(context: AssistantContext, course_id: str = DEMO_COURSE_ID) -> List[str]:
    passages = demo_passages(course_id)
    vectors = context.embedding_provider.embed_many([p.content for p in passages])
    embedded = [
        Passage(
            content=p.content,
            course_id=p.course_id,
            content_type=p.content_type,
            page_number=p.page_number,
            week_number=p.week_number,
            topic=p.topic,
            embedding=tuple(vector),
        )
        for p, vector in zip(passages, vectors)
    ]
    return context.content_store.add_passages(embedded)


def _has_content(context: AssistantContext, course_id: str) -> bool:
    return bool(context.content_store.scan_filter(course_id, None, 1))


def _load_pdf(context: AssistantContext, pdf_path: Path, course_id: str, log: Logger) -> None:
    if _has_content(context, course_id):
        log.info(f"Course {course_id} already has content; skipping ingestion of {pdf_path}")
        return

    try:
        pages = load_pdf_pages(pdf_path)
        log.info(f"✓ Loaded PDF: {pdf_path}")
    except IngestionError as e:
        log.error(f"✗ Error loading PDF from {pdf_path}: {e}")
        raise e

    try:
        ids = context.ingestor.ingest(course_id, pages)
        log.info(f"✓ Ingested {len(ids)} passages into course {course_id}")
    except IngestionError as e:
        log.error(f"✗ Error ingesting {pdf_path}: {e}")
        raise e


def _load_demo(context: AssistantContext, course_id: str, log: Logger) -> None:
    if _has_content(context, course_id):
        log.info(f"Course {course_id} already has content; demo syllabus not loaded")
        return
    ids = load_demo_course(context, course_id)
    log.info(f"✓ Loaded {len(ids)} demo passages into course {course_id}")


def init(
    settings: Optional[Config] = None,
    load_demo: bool = False,
    pdf_path: Optional[Path] = None,
    course_id: str = DEMO_COURSE_ID,
    **overrides,
) -> tuple[Logger, AssistantContext]:
    """
    Build the assistant and seed the course.

    A PDF, when given, is ingested into `course_id`; otherwise `load_demo`
    loads the demo syllabus. Either step is skipped when the course already
    has content (a persistent store from an earlier run).
    """
    log: Logger = logger

    try:
        log.info("Starting Course Assistant")
        context = build_context(settings, **overrides)
    except ConfigurationError as e:
        log.error(f"Failed to build assistant context: {e}", exc_info=True)
        raise e
    except Exception as e:
        log.error(f"Unexpected error building assistant context: {e}", exc_info=True)
        raise e

    try:
        if pdf_path is not None:
            _load_pdf(context, Path(pdf_path), course_id, log)
        elif load_demo:
            _load_demo(context, course_id, log)
    except IngestionError as e:
        log.error(f"Failed to load course content: {e}", exc_info=True)
        raise e

    return log, context


def assert_route(router: QueryRouter, test_case: RoutingCase) -> None:
    decision = router.classify(test_case.query)
    assert decision.route == test_case.expected_route, f"Route does not match expected value. query: {test_case.query}, expected: {test_case.expected_route.value}, actual: {decision.route.value}"
    if test_case.expected_confidence is not None:
        assert abs(decision.confidence - test_case.expected_confidence) < 1e-9, f"Confidence does not match expected value. query: {test_case.query}, expected: {test_case.expected_confidence}, actual: {decision.confidence}"


def assert_escalated(response: AgentResponse, expected_confidence: Optional[float] = None) -> None:
    assert response.should_escalate, f"Expected escalation, got answer: {response.response}"
    assert response.citations == [], f"Escalated response must not carry citations, got {len(response.citations)}"
    if expected_confidence is not None:
        assert abs(response.confidence - expected_confidence) < 1e-9, f"Confidence does not match expected value. expected: {expected_confidence}, actual: {response.confidence}"


def assert_answer(response: AgentResponse, test_case: AnswerCase) -> None:
    if test_case.should_escalate:
        assert_escalated(response, test_case.expected_confidence)
        return

    assert not response.should_escalate, f"Unexpected escalation. query: {test_case.query}, response: {response.response}"
    assert len(response.citations) == len(test_case.scores), f"Expected one citation per passage. query: {test_case.query}"
    if test_case.expected_fragment is not None:
        assert test_case.expected_fragment.lower() in response.response.lower(), f"Answer does not contain expected text. query: {test_case.query}, expected: {test_case.expected_fragment}, actual: {response.response}"
    if test_case.expected_confidence is not None:
        assert abs(response.confidence - test_case.expected_confidence) < 1e-9, f"Confidence does not match expected value. query: {test_case.query}, expected: {test_case.expected_confidence}, actual: {response.confidence}"
