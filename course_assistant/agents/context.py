"""
Composition root.

build_context() constructs every component once, from configuration, and
returns them in an AssistantContext that callers pass around explicitly.
Live vs deterministic behaviour is decided here:

- live completion provider  -> model classification + completion synthesis
- deterministic provider    -> keyword classification + extractive synthesis,
                               with the lower offline score threshold
- deterministic embeddings  -> unranked course scan instead of similarity search
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from course_assistant.agents.concept_agent import ConceptAgent
from course_assistant.agents.escalation_handler import EscalationHandler
from course_assistant.agents.orchestrator_system import AnswerPipeline
from course_assistant.agents.policy_agent import PolicyAgent
from course_assistant.agents.router_agent import (
    KeywordClassificationStrategy,
    ModelClassificationStrategy,
    QueryRouter,
)
from course_assistant.agents.synthesizers import (
    AnswerSynthesizerInterface,
    CompletionSynthesizer,
    ExtractiveSynthesizer,
)
from course_assistant.config.settings import Config, config
from course_assistant.ingestion.ingest import CourseContentIngestor
from course_assistant.providers.base_provider import (
    CompletionProviderInterface,
    EmbeddingProviderInterface,
)
from course_assistant.providers.factory import (
    create_completion_provider,
    create_embedding_provider,
)
from course_assistant.retrieval.course_retriever import CourseRetriever
from course_assistant.storage.base_store import (
    ChatLogStoreInterface,
    ContentStoreInterface,
    EscalationStoreInterface,
)
from course_assistant.storage.memory_store import (
    InMemoryChatLogStore,
    InMemoryContentStore,
    InMemoryEscalationStore,
)
from course_assistant.utils.exceptions import ConfigurationError
from course_assistant.utils.logger import logger


@dataclass
class AssistantContext:
    settings: Config
    embedding_provider: EmbeddingProviderInterface
    completion_provider: CompletionProviderInterface
    content_store: ContentStoreInterface
    escalation_store: EscalationStoreInterface
    chat_log_store: Optional[ChatLogStoreInterface]
    retriever: CourseRetriever
    router: QueryRouter
    policy_agent: PolicyAgent
    concept_agent: ConceptAgent
    escalation_handler: EscalationHandler
    pipeline: AnswerPipeline
    ingestor: CourseContentIngestor


def create_content_store(settings: Config) -> ContentStoreInterface:
    backend = settings.CONTENT_STORE_BACKEND
    if backend == "memory":
        return InMemoryContentStore()
    if backend == "chroma":
        from course_assistant.storage.chroma_store import ChromaContentStore

        return ChromaContentStore(
            collection_name=settings.CHROMA_COLLECTION_NAME,
            persist_directory=Path(settings.CHROMA_PERSIST_DIR),
        )
    if backend == "supabase":
        from course_assistant.storage.supabase_store import (
            SupabaseContentStore,
            create_supabase_client,
        )

        return SupabaseContentStore(create_supabase_client(settings))
    raise ConfigurationError(f"Unknown CONTENT_STORE_BACKEND: {backend!r}")


def create_escalation_stores(settings: Config) -> tuple[EscalationStoreInterface, ChatLogStoreInterface]:
    backend = settings.ESCALATION_STORE_BACKEND
    if backend == "memory":
        return InMemoryEscalationStore(), InMemoryChatLogStore()
    if backend == "supabase":
        from course_assistant.storage.supabase_store import (
            SupabaseChatLogStore,
            SupabaseEscalationStore,
            create_supabase_client,
        )

        client = create_supabase_client(settings)
        return SupabaseEscalationStore(client), SupabaseChatLogStore(client)
    raise ConfigurationError(f"Unknown ESCALATION_STORE_BACKEND: {backend!r}")


def build_context(
    settings: Optional[Config] = None,
    embedding_provider: Optional[EmbeddingProviderInterface] = None,
    completion_provider: Optional[CompletionProviderInterface] = None,
    content_store: Optional[ContentStoreInterface] = None,
    escalation_store: Optional[EscalationStoreInterface] = None,
    chat_log_store: Optional[ChatLogStoreInterface] = None,
) -> AssistantContext:
    """
    Build the full component graph.

    Any component passed in is used as-is; the rest are created from
    `settings` (the global config by default).
    """
    settings = settings or config

    if embedding_provider is None:
        embedding_provider = create_embedding_provider(settings)
    if completion_provider is None:
        completion_provider = create_completion_provider(settings)
    if content_store is None:
        content_store = create_content_store(settings)
    if escalation_store is None:
        escalation_store, default_chat_log_store = create_escalation_stores(settings)
        if chat_log_store is None:
            chat_log_store = default_chat_log_store

    synthesizer: AnswerSynthesizerInterface
    if completion_provider.is_deterministic:
        router = QueryRouter(strategy=KeywordClassificationStrategy())
        synthesizer = ExtractiveSynthesizer()
        score_threshold = settings.OFFLINE_SCORE_THRESHOLD
    else:
        router = QueryRouter(strategy=ModelClassificationStrategy(completion_provider))
        synthesizer = CompletionSynthesizer(completion_provider)
        score_threshold = settings.SCORE_THRESHOLD

    retriever = CourseRetriever(
        embedding_provider,
        content_store,
        rank_by_similarity=not embedding_provider.is_deterministic,
    )
    policy_agent = PolicyAgent(retriever, synthesizer, score_threshold=score_threshold, limit=settings.TOP_K_RESULTS)
    concept_agent = ConceptAgent(retriever, synthesizer, score_threshold=score_threshold, limit=settings.TOP_K_RESULTS)
    escalation_handler = EscalationHandler(escalation_store)
    pipeline = AnswerPipeline(
        router=router,
        policy_agent=policy_agent,
        concept_agent=concept_agent,
        escalation_handler=escalation_handler,
        chat_log_store=chat_log_store,
    )
    ingestor = CourseContentIngestor(
        embedding_provider,
        content_store,
        chunk_size=settings.CHUNK_SIZE_TOKENS,
        chunk_overlap=settings.CHUNK_OVERLAP_TOKENS,
    )

    logger.info(
        f"[AssistantContext] Built context (deterministic={completion_provider.is_deterministic}, "
        f"threshold={score_threshold}, content_store={type(content_store).__name__})"
    )
    return AssistantContext(
        settings=settings,
        embedding_provider=embedding_provider,
        completion_provider=completion_provider,
        content_store=content_store,
        escalation_store=escalation_store,
        chat_log_store=chat_log_store,
        retriever=retriever,
        router=router,
        policy_agent=policy_agent,
        concept_agent=concept_agent,
        escalation_handler=escalation_handler,
        pipeline=pipeline,
        ingestor=ingestor,
    )
