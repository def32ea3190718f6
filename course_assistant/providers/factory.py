"""
Provider factory (Factory Pattern).

Selects the live or deterministic implementation once, from configuration.
Missing credentials select the deterministic provider instead of failing.
"""

from course_assistant.config.settings import Config
from course_assistant.providers.base_provider import (
    CompletionProviderInterface,
    EmbeddingProviderInterface,
)
from course_assistant.providers.deterministic_provider import (
    DeterministicCompletionProvider,
    HashingEmbeddingProvider,
)
from course_assistant.utils.logger import logger


def create_embedding_provider(settings: Config) -> EmbeddingProviderInterface:
    if not settings.use_live_providers:
        logger.info("[ProviderFactory] Using deterministic hashing embeddings")
        return HashingEmbeddingProvider(dimensions=settings.EMBEDDING_DIMENSIONS)

    from course_assistant.providers.openai_provider import OpenAIEmbeddingProvider

    return OpenAIEmbeddingProvider(
        model=settings.EMBEDDING_MODEL,
        api_key=settings.OPENAI_API_KEY,
        timeout=settings.LLM_TIMEOUT_SECONDS,
    )


def create_completion_provider(settings: Config) -> CompletionProviderInterface:
    if not settings.use_live_providers:
        if not settings.OFFLINE_MODE:
            logger.warning(
                "[ProviderFactory] OPENAI_API_KEY not set; using deterministic completions"
            )
        return DeterministicCompletionProvider()

    from course_assistant.providers.openai_provider import ChatCompletionProvider

    return ChatCompletionProvider(
        model=settings.LLM_MODEL,
        api_key=settings.OPENAI_API_KEY,
        temperature=settings.LLM_TEMPERATURE,
        max_tokens=settings.LLM_MAX_TOKENS,
        timeout=settings.LLM_TIMEOUT_SECONDS,
    )
