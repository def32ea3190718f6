"""
Embedding and completion providers.

- EmbeddingProviderInterface / CompletionProviderInterface: the contracts.
- HashingEmbeddingProvider / DeterministicCompletionProvider: offline strategies.
- OpenAIEmbeddingProvider / ChatCompletionProvider: live strategies
  (imported lazily by the factory so offline use needs no API client setup).
"""

from course_assistant.providers.base_provider import (
    CompletionProviderInterface,
    EmbeddingProviderInterface,
)
from course_assistant.providers.deterministic_provider import (
    DeterministicCompletionProvider,
    HashingEmbeddingProvider,
)
from course_assistant.providers.factory import (
    create_completion_provider,
    create_embedding_provider,
)

__all__ = [
    "CompletionProviderInterface",
    "EmbeddingProviderInterface",
    "DeterministicCompletionProvider",
    "HashingEmbeddingProvider",
    "create_completion_provider",
    "create_embedding_provider",
]
