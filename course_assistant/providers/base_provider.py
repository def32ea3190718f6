"""
Provider interfaces for embeddings and text completion.

Agents, the router and the retrieval engine depend on these abstractions
rather than on a concrete model client. Two implementations exist for
each: a live one backed by OpenAI and a deterministic one used offline
and in tests. The choice is made once, when the providers are built.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from course_assistant.models import CompletionResult


class EmbeddingProviderInterface(ABC):
    """
    Converts text into a fixed-dimension vector.

    Implementations raise an exception on failure; the retrieval engine
    maps it to RetrievalError.
    """

    is_deterministic: bool = False

    @abstractmethod
    def embed(self, text: str) -> List[float]:
        """
        Embed a single query or passage.

        Args:
            text: Text to embed

        Returns:
            List[float]: The embedding vector
        """
        pass

    def embed_many(self, texts: List[str]) -> List[List[float]]:
        """Embed a batch of texts. Override when the backend batches natively."""
        return [self.embed(text) for text in texts]


class CompletionProviderInterface(ABC):
    """
    Generates text for a prompt.

    Implementations raise GenerationError on any failure, including
    timeouts.
    """

    is_deterministic: bool = False

    @abstractmethod
    def complete(self, prompt: str, system_prompt: Optional[str] = None) -> CompletionResult:
        """
        Generate a completion.

        Args:
            prompt: User/human prompt
            system_prompt: Optional system instructions

        Returns:
            CompletionResult: Generated text and optional token usage

        Raises:
            GenerationError: If generation fails
        """
        pass
