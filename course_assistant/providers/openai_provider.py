"""
Live providers backed by OpenAI.

- OpenAIEmbeddingProvider wraps llama-index's OpenAIEmbedding.
- ChatCompletionProvider wraps langchain's ChatOpenAI.

Both translate client errors (including timeouts) into the application's
exception types.
"""

from typing import List, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from llama_index.embeddings.openai import OpenAIEmbedding

from course_assistant.models import CompletionResult
from course_assistant.providers.base_provider import (
    CompletionProviderInterface,
    EmbeddingProviderInterface,
)
from course_assistant.utils.exceptions import ConfigurationError, GenerationError
from course_assistant.utils.logger import logger


class OpenAIEmbeddingProvider(EmbeddingProviderInterface):
    """Query/passage embeddings via the OpenAI embeddings API."""

    def __init__(self, model: str, api_key: str, timeout: float = 30.0) -> None:
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY is required for OpenAI embeddings")
        self.model = model
        self.logger = logger
        self._embedding = OpenAIEmbedding(
            model_name=model,
            api_key=api_key,
            timeout=timeout,
        )
        self.logger.info(f"[OpenAIEmbeddingProvider] Initialized with model: {model}")

    def embed(self, text: str) -> List[float]:
        return self._embedding.get_query_embedding(text)

    def embed_many(self, texts: List[str]) -> List[List[float]]:
        return self._embedding.get_text_embedding_batch(texts)


class ChatCompletionProvider(CompletionProviderInterface):
    """Chat completions via langchain's ChatOpenAI."""

    def __init__(
        self,
        model: str,
        api_key: str,
        temperature: float = 0.2,
        max_tokens: int = 1024,
        timeout: float = 30.0,
    ) -> None:
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY is required for chat completions")
        self.model = model
        self.logger = logger
        self._llm = ChatOpenAI(
            model=model,
            api_key=api_key,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=timeout,
        )
        self.logger.info(f"[ChatCompletionProvider] Initialized LLM model: {model}")

    def complete(self, prompt: str, system_prompt: Optional[str] = None) -> CompletionResult:
        messages = []
        if system_prompt:
            messages.append(SystemMessage(content=system_prompt))
        messages.append(HumanMessage(content=prompt))

        try:
            response = self._llm.invoke(messages)
        except Exception as e:
            raise GenerationError(f"Chat completion failed: {e}") from e

        content = response.content
        text = content if isinstance(content, str) else str(content)

        usage = None
        usage_metadata = getattr(response, "usage_metadata", None)
        if usage_metadata:
            usage = {
                "prompt_tokens": usage_metadata.get("input_tokens", 0),
                "completion_tokens": usage_metadata.get("output_tokens", 0),
                "total_tokens": usage_metadata.get("total_tokens", 0),
            }
            self.logger.debug(
                f"[ChatCompletionProvider] {self.model} usage: "
                f"{usage['total_tokens']} tokens "
                f"(prompt={usage['prompt_tokens']}, completion={usage['completion_tokens']})"
            )

        return CompletionResult(text=text, usage=usage)
