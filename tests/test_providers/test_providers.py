"""Tests for the deterministic and OpenAI-backed providers and the factory."""

import math
import pytest
from types import SimpleNamespace
from unittest.mock import patch

from langchain_core.messages import HumanMessage, SystemMessage

from course_assistant.agents.router_agent import ModelClassificationStrategy
from course_assistant.config.constants import CLASSIFICATION_SYSTEM_PROMPT, Route
from course_assistant.providers.deterministic_provider import (
    DeterministicCompletionProvider,
    HashingEmbeddingProvider,
)
from course_assistant.providers.factory import create_completion_provider, create_embedding_provider
from course_assistant.providers.openai_provider import ChatCompletionProvider, OpenAIEmbeddingProvider
from course_assistant.utils.exceptions import ConfigurationError, GenerationError


def _settings(live: bool):
    return SimpleNamespace(
        use_live_providers=live,
        OFFLINE_MODE=not live,
        OPENAI_API_KEY="sk-test" if live else "",
        EMBEDDING_MODEL="text-embedding-3-small",
        EMBEDDING_DIMENSIONS=32,
        LLM_MODEL="gpt-4o-mini",
        LLM_TEMPERATURE=0.2,
        LLM_MAX_TOKENS=256,
        LLM_TIMEOUT_SECONDS=5.0,
    )


# ----------------------------------------------------------------------------
# Deterministic providers
# ----------------------------------------------------------------------------

def test_hashing_embeddings_are_stable_and_normalised():
    provider = HashingEmbeddingProvider(dimensions=64)

    first = provider.embed("When is the Midterm exam?")
    second = HashingEmbeddingProvider(dimensions=64).embed("when is the midterm EXAM")

    assert first == second
    assert len(first) == 64
    assert math.isclose(math.sqrt(sum(v * v for v in first)), 1.0)


def test_hashing_embedding_of_empty_text_is_zero_vector():
    assert HashingEmbeddingProvider(dimensions=8).embed("  ?! ") == [0.0] * 8


def test_hashing_embed_many_matches_embed():
    provider = HashingEmbeddingProvider(dimensions=16)

    assert provider.embed_many(["a b", "c"]) == [provider.embed("a b"), provider.embed("c")]


def test_hashing_embedding_rejects_bad_dimensions():
    with pytest.raises(ValueError):
        HashingEmbeddingProvider(dimensions=0)


@pytest.mark.parametrize(
    "query, expected",
    [
        ('Query: "I have a family emergency"', "ESCALATE"),
        ('Query: "When is the midterm?"', "POLICY"),
        ('Query: "Can you explain recursion?"', "CONCEPT"),
        ('Query: "Hello there"', "POLICY"),
    ],
)
def test_deterministic_classification(query, expected):
    result = DeterministicCompletionProvider().complete(prompt=query, system_prompt=CLASSIFICATION_SYSTEM_PROMPT)

    assert result.text == expected
    assert result.usage is None


@pytest.mark.parametrize(
    "query, expected",
    [
        ("Explain recursion", Route.CONCEPT),
        ("How does a hash table work?", Route.CONCEPT),
        ("Define a binary tree", Route.CONCEPT),
        ("When is the midterm?", Route.POLICY),
        ('What does "late" mean for labs?', Route.POLICY),
        ("I have a family emergency", Route.ESCALATE),
    ],
)
def test_deterministic_classification_ignores_category_instructions(query, expected):
    provider = DeterministicCompletionProvider()

    decision = ModelClassificationStrategy(provider).classify(query)

    assert decision.route == expected
    assert decision.confidence == 0.9


def test_deterministic_answer_is_keyed_on_question_not_context():
    prompt = (
        "Context:\n[Source 1] Page 2\nLate policy: 10% per day.\n\n"
        "Question: Can you explain the algorithm?\n\n"
        "Answer using ONLY the context above."
    )

    result = DeterministicCompletionProvider().complete(prompt, system_prompt="You are a concept tutor.")

    assert result.text.startswith("Here is an explanation")


def test_deterministic_answers_are_fixed_per_topic():
    provider = DeterministicCompletionProvider()

    policy = provider.complete("What is the late policy?")
    assert policy.text.startswith("Based on the course syllabus")
    assert provider.complete("What is the late policy?") == policy
    assert provider.complete("Explain the algorithm").text.startswith("Here is an explanation")
    assert provider.complete("Anything else").text == "Here is the relevant information from the course materials."


# ----------------------------------------------------------------------------
# Factory
# ----------------------------------------------------------------------------

def test_factory_offline_builds_deterministic_providers():
    settings = _settings(live=False)

    embedding = create_embedding_provider(settings)
    completion = create_completion_provider(settings)

    assert isinstance(embedding, HashingEmbeddingProvider)
    assert embedding.dimensions == 32
    assert isinstance(completion, DeterministicCompletionProvider)
    assert embedding.is_deterministic and completion.is_deterministic


@patch("course_assistant.providers.openai_provider.OpenAIEmbedding")
@patch("course_assistant.providers.openai_provider.ChatOpenAI")
def test_factory_live_builds_openai_providers(mock_chat, mock_embedding):
    settings = _settings(live=True)

    embedding = create_embedding_provider(settings)
    completion = create_completion_provider(settings)

    assert isinstance(embedding, OpenAIEmbeddingProvider)
    assert isinstance(completion, ChatCompletionProvider)
    assert not completion.is_deterministic
    mock_chat.assert_called_once_with(
        model="gpt-4o-mini", api_key="sk-test", temperature=0.2, max_tokens=256, timeout=5.0
    )
    mock_embedding.assert_called_once_with(model_name="text-embedding-3-small", api_key="sk-test", timeout=5.0)


# ----------------------------------------------------------------------------
# OpenAI-backed providers (clients patched)
# ----------------------------------------------------------------------------

@patch("course_assistant.providers.openai_provider.ChatOpenAI")
def test_chat_completion_sends_system_and_human_messages(mock_chat):
    mock_chat.return_value.invoke.return_value = SimpleNamespace(
        content="POLICY",
        usage_metadata={"input_tokens": 40, "output_tokens": 1, "total_tokens": 41},
    )
    provider = ChatCompletionProvider(model="gpt-4o-mini", api_key="sk-test")

    result = provider.complete("Query: \"When is the midterm?\"", system_prompt="Classify it")

    messages = mock_chat.return_value.invoke.call_args.args[0]
    assert [type(m) for m in messages] == [SystemMessage, HumanMessage]
    assert messages[0].content == "Classify it"
    assert result.text == "POLICY"
    assert result.usage == {"prompt_tokens": 40, "completion_tokens": 1, "total_tokens": 41}


@patch("course_assistant.providers.openai_provider.ChatOpenAI")
def test_chat_completion_without_system_prompt_or_usage(mock_chat):
    mock_chat.return_value.invoke.return_value = SimpleNamespace(content="Answer", usage_metadata=None)

    result = ChatCompletionProvider(model="gpt-4o-mini", api_key="sk-test").complete("Question")

    messages = mock_chat.return_value.invoke.call_args.args[0]
    assert [type(m) for m in messages] == [HumanMessage]
    assert result.usage is None


@patch("course_assistant.providers.openai_provider.ChatOpenAI")
def test_chat_completion_errors_become_generation_errors(mock_chat):
    mock_chat.return_value.invoke.side_effect = TimeoutError("request timed out")

    with pytest.raises(GenerationError):
        ChatCompletionProvider(model="gpt-4o-mini", api_key="sk-test").complete("Question")


@patch("course_assistant.providers.openai_provider.OpenAIEmbedding")
def test_openai_embeddings_delegate_to_client(mock_embedding):
    mock_embedding.return_value.get_query_embedding.return_value = [0.1, 0.2]
    mock_embedding.return_value.get_text_embedding_batch.return_value = [[0.1], [0.2]]
    provider = OpenAIEmbeddingProvider(model="text-embedding-3-small", api_key="sk-test")

    assert provider.embed("midterm") == [0.1, 0.2]
    assert provider.embed_many(["a", "b"]) == [[0.1], [0.2]]
    mock_embedding.return_value.get_text_embedding_batch.assert_called_once_with(["a", "b"])


@pytest.mark.parametrize("provider_cls", [ChatCompletionProvider, OpenAIEmbeddingProvider])
def test_live_providers_require_api_key(provider_cls):
    with pytest.raises(ConfigurationError):
        provider_cls(model="any", api_key="")
