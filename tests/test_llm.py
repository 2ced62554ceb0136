import asyncio
from types import SimpleNamespace

import pytest

from calcapp.errors import LLMBackendError
from calcapp.llm import AnthropicProvider, Message, OpenAIProvider
from calcapp.nlp import NLPResultType, process_natural_language_calculation


def fake_client(reply, *path):
    """Client object whose ``<path>.create`` coroutine returns ``reply``"""
    async def create(**kwargs):
        return reply

    node = SimpleNamespace(create=create)
    for attr in reversed(path):
        node = SimpleNamespace(**{attr: node})
    return node


MESSAGES = [Message(role="system", content="sys"), Message(role="user", content="5 plus 3")]


def test_anthropic_reply_is_unpacked():
    provider = AnthropicProvider(api_key="test")
    provider._client = fake_client(SimpleNamespace(
        content=[SimpleNamespace(text='{"type": "calculation", "expression": "5+3"}')],
        model="claude-test",
        usage=SimpleNamespace(input_tokens=3, output_tokens=5),
        stop_reason="end_turn",
    ), "messages")
    response = asyncio.run(provider.complete(MESSAGES))
    assert response.model == "claude-test"
    assert response.usage == {"input_tokens": 3, "output_tokens": 5}
    assert response.finish_reason == "end_turn"


def test_anthropic_empty_content_is_backend_error():
    provider = AnthropicProvider(api_key="test")
    provider._client = fake_client(SimpleNamespace(
        content=[], model="claude-test", usage=None, stop_reason="end_turn",
    ), "messages")
    with pytest.raises(LLMBackendError):
        asyncio.run(provider.complete(MESSAGES))


def test_openai_empty_choices_is_backend_error():
    provider = OpenAIProvider(api_key="test")
    provider._client = fake_client(SimpleNamespace(
        choices=[], model="gpt-test", usage=None,
    ), "chat", "completions")
    with pytest.raises(LLMBackendError):
        asyncio.run(provider.complete(MESSAGES))


def test_openai_null_content_is_empty_string():
    provider = OpenAIProvider(api_key="test")
    choice = SimpleNamespace(message=SimpleNamespace(content=None), finish_reason="stop")
    provider._client = fake_client(SimpleNamespace(
        choices=[choice], model="gpt-test", usage=None,
    ), "chat", "completions")
    response = asyncio.run(provider.complete(MESSAGES))
    assert response.content == ""
    assert response.usage is None


def test_malformed_reply_falls_back_to_local_parser():
    provider = AnthropicProvider(api_key="test")
    provider._client = fake_client(SimpleNamespace(
        content=[], model="claude-test", usage=None, stop_reason="end_turn",
    ), "messages")
    result = asyncio.run(process_natural_language_calculation("5 plus 3", provider))
    assert result.type == NLPResultType.CALCULATION
    assert result.result == 8
