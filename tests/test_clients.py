# Area: Backends
"""Tests for lexigame.clients — JSON extraction and hosted model bindings."""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from lexigame.clients import AnthropicGenerationBackend, OpenAIImageBackend, extract_json_object
from lexigame.errors import BackendFailure


@pytest.fixture
def no_keys(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


class TestExtractJsonObject:

    def test_plain_json(self):
        assert extract_json_object('{"hint": "x"}') == {"hint": "x"}

    def test_fenced_json(self):
        text = 'Here you go:\n```json\n{"category": "Science"}\n```\nEnjoy.'
        assert extract_json_object(text) == {"category": "Science"}

    def test_embedded_object(self):
        assert extract_json_object('Sure! {"a": 1} Done.') == {"a": 1}

    @pytest.mark.parametrize("text", ["no json here", "[1, 2, 3]", "{broken"])
    def test_no_object(self, text):
        with pytest.raises(ValueError):
            extract_json_object(text)


class TestAnthropicGenerationBackend:

    def test_unavailable_without_key(self, no_keys):
        backend = AnthropicGenerationBackend()
        assert backend.is_available() is False
        with pytest.raises(BackendFailure):
            backend.generate("instructions", {"type": "object"})

    def _backend(self, reply=None, error=None):
        backend = AnthropicGenerationBackend.__new__(AnthropicGenerationBackend)
        backend.model = "claude-test"
        backend.max_tokens = 100
        backend._client = MagicMock()
        if error is not None:
            backend._client.messages.create.side_effect = error
        else:
            backend._client.messages.create.return_value = SimpleNamespace(
                content=[SimpleNamespace(text=reply)]
            )
        return backend

    def test_decodes_reply_and_sends_schema(self):
        schema = {"type": "object", "properties": {"hint": {"type": "string"}}}
        backend = self._backend(reply='```json\n{"hint": "think cells"}\n```')

        assert backend.generate("Give a hint", schema) == {"hint": "think cells"}
        kwargs = backend._client.messages.create.call_args.kwargs
        assert kwargs["model"] == "claude-test"
        prompt = kwargs["messages"][0]["content"]
        assert prompt.startswith("Give a hint")
        assert json.dumps(schema) in prompt

    def test_transport_error(self):
        backend = self._backend(error=RuntimeError("529 overloaded"))
        with pytest.raises(BackendFailure, match="overloaded"):
            backend.generate("x", {})

    @pytest.mark.parametrize("reply", ["", "   ", "I cannot help with that."])
    def test_unusable_reply(self, reply):
        with pytest.raises(BackendFailure):
            self._backend(reply=reply).generate("x", {})


class TestOpenAIImageBackend:

    def test_unavailable_without_key(self, no_keys):
        backend = OpenAIImageBackend()
        assert backend.is_available() is False
        with pytest.raises(BackendFailure):
            backend.generate_image("a cell")

    def _backend(self, data):
        backend = OpenAIImageBackend.__new__(OpenAIImageBackend)
        backend.model = "dall-e-3"
        backend.size = "1024x1024"
        backend._client = MagicMock()
        backend._client.images.generate.return_value = SimpleNamespace(data=data)
        return backend

    def test_returns_data_uri(self):
        backend = self._backend([SimpleNamespace(b64_json="QUJD")])
        assert backend.generate_image("a cell") == "data:image/png;base64,QUJD"
        assert backend._client.images.generate.call_args.kwargs["response_format"] == "b64_json"

    def test_missing_data(self):
        with pytest.raises(BackendFailure):
            self._backend([]).generate_image("a cell")
