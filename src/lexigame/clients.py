# Area: Backends
"""
lexigame.clients — Hosted model bindings
========================================

Two concrete backends:

* ``AnthropicGenerationBackend`` — Anthropic Messages API. The JSON
  schema is embedded in the prompt and the reply is decoded as JSON;
  markdown code fences around the reply are tolerated.
* ``OpenAIImageBackend`` — OpenAI Images API, returns a PNG data URI.

Both SDKs are optional extras (``pip install lexigame[llm]``,
``lexigame[images]``). A backend whose SDK or API key is missing reports
``is_available() == False`` and raises ``BackendFailure`` when called.
"""

from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Dict, Optional

from .backends import GenerationBackend, ImageBackend
from .errors import BackendFailure

logger = logging.getLogger("lexigame.clients")

DEFAULT_MODEL = "claude-3-5-haiku-latest"
DEFAULT_MAX_TOKENS = 4000
DEFAULT_IMAGE_MODEL = "dall-e-3"

IMAGE_PROMPT_TEMPLATE = (
    'Generate a vibrant, clean, flat illustration of "{word}", suitable for a '
    "modern educational app. The image should be clear, easily recognizable, "
    "and visually engaging. Do not include any text in the image."
)

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Decode the first JSON object in a model reply.

    Tries, in order: the raw text, the contents of a markdown code fence,
    and the outermost ``{...}`` span.

    Raises
    ------
    ValueError
        If no JSON object can be decoded.
    """
    candidates = [text.strip()]
    fence = _FENCE_RE.search(text)
    if fence:
        candidates.append(fence.group(1).strip())
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start:end + 1])

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data
    raise ValueError("no JSON object found in model reply")


class AnthropicGenerationBackend(GenerationBackend):
    """Anthropic Claude API client."""

    name = "anthropic"

    def __init__(self, model: str = DEFAULT_MODEL, max_tokens: int = DEFAULT_MAX_TOKENS,
                 api_key: Optional[str] = None):
        self.model = model
        self.max_tokens = max_tokens
        self._client = None
        self._init_client(api_key)

    def _init_client(self, api_key: Optional[str]) -> None:
        api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        if not api_key:
            logger.warning("ANTHROPIC_API_KEY not set; generation backend unavailable")
            return
        try:
            from anthropic import Anthropic
        except ImportError:
            logger.warning("anthropic package not installed; install lexigame[llm]")
            return
        self._client = Anthropic(api_key=api_key)

    def is_available(self) -> bool:
        return self._client is not None

    def generate(self, instructions: str, output_schema: Dict[str, Any]) -> Dict[str, Any]:
        if not self._client:
            raise BackendFailure(self.name, "client not configured")

        prompt = (
            f"{instructions}\n\n"
            "Respond ONLY with a JSON object matching this JSON schema. "
            "No explanation, no markdown:\n"
            f"{json.dumps(output_schema)}"
        )
        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as exc:
            raise BackendFailure(self.name, f"request failed: {exc}") from exc

        text = "".join(
            getattr(block, "text", "") for block in (response.content or [])
        )
        if not text.strip():
            raise BackendFailure(self.name, "empty response")
        try:
            return extract_json_object(text)
        except ValueError as exc:
            raise BackendFailure(self.name, str(exc)) from exc


class OpenAIImageBackend(ImageBackend):
    """OpenAI Images API client returning base64 PNG data URIs."""

    name = "openai-images"

    def __init__(self, model: str = DEFAULT_IMAGE_MODEL, size: str = "1024x1024",
                 api_key: Optional[str] = None):
        self.model = model
        self.size = size
        self._client = None
        self._init_client(api_key)

    def _init_client(self, api_key: Optional[str]) -> None:
        api_key = api_key or os.environ.get("OPENAI_API_KEY")
        if not api_key:
            logger.warning("OPENAI_API_KEY not set; image backend unavailable")
            return
        try:
            from openai import OpenAI
        except ImportError:
            logger.warning("openai package not installed; install lexigame[images]")
            return
        self._client = OpenAI(api_key=api_key)

    def is_available(self) -> bool:
        return self._client is not None

    def generate_image(self, prompt: str) -> str:
        if not self._client:
            raise BackendFailure(self.name, "client not configured")
        try:
            result = self._client.images.generate(
                model=self.model,
                prompt=prompt,
                size=self.size,
                quality="standard",
                response_format="b64_json",
            )
        except Exception as exc:
            raise BackendFailure(self.name, f"request failed: {exc}") from exc

        data = result.data[0] if result.data else None
        b64 = getattr(data, "b64_json", None)
        if not b64:
            raise BackendFailure(self.name, "response missing b64_json data")
        return f"data:image/png;base64,{b64}"
