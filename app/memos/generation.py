"""
Text generation for memo summaries, backed by the Gemini API.

``GeminiGenerationProvider`` satisfies ``GenerationProvider``; tests and
alternative backends only need a ``generate(request)`` method.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from google import genai
from google.genai import types


@dataclass(frozen=True)
class GenerationRequest:
    prompt: str
    max_output_tokens: int
    temperature: float
    top_p: float
    top_k: int


@dataclass(frozen=True)
class GenerationResult:
    text: str
    total_tokens: int = 0


class GenerationProvider(Protocol):
    def generate(self, request: GenerationRequest) -> GenerationResult: ...


class GeminiGenerationProvider:
    """
    Single-shot ``generate_content`` calls against one Gemini model.

    No retries and no timeout of its own; transport errors surface as
    ``RuntimeError``.
    """

    def __init__(self, model: str, *, api_key: str) -> None:
        if not api_key:
            raise ValueError("api_key is required")
        self._client = genai.Client(api_key=api_key)
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    def generate(self, request: GenerationRequest) -> GenerationResult:
        config = types.GenerateContentConfig(
            max_output_tokens=request.max_output_tokens,
            temperature=request.temperature,
            top_p=request.top_p,
            top_k=request.top_k,
        )
        try:
            response = self._client.models.generate_content(
                model=self._model,
                contents=request.prompt,
                config=config,
            )
        except Exception as exc:
            raise RuntimeError(f"Gemini generation failed: {exc}") from exc

        usage = response.usage_metadata
        total = (usage.total_token_count or 0) if usage else 0
        return GenerationResult(text=response.text or "", total_tokens=total)
