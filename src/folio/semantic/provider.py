"""Async client for the embedding and cleanup model server.

Talks to any OpenAI-compatible endpoint (Ollama's ``/v1`` API by default).
Every public coroutine fails soft: errors and timeouts are logged and turned
into a fallback value, so optional curation stages never break a conversion.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
import re
from typing import Any, Awaitable, TypeVar

import numpy as np

from folio.semantic.config import ProviderSettings


logger = logging.getLogger(__name__)

MAX_EMBEDDING_CHARS = 2000
MAX_CLEANUP_CHARS = 15000
TRUNCATION_MARKER = "...[truncated]"
CLEANUP_TEMPERATURE = 0.1
CLEANUP_MAX_TOKENS = 16000

_FENCED_BLOCK_RE = re.compile(r"```(?:html?)?[ \t]*\n?(.*?)```", re.DOTALL | re.IGNORECASE)

_CLEANUP_PROMPT = """You are a content cleanup assistant. Clean up the following HTML content to make it more suitable for a beautiful book-like PDF.

Instructions:
1. Remove any remaining navigation, ads, or non-content elements
2. Fix any broken or messy formatting
3. Ensure headings follow proper hierarchy (h1 > h2 > h3)
4. Clean up excessive whitespace
5. Remove any tracking pixels or scripts
6. Keep all actual content intact
7. Return ONLY the cleaned HTML, no explanations

HTML to clean:
{html}

Cleaned HTML:"""

T = TypeVar("T")


@dataclass(slots=True)
class ProviderRequestError(RuntimeError):
    """Domain error raised for failed provider requests or invalid responses."""

    model: str
    stage: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} (model={self.model}, stage={self.stage})"


@dataclass(frozen=True, slots=True)
class CleanupResult:
    html: str
    cleaned: bool
    model: str | None = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class ProviderStatus:
    available: bool
    host: str | None = None
    model: str | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"available": self.available}
        if self.available:
            payload["host"] = self.host
            payload["model"] = self.model
        return payload


def _build_default_client(settings: ProviderSettings) -> Any:
    try:
        from openai import AsyncOpenAI
    except Exception as exc:  # pragma: no cover - environment-dependent
        raise ProviderRequestError(
            model=settings.embedding_model,
            stage="client_init",
            message=f"OpenAI SDK unavailable for provider client: {exc}",
        ) from exc

    return AsyncOpenAI(api_key=settings.api_key, base_url=settings.base_url, max_retries=0)


def truncate_for_cleanup(html: str, *, max_chars: int = MAX_CLEANUP_CHARS) -> str:
    if len(html) <= max_chars:
        return html
    return html[:max_chars] + TRUNCATION_MARKER


def unwrap_fenced_markup(response_text: str) -> str:
    """Return the body of the first fenced code block, or the stripped text."""

    text = response_text.strip()
    match = _FENCED_BLOCK_RE.search(text)
    if match:
        return match.group(1).strip()
    return text


def _extract_vector(response: Any, *, model: str, stage: str) -> np.ndarray:
    data = getattr(response, "data", None)
    if data is None and isinstance(response, dict):
        data = response.get("data")
    if not isinstance(data, list) or not data:
        raise ProviderRequestError(model=model, stage=stage, message="Embeddings response missing list 'data'")

    item = data[0]
    embedding = getattr(item, "embedding", None)
    if embedding is None and isinstance(item, dict):
        embedding = item.get("embedding")
    if not isinstance(embedding, (list, tuple)) or len(embedding) == 0:
        raise ProviderRequestError(model=model, stage=stage, message="Embedding row missing numeric vector")

    return np.asarray([float(value) for value in embedding], dtype=np.float32)


def _extract_completion_text(response: Any, *, model: str) -> str:
    choices = getattr(response, "choices", None)
    if not isinstance(choices, list) or not choices:
        raise ProviderRequestError(model=model, stage="cleanup", message="Completion response missing choices")

    first = choices[0]
    message = getattr(first, "message", None)
    content = getattr(message, "content", None) if message is not None else None
    if content is None and isinstance(first, dict):
        message_dict = first.get("message", {})
        if isinstance(message_dict, dict):
            content = message_dict.get("content")

    if isinstance(content, list):
        content = "".join(str(part.get("text", "")) for part in content if isinstance(part, dict))

    return str(content or "").strip()


class ProviderClient:
    """Embedding, cleanup and status calls with per-call timeouts and no retries."""

    def __init__(self, settings: ProviderSettings, *, client: Any | None = None) -> None:
        self._settings = settings
        self._client = client or _build_default_client(settings)

    @property
    def settings(self) -> ProviderSettings:
        return self._settings

    @property
    def embedding_model(self) -> str:
        return self._settings.embedding_model

    async def _with_timeout(self, call: Awaitable[T], *, timeout: float, model: str, stage: str) -> T:
        try:
            return await asyncio.wait_for(call, timeout=timeout)
        except asyncio.TimeoutError as exc:
            raise ProviderRequestError(
                model=model,
                stage=stage,
                message=f"Request timed out after {timeout:g}s",
            ) from exc
        except ProviderRequestError:
            raise
        except Exception as exc:
            raise ProviderRequestError(model=model, stage=stage, message=f"Request failed: {exc}") from exc

    async def embed_text(self, text: str) -> np.ndarray | None:
        """Embed ``text`` (first 2000 characters); ``None`` on any failure."""

        model = self._settings.embedding_model
        try:
            response = await self._with_timeout(
                self._client.embeddings.create(model=model, input=text[:MAX_EMBEDDING_CHARS]),
                timeout=self._settings.embedding_timeout_seconds,
                model=model,
                stage="embedding",
            )
            return _extract_vector(response, model=model, stage="embedding")
        except ProviderRequestError as error:
            logger.debug("Embedding unavailable: %s", error)
            return None

    async def cleanup_html(self, html: str) -> CleanupResult:
        """Ask the chat model to tidy ``html``; returns the original markup on failure."""

        if not html or not html.strip():
            raise ValueError("html cannot be empty")

        model = self._settings.cleanup_model
        prompt = _CLEANUP_PROMPT.format(html=truncate_for_cleanup(html))
        try:
            response = await self._with_timeout(
                self._client.chat.completions.create(
                    model=model,
                    messages=[{"role": "user", "content": prompt}],
                    temperature=CLEANUP_TEMPERATURE,
                    max_tokens=CLEANUP_MAX_TOKENS,
                    extra_body={"options": {"num_ctx": self._settings.context_size}},
                ),
                timeout=self._settings.generate_timeout_seconds,
                model=model,
                stage="cleanup",
            )
            text = _extract_completion_text(response, model=model)
        except ProviderRequestError as error:
            logger.warning("AI cleanup failed, using original content: %s", error)
            return CleanupResult(html=html, cleaned=False, model=model, error=str(error))

        if not text:
            logger.warning("AI cleanup returned an empty response, using original content")
            return CleanupResult(html=html, cleaned=False, model=model, error="empty response")

        cleaned = unwrap_fenced_markup(text)
        if not cleaned:
            return CleanupResult(html=html, cleaned=False, model=model, error="empty response")
        return CleanupResult(html=cleaned, cleaned=True, model=model)

    async def check_status(self) -> ProviderStatus:
        try:
            await self._with_timeout(
                self._client.models.list(),
                timeout=self._settings.status_timeout_seconds,
                model=self._settings.cleanup_model,
                stage="status",
            )
        except ProviderRequestError as error:
            logger.info("Model server unavailable: %s", error)
            return ProviderStatus(available=False)

        return ProviderStatus(available=True, host=self._settings.host, model=self._settings.cleanup_model)
