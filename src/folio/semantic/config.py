"""Runtime configuration for the embedding and cleanup provider."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping


DEFAULT_OLLAMA_HOST = "http://localhost:11434"
DEFAULT_API_KEY = "ollama"
DEFAULT_CLEANUP_MODEL = "qwen2.5-coder:1.5b"
DEFAULT_EMBEDDING_MODEL = "nomic-embed-text"
DEFAULT_CONTEXT_SIZE = 16384
DEFAULT_STATUS_TIMEOUT_SECONDS = 3.0
DEFAULT_GENERATE_TIMEOUT_SECONDS = 180.0
DEFAULT_EMBEDDING_TIMEOUT_SECONDS = 30.0


def _parse_positive_int(*, name: str, raw_value: str, minimum: int = 1) -> int:
    try:
        value = int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


def _parse_positive_float(*, name: str, raw_value: str, minimum: float = 0.001) -> float:
    try:
        value = float(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


@dataclass(frozen=True, slots=True)
class ProviderSettings:
    """Validated settings for the OpenAI-compatible model server (Ollama by default)."""

    host: str = DEFAULT_OLLAMA_HOST
    api_key: str = DEFAULT_API_KEY
    cleanup_model: str = DEFAULT_CLEANUP_MODEL
    embedding_model: str = DEFAULT_EMBEDDING_MODEL
    context_size: int = DEFAULT_CONTEXT_SIZE
    status_timeout_seconds: float = DEFAULT_STATUS_TIMEOUT_SECONDS
    generate_timeout_seconds: float = DEFAULT_GENERATE_TIMEOUT_SECONDS
    embedding_timeout_seconds: float = DEFAULT_EMBEDDING_TIMEOUT_SECONDS

    @property
    def base_url(self) -> str:
        return f"{self.host}/v1"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ProviderSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        host = source.get("OLLAMA_HOST", DEFAULT_OLLAMA_HOST).strip()
        api_key = source.get("OLLAMA_API_KEY", DEFAULT_API_KEY).strip()
        cleanup_model = source.get("OLLAMA_MODEL", DEFAULT_CLEANUP_MODEL).strip()
        embedding_model = source.get("EMBEDDING_MODEL", DEFAULT_EMBEDDING_MODEL).strip()
        context_raw = source.get("OLLAMA_CONTEXT_SIZE", str(DEFAULT_CONTEXT_SIZE)).strip()
        timeout_raw = source.get(
            "OLLAMA_GENERATE_TIMEOUT_SECONDS",
            str(DEFAULT_GENERATE_TIMEOUT_SECONDS),
        ).strip()

        if not host:
            raise ValueError("OLLAMA_HOST cannot be empty")
        if not (host.startswith("http://") or host.startswith("https://")):
            raise ValueError("OLLAMA_HOST must start with http:// or https://")
        if not api_key:
            raise ValueError("OLLAMA_API_KEY cannot be empty")
        if not cleanup_model:
            raise ValueError("OLLAMA_MODEL cannot be empty")
        if not embedding_model:
            raise ValueError("EMBEDDING_MODEL cannot be empty")

        context_size = _parse_positive_int(name="OLLAMA_CONTEXT_SIZE", raw_value=context_raw, minimum=512)
        generate_timeout = _parse_positive_float(
            name="OLLAMA_GENERATE_TIMEOUT_SECONDS",
            raw_value=timeout_raw,
            minimum=1.0,
        )

        return cls(
            host=host.rstrip("/"),
            api_key=api_key,
            cleanup_model=cleanup_model,
            embedding_model=embedding_model,
            context_size=context_size,
            generate_timeout_seconds=generate_timeout,
        )
