from __future__ import annotations

import pytest

from folio.semantic.config import (
    DEFAULT_CLEANUP_MODEL,
    DEFAULT_EMBEDDING_MODEL,
    DEFAULT_GENERATE_TIMEOUT_SECONDS,
    ProviderSettings,
)


def test_settings_defaults_target_local_ollama() -> None:
    settings = ProviderSettings.from_env({})

    assert settings.host == "http://localhost:11434"
    assert settings.base_url == "http://localhost:11434/v1"
    assert settings.cleanup_model == DEFAULT_CLEANUP_MODEL
    assert settings.embedding_model == DEFAULT_EMBEDDING_MODEL
    assert settings.generate_timeout_seconds == DEFAULT_GENERATE_TIMEOUT_SECONDS
    assert settings.status_timeout_seconds == 3.0
    assert settings.embedding_timeout_seconds == 30.0


def test_settings_read_overrides_from_env() -> None:
    settings = ProviderSettings.from_env(
        {
            "OLLAMA_HOST": "https://models.internal:8443/",
            "OLLAMA_MODEL": "llama3.2",
            "EMBEDDING_MODEL": "mxbai-embed-large",
            "OLLAMA_CONTEXT_SIZE": "32768",
            "OLLAMA_GENERATE_TIMEOUT_SECONDS": "45",
        }
    )

    assert settings.base_url == "https://models.internal:8443/v1"
    assert settings.cleanup_model == "llama3.2"
    assert settings.embedding_model == "mxbai-embed-large"
    assert settings.context_size == 32768
    assert settings.generate_timeout_seconds == 45.0


def test_settings_validate_host_scheme() -> None:
    with pytest.raises(ValueError, match="OLLAMA_HOST"):
        ProviderSettings.from_env({"OLLAMA_HOST": "localhost:11434"})


def test_settings_reject_invalid_numbers() -> None:
    with pytest.raises(ValueError, match="OLLAMA_CONTEXT_SIZE"):
        ProviderSettings.from_env({"OLLAMA_CONTEXT_SIZE": "lots"})

    with pytest.raises(ValueError, match="OLLAMA_GENERATE_TIMEOUT_SECONDS"):
        ProviderSettings.from_env({"OLLAMA_GENERATE_TIMEOUT_SECONDS": "0"})


def test_settings_reject_empty_models() -> None:
    with pytest.raises(ValueError, match="EMBEDDING_MODEL"):
        ProviderSettings.from_env({"EMBEDDING_MODEL": "  "})
