from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest

from folio.semantic.config import ProviderSettings
from folio.semantic.provider import (
    MAX_EMBEDDING_CHARS,
    TRUNCATION_MARKER,
    ProviderClient,
    truncate_for_cleanup,
    unwrap_fenced_markup,
)


class _FakeOpenAI:
    def __init__(
        self,
        *,
        embedding: list[float] | None = None,
        completion: str | None = "<p>clean</p>",
        fail: bool = False,
        delay: float = 0.0,
    ) -> None:
        self.embedding_calls: list[dict[str, object]] = []
        self.chat_calls: list[dict[str, object]] = []
        self.models_calls = 0
        self._embedding = embedding if embedding is not None else [0.1, 0.2, 0.3]
        self._completion = completion
        self._fail = fail
        self._delay = delay

        self.embeddings = SimpleNamespace(create=self._create_embedding)
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create_completion))
        self.models = SimpleNamespace(list=self._list_models)

    async def _pause_or_fail(self) -> None:
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._fail:
            raise RuntimeError("connection refused")

    async def _create_embedding(self, **kwargs: object) -> SimpleNamespace:
        self.embedding_calls.append(kwargs)
        await self._pause_or_fail()
        return SimpleNamespace(data=[SimpleNamespace(embedding=self._embedding)])

    async def _create_completion(self, **kwargs: object) -> SimpleNamespace:
        self.chat_calls.append(kwargs)
        await self._pause_or_fail()
        message = SimpleNamespace(content=self._completion)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    async def _list_models(self) -> SimpleNamespace:
        self.models_calls += 1
        await self._pause_or_fail()
        return SimpleNamespace(data=[SimpleNamespace(id="qwen2.5-coder:1.5b")])


def _client(fake: _FakeOpenAI, **overrides: float) -> ProviderClient:
    return ProviderClient(ProviderSettings(**overrides), client=fake)


def test_embed_text_truncates_input_and_returns_vector() -> None:
    fake = _FakeOpenAI(embedding=[1.0, 2.0])
    client = _client(fake)

    vector = asyncio.run(client.embed_text("x" * 5000))

    assert vector is not None
    assert vector.tolist() == [1.0, 2.0]
    assert len(fake.embedding_calls[0]["input"]) == MAX_EMBEDDING_CHARS
    assert fake.embedding_calls[0]["model"] == "nomic-embed-text"


def test_embed_text_returns_none_on_error() -> None:
    client = _client(_FakeOpenAI(fail=True))

    assert asyncio.run(client.embed_text("some text")) is None


def test_embed_text_returns_none_on_empty_vector() -> None:
    client = _client(_FakeOpenAI(embedding=[]))

    assert asyncio.run(client.embed_text("some text")) is None


def test_embed_text_returns_none_on_timeout() -> None:
    client = _client(_FakeOpenAI(delay=0.5), embedding_timeout_seconds=0.01)

    assert asyncio.run(client.embed_text("slow")) is None


def test_cleanup_unwraps_fenced_response_and_passes_context_size() -> None:
    fake = _FakeOpenAI(completion="Here you go:\n```html\n<h1>Title</h1>\n<p>Body</p>\n```")
    client = _client(fake)

    result = asyncio.run(client.cleanup_html("<div><h1>Title</h1><p>Body</p></div>"))

    assert result.cleaned is True
    assert result.html == "<h1>Title</h1>\n<p>Body</p>"
    call = fake.chat_calls[0]
    assert call["temperature"] == 0.1
    assert call["max_tokens"] == 16000
    assert call["extra_body"] == {"options": {"num_ctx": 16384}}
    assert "<h1>Title</h1>" in call["messages"][0]["content"]


def test_cleanup_accepts_raw_markup_response() -> None:
    client = _client(_FakeOpenAI(completion="  <p>tidy</p>  "))

    result = asyncio.run(client.cleanup_html("<p>messy</p>"))

    assert result.cleaned is True
    assert result.html == "<p>tidy</p>"


def test_cleanup_falls_back_to_original_on_failure_or_empty_response() -> None:
    original = "<p>keep me</p>"

    failed = asyncio.run(_client(_FakeOpenAI(fail=True)).cleanup_html(original))
    empty = asyncio.run(_client(_FakeOpenAI(completion="")).cleanup_html(original))

    assert failed.cleaned is False
    assert failed.html == original
    assert failed.error is not None
    assert empty.cleaned is False
    assert empty.html == original


def test_cleanup_falls_back_on_timeout() -> None:
    client = _client(_FakeOpenAI(delay=0.5), generate_timeout_seconds=0.01)

    result = asyncio.run(client.cleanup_html("<p>slow</p>"))

    assert result.cleaned is False
    assert "timed out" in (result.error or "")


def test_cleanup_rejects_empty_input() -> None:
    client = _client(_FakeOpenAI())

    with pytest.raises(ValueError, match="html cannot be empty"):
        asyncio.run(client.cleanup_html("   "))


def test_cleanup_prompt_truncates_long_markup() -> None:
    fake = _FakeOpenAI()
    client = _client(fake)

    asyncio.run(client.cleanup_html("<p>" + "a" * 20000 + "</p>"))

    assert TRUNCATION_MARKER in fake.chat_calls[0]["messages"][0]["content"]


def test_truncate_for_cleanup_keeps_short_markup() -> None:
    assert truncate_for_cleanup("<p>short</p>") == "<p>short</p>"
    assert truncate_for_cleanup("abcdef", max_chars=3) == "abc" + TRUNCATION_MARKER


def test_unwrap_fenced_markup_variants() -> None:
    assert unwrap_fenced_markup("```\n<p>a</p>\n```") == "<p>a</p>"
    assert unwrap_fenced_markup("```HTML\n<p>b</p>```") == "<p>b</p>"
    assert unwrap_fenced_markup("<p>c</p>") == "<p>c</p>"


def test_check_status_reports_availability() -> None:
    fake = _FakeOpenAI()
    status = asyncio.run(_client(fake).check_status())

    assert status.available is True
    assert status.to_dict() == {
        "available": True,
        "host": "http://localhost:11434",
        "model": "qwen2.5-coder:1.5b",
    }
    assert fake.models_calls == 1


def test_check_status_unavailable_on_error_or_timeout() -> None:
    failed = asyncio.run(_client(_FakeOpenAI(fail=True)).check_status())
    slow = asyncio.run(_client(_FakeOpenAI(delay=0.5), status_timeout_seconds=0.01).check_status())

    assert failed.to_dict() == {"available": False}
    assert slow.available is False
