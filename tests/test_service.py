import asyncio
import logging

import pytest

from quote_relay.config import Settings
from quote_relay.errors import (
    BlockedRequestError,
    EmptyQuoteError,
    GeminiAPIError,
    InvalidRequestError,
    NoCandidateError,
    UpstreamError,
)
from quote_relay.providers.llm.gemini import RawCandidate
from quote_relay.service.quote import QuoteService


class _FakeClient:
    def __init__(self, candidate: RawCandidate | None = None, error: Exception | None = None) -> None:
        self.candidate = candidate or RawCandidate()
        self.error = error
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> RawCandidate:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.candidate


def _service(client: _FakeClient) -> QuoteService:
    return QuoteService(settings=Settings(GEMINI_API_KEY="k"), client=client)  # type: ignore[arg-type]


def test_returns_sanitized_quote() -> None:
    client = _FakeClient(RawCandidate(text="  *You are enough.*  "))
    quote = asyncio.run(_service(client).get_quote("self doubt", "en"))
    assert quote.text == "You are enough."
    assert len(client.prompts) == 1
    assert '"self doubt"' in client.prompts[0]
    assert "in English language" in client.prompts[0]


@pytest.mark.parametrize("topic", [None, "", "   "])
def test_missing_topic_is_rejected_without_calling_upstream(topic) -> None:
    client = _FakeClient(RawCandidate(text="unused"))
    with pytest.raises(InvalidRequestError) as exc_info:
        asyncio.run(_service(client).get_quote(topic, "en"))
    assert exc_info.value.as_payload() == {"error": "Topic is required."}
    assert exc_info.value.status_code == 400
    assert client.prompts == []


@pytest.mark.parametrize("language", [None, "", "fr", "EN"])
def test_invalid_language_is_rejected(language) -> None:
    client = _FakeClient(RawCandidate(text="unused"))
    with pytest.raises(InvalidRequestError) as exc_info:
        asyncio.run(_service(client).get_quote("loss", language))
    assert exc_info.value.as_payload() == {"error": "Valid language ('en' or 'th') is required."}
    assert client.prompts == []


def test_upstream_failure_is_relayed() -> None:
    client = _FakeClient(error=GeminiAPIError(429, "Resource has been exhausted."))
    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(_service(client).get_quote("loss", "en"))
    assert exc_info.value.status_code == 429
    assert exc_info.value.as_payload() == {
        "error": "Failed to fetch quote from Gemini.",
        "details": "Resource has been exhausted.",
    }


def test_block_reason_is_reported(caplog) -> None:
    client = _FakeClient(RawCandidate(block_reason="SAFETY", safety_categories=["HARM_CATEGORY_HARASSMENT"]))
    with caplog.at_level(logging.WARNING), pytest.raises(BlockedRequestError) as exc_info:
        asyncio.run(_service(client).get_quote("anger", "th"))
    assert exc_info.value.status_code == 400
    assert exc_info.value.as_payload() == {
        "error": "Request blocked by Gemini: SAFETY",
        "details": "Categories: HARM_CATEGORY_HARASSMENT",
    }
    assert any("quote.blocked" in record.getMessage() for record in caplog.records)


def test_empty_text_after_cleaning() -> None:
    client = _FakeClient(RawCandidate(text=' "**" '))
    with pytest.raises(EmptyQuoteError) as exc_info:
        asyncio.run(_service(client).get_quote("loss", "en"))
    assert exc_info.value.status_code == 500
    assert exc_info.value.as_payload() == {"error": "Gemini returned an empty quote."}


def test_no_candidate_and_no_block_reason() -> None:
    client = _FakeClient(RawCandidate())
    with pytest.raises(NoCandidateError) as exc_info:
        asyncio.run(_service(client).get_quote("loss", "en"))
    assert exc_info.value.as_payload() == {"error": "Could not generate a suitable quote."}


def test_candidate_text_wins_over_block_reason() -> None:
    client = _FakeClient(RawCandidate(text="Still here.", block_reason="OTHER"))
    assert asyncio.run(_service(client).get_quote("loss", "en")).text == "Still here."
