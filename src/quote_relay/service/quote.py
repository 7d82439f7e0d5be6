import logging
from typing import Any

from quote_relay.config import Settings, get_settings
from quote_relay.errors import (
    BlockedRequestError,
    EmptyQuoteError,
    GeminiAPIError,
    InvalidRequestError,
    NoCandidateError,
    UpstreamError,
)
from quote_relay.prompts import build_prompt
from quote_relay.providers.llm.gemini import GeminiClient
from quote_relay.text.clip import clip
from quote_relay.text.language import Language
from quote_relay.text.sanitizer import SanitizedQuote, sanitize_quote

logger = logging.getLogger(__name__)

TOPIC_REQUIRED = "Topic is required."
LANGUAGE_REQUIRED = "Valid language ('en' or 'th') is required."


class QuoteService:
    def __init__(self, settings: Settings | None = None, client: GeminiClient | None = None) -> None:
        self.settings = settings or get_settings()
        self.client = client or GeminiClient(self.settings)

    async def get_quote(self, topic: Any, language: Any) -> SanitizedQuote:
        topic, lang = self.validate(topic, language)
        logger.info("quote.request language=%s topic=%s", lang.value, clip(topic, 80))
        prompt = build_prompt(topic, lang)

        try:
            candidate = await self.client.generate(prompt)
        except GeminiAPIError as exc:
            raise UpstreamError(exc.status_code, exc.message) from exc

        if candidate.text is not None:
            quote = sanitize_quote(candidate.text, lang)
            if quote.empty:
                logger.warning("quote.empty language=%s raw=%r", lang.value, clip(candidate.text, 200))
                raise EmptyQuoteError()
            logger.info(
                "quote.ok language=%s words=%d truncated=%s chars=%d",
                lang.value,
                quote.word_count,
                quote.truncated,
                len(quote.text),
            )
            return quote
        if candidate.block_reason:
            logger.warning(
                "quote.blocked reason=%s categories=%s",
                candidate.block_reason,
                candidate.safety_categories,
            )
            raise BlockedRequestError(candidate.block_reason, candidate.safety_categories)
        logger.warning("quote.no_candidate language=%s", lang.value)
        raise NoCandidateError()

    @staticmethod
    def validate(topic: Any, language: Any) -> tuple[str, Language]:
        # Non-string values count as missing.
        cleaned = topic.strip() if isinstance(topic, str) else ""
        if not cleaned:
            raise InvalidRequestError(TOPIC_REQUIRED)
        lang = Language.parse(language)
        if lang is None:
            raise InvalidRequestError(LANGUAGE_REQUIRED)
        return cleaned, lang
