import json
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from quote_relay.config import Settings
from quote_relay.errors import GeminiAPIError
from quote_relay.text.clip import clip

logger = logging.getLogger(__name__)
PAYLOAD_LOG_LIMIT = 4000
UNKNOWN_ERROR_MESSAGE = "Unknown Gemini API error"


@dataclass
class RawCandidate:
    text: str | None = None
    block_reason: str | None = None
    safety_categories: list[str] = field(default_factory=list)


class GeminiClient:
    """Gemini generateContent REST client with compact input/output logs."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self.transport = transport
        self.model = settings.gemini_model
        base_url = settings.gemini_base_url.rstrip("/")
        self.generate_url = f"{base_url}/v1beta/models/{self.model}:generateContent"

    async def generate(self, prompt: str) -> RawCandidate:
        request_body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.settings.gemini_temperature,
                "maxOutputTokens": self.settings.gemini_max_output_tokens,
            },
        }
        logger.info(
            "gemini.request model=%s temperature=%.2f max_output_tokens=%d prompt_chars=%d",
            self.model,
            self.settings.gemini_temperature,
            self.settings.gemini_max_output_tokens,
            len(prompt),
        )
        async with httpx.AsyncClient(
            timeout=self.settings.gemini_timeout_seconds,
            transport=self.transport,
        ) as client:
            http_response = await client.post(
                self.generate_url,
                params={"key": self.settings.gemini_api_key},
                json=request_body,
            )
        if http_response.is_error:
            message = self._error_message(http_response)
            logger.error(
                "gemini.error status_code=%d message=%s",
                http_response.status_code,
                clip(message, 500),
            )
            raise GeminiAPIError(http_response.status_code, message)

        response = http_response.json()
        logger.info(
            "gemini.response.payload=%s",
            clip(self._to_json(response), PAYLOAD_LOG_LIMIT),
        )
        candidate = self.parse_response(response)
        logger.info(
            "gemini.response has_text=%s block_reason=%s",
            candidate.text is not None,
            candidate.block_reason or "none",
        )
        return candidate

    @staticmethod
    def parse_response(response: Any) -> RawCandidate:
        if not isinstance(response, dict):
            return RawCandidate()
        candidate = RawCandidate()
        candidates = response.get("candidates") or []
        if candidates and isinstance(candidates[0], dict):
            parts = (candidates[0].get("content") or {}).get("parts") or []
            text = parts[0].get("text") if parts and isinstance(parts[0], dict) else None
            if isinstance(text, str):
                candidate.text = text
        feedback = response.get("promptFeedback") or {}
        if isinstance(feedback, dict) and feedback.get("blockReason"):
            candidate.block_reason = str(feedback["blockReason"])
            candidate.safety_categories = [
                str(rating.get("category", ""))
                for rating in feedback.get("safetyRatings") or []
                if isinstance(rating, dict)
            ]
        return candidate

    @staticmethod
    def _error_message(http_response: httpx.Response) -> str:
        try:
            body = http_response.json()
        except ValueError:
            return UNKNOWN_ERROR_MESSAGE
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            message = body["error"].get("message")
            if message:
                return str(message)
        return UNKNOWN_ERROR_MESSAGE

    @staticmethod
    def _to_json(payload: Any) -> str:
        try:
            return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError):
            return str(payload)
