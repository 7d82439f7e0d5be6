"""Post-processing of generated quote text.

The model is asked for a bare phrase but regularly wraps it in quotation marks
or markdown emphasis, and occasionally runs long. ``sanitize_quote`` undoes the
decoration and cuts the text down to a per-language word budget.

Thai has no spaces between words, so Thai text is tokenized with a rough
character-boundary heuristic. It is only a guard against runaway output and
over- or under-splits real Thai words; the effect is limited to where the
``...`` lands.
"""

import re
from dataclasses import dataclass

from quote_relay.text.language import Language

TRUNCATION_MARKER = "..."
QUOTE_CHARS = "\"'“„”"

_ASTERISKS = re.compile(r"\*")
_LEADING_QUOTES = re.compile(f"^[{QUOTE_CHARS}]+")
_TRAILING_QUOTE = re.compile(f"[{QUOTE_CHARS}]$")
_WHITESPACE = re.compile(r"\s+")
_THAI = r"\u0e00-\u0e7f"
_THAI_BOUNDARY = re.compile(rf"\s+|(?<=[{_THAI}])(?=\S)|(?<=\S)(?=[{_THAI}])")


@dataclass(frozen=True)
class SanitizedQuote:
    text: str
    language: Language
    word_count: int
    truncated: bool = False

    @property
    def empty(self) -> bool:
        return not self.text


def strip_decoration(raw_text: str) -> str:
    text = _ASTERISKS.sub("", raw_text).strip()
    text = _LEADING_QUOTES.sub("", text)
    text = _TRAILING_QUOTE.sub("", text)
    return text.strip()


def tokenize(text: str, language: Language) -> list[str]:
    if language is Language.TH:
        return [token for token in _THAI_BOUNDARY.split(text) if token]
    return [token for token in _WHITESPACE.split(text) if token]


def sanitize_quote(raw_text: str | None, language: Language) -> SanitizedQuote:
    text = strip_decoration(raw_text or "")
    words = tokenize(text, language)
    if len(words) > language.max_words:
        kept = words[: language.max_words]
        return SanitizedQuote(
            text=language.joiner.join(kept) + TRUNCATION_MARKER,
            language=language,
            word_count=len(words),
            truncated=True,
        )
    return SanitizedQuote(text=text, language=language, word_count=len(words))
