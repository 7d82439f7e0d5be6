from typing import Any

from pydantic import BaseModel, Field


class QuoteRequest(BaseModel):
    # Left untyped: the service turns missing or non-string values into the
    # endpoint's own error messages.
    topic: Any = Field(default=None, description="What the user is feeling or thinking about.")
    language: Any = Field(default=None, description="Output language, 'en' or 'th'.")


class QuoteResponse(BaseModel):
    quote: str


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
