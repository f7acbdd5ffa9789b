"""Error taxonomy for the generation and enhancement pipeline."""

from typing import Optional


class DeckpilotError(Exception):
    """Base class for all pipeline errors."""


class ValidationError(DeckpilotError, ValueError):
    """Required input fields are missing or invalid. Never retried."""


class UpstreamError(DeckpilotError):
    """The AI endpoint answered with a non-success response."""

    def __init__(self, status: int, status_text: str = "", body: Optional[str] = None):
        self.status = status
        self.status_text = status_text
        self.body = body or ""
        super().__init__(f"OpenRouter API Error: {status} {status_text} - {self.body}")


class NetworkError(DeckpilotError):
    """Transport failure or timeout talking to the AI endpoint."""


class MalformedResponseError(DeckpilotError):
    """The AI answered, but the output could not be used."""
