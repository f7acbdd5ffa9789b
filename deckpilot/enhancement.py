"""Single-slide and batch content enhancement.

Every enhancement path degrades to deterministic content instead of failing:
one upstream call per request, no retries, and the structural enhancement
from ``deckpilot.fallback`` whenever the AI answer is missing or lossy.
Speaker notes are the exception and surface upstream failures to the caller.
"""

import enum
import logging
from dataclasses import dataclass
from typing import List, Optional

from deckpilot.config import Settings, settings as default_settings
from deckpilot.errors import DeckpilotError, ValidationError
from deckpilot.fallback import structural_enhancement
from deckpilot.llm_providers import OpenRouterClient
from deckpilot.models.api import EnhancementResult, Slide, SpeakerNotes
from deckpilot.parsing import (
    clean_enhanced_content,
    is_acceptable_enhancement,
    parse_slides,
    strip_markup,
)
from deckpilot.prompts import (
    build_batch_prompt,
    build_enhancement_prompt,
    build_speaker_notes_prompt,
    user_message,
)

logger = logging.getLogger(__name__)

VERY_SHORT_WORDS = 10
SHORT_WORDS = 25


class EnhancementMode(str, enum.Enum):
    VERY_SHORT = "very_short"
    SHORT = "short"
    UNSTRUCTURED = "unstructured"
    STRUCTURED = "structured"


@dataclass(frozen=True)
class ContentAnalysis:
    plain_text: str
    word_count: int
    has_lists: bool
    has_headings: bool
    mode: EnhancementMode


def analyze_content(content: str) -> ContentAnalysis:
    """Measure density and structure of a slide's HTML content."""
    plain_text = strip_markup(content)
    word_count = len(plain_text.split())
    has_lists = "<ul>" in content or "<ol>" in content
    has_headings = "<h1>" in content or "<h2>" in content

    if word_count < VERY_SHORT_WORDS:
        mode = EnhancementMode.VERY_SHORT
    elif word_count < SHORT_WORDS:
        mode = EnhancementMode.SHORT
    elif not has_lists and not has_headings and plain_text:
        mode = EnhancementMode.UNSTRUCTURED
    else:
        mode = EnhancementMode.STRUCTURED

    return ContentAnalysis(
        plain_text=plain_text,
        word_count=word_count,
        has_lists=has_lists,
        has_headings=has_headings,
        mode=mode,
    )


def require_slide_fields(title: Optional[str], content: Optional[str]) -> None:
    if not title or not content:
        raise ValidationError("Missing required fields: title, content")


class SlideEnhancer:
    """Stateless enhancement service around the upstream client."""

    def __init__(self, client: OpenRouterClient, settings: Optional[Settings] = None):
        self.client = client
        self.settings = settings or default_settings

    async def enhance(self, title: str, content: str) -> EnhancementResult:
        """Improve one slide's content, falling back to a structural rewrite.

        Raises:
            ValidationError: if title or content is empty.
        """
        require_slide_fields(title, content)
        analysis = analyze_content(content)
        prompt = build_enhancement_prompt(
            title,
            content,
            mode=analysis.mode.value,
            word_count=analysis.word_count,
            has_lists=analysis.has_lists,
            has_headings=analysis.has_headings,
        )

        try:
            response = await self.client.complete(
                user_message(prompt), self.settings.ENHANCEMENT_MAX_TOKENS
            )
        except DeckpilotError as e:
            logger.warning(f"AI enhancement failed, using structured fallback: {e}")
            return EnhancementResult(content=structural_enhancement(title, content))

        enhanced = clean_enhanced_content(response)
        if not is_acceptable_enhancement(content, enhanced):
            logger.info(f"Enhanced content for '{title}' lost too much text, using structured fallback")
            return EnhancementResult(content=structural_enhancement(title, content))

        return EnhancementResult(content=enhanced)

    async def enhance_all(self, slides: List[Slide]) -> List[Slide]:
        """Enhance a whole deck with a single upstream call.

        Any failure returns the input slides unchanged, in order.
        """
        if not slides:
            return []

        try:
            response = await self.client.complete(
                user_message(build_batch_prompt(slides)), self.settings.BATCH_MAX_TOKENS
            )
            enhanced = parse_slides(response)
        except Exception as e:
            logger.error(f"Batch enhance error: {e}")
            return list(slides)

        if enhanced is None or len(enhanced) != len(slides):
            logger.warning("Batch enhance returned unusable slides, keeping originals")
            return list(slides)

        # Editor-owned fields (type, ids, flags) are carried over untouched
        return [
            old.model_copy(update={
                "title": new.title or old.title,
                "content": new.content or old.content,
            })
            for old, new in zip(slides, enhanced)
        ]

    async def generate_speaker_notes(self, title: str, content: str) -> SpeakerNotes:
        """Ask for 3-5 talking points. Upstream errors propagate."""
        require_slide_fields(title, content)
        notes = await self.client.complete(
            user_message(build_speaker_notes_prompt(title, content)),
            self.settings.SPEAKER_NOTES_MAX_TOKENS,
        )
        return SpeakerNotes(notes=notes.strip())
