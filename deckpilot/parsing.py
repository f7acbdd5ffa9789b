"""Interpret raw model output.

Presentation output is parsed and then validated into a tagged
``ParseResult``. Enhancement output is not parsed; it is cleaned up and then
judged on how much of the original text survived.
"""

import enum
import json
import re
from dataclasses import dataclass
from typing import Any, List, Optional

from deckpilot.models.api import Presentation, Slide

_TAG_RE = re.compile(r"<[^>]*>")
_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?\s*```$", re.DOTALL)
_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_ITALIC_RE = re.compile(r"\*(.*?)\*")

SLIDE_TYPES = ("title", "content", "conclusion")

# Enhanced text must keep at least this share of the original's characters
MIN_RETAINED_RATIO = 0.8


class ParseOutcome(enum.Enum):
    VALID = "valid"
    MALFORMED = "malformed"
    STRUCTURALLY_INVALID = "structurally_invalid"


@dataclass(frozen=True)
class ParseResult:
    outcome: ParseOutcome
    presentation: Optional[Presentation] = None
    error: str = ""

    @property
    def is_valid(self) -> bool:
        return self.outcome is ParseOutcome.VALID


def strip_markup(html: str) -> str:
    """Remove HTML tags and surrounding whitespace."""
    return _TAG_RE.sub("", html or "").strip()


def strip_code_fence(text: str) -> str:
    """Unwrap a single markdown code fence around the whole text, if present."""
    text = (text or "").strip()
    match = _FENCE_RE.match(text)
    return match.group(1).strip() if match else text


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _coerce_slides(raw: Any) -> Optional[List[Slide]]:
    """Build slides from decoded JSON; None if it is not a non-empty list of objects."""
    if not isinstance(raw, list) or not raw:
        return None
    if not all(isinstance(item, dict) for item in raw):
        return None

    last = len(raw) - 1
    slides = []
    for index, item in enumerate(raw):
        slide_type = item.get("type")
        if slide_type not in SLIDE_TYPES:
            # Infer from position: first is the title, last the conclusion
            if index == 0:
                slide_type = "title"
            elif index == last:
                slide_type = "conclusion"
            else:
                slide_type = "content"
        slides.append(Slide(
            title=_as_text(item.get("title")),
            content=_as_text(item.get("content")),
            type=slide_type,
        ))
    return slides


def parse_presentation(text: str) -> ParseResult:
    """Classify model output as a valid, malformed or structurally invalid presentation."""
    try:
        data = json.loads(strip_code_fence(text))
    except (ValueError, TypeError, RecursionError) as e:
        return ParseResult(ParseOutcome.MALFORMED, error=f"Invalid JSON: {e}")

    if not isinstance(data, dict):
        return ParseResult(ParseOutcome.MALFORMED, error="Top-level JSON value is not an object")

    slides = _coerce_slides(data.get("slides"))
    if slides is None:
        return ParseResult(ParseOutcome.STRUCTURALLY_INVALID, error="Invalid presentation structure")

    title = data.get("title")
    if not isinstance(title, str) or not title.strip():
        title = slides[0].title
    subtitle = data.get("subtitle")

    presentation = Presentation(
        title=title,
        subtitle=subtitle if isinstance(subtitle, str) else "",
        slides=slides,
    )
    return ParseResult(ParseOutcome.VALID, presentation=presentation)


def parse_slides(text: str) -> Optional[List[Slide]]:
    """Parse ``{"slides": [...]}`` batch output. None when unusable."""
    try:
        data = json.loads(strip_code_fence(text))
    except (ValueError, TypeError, RecursionError):
        return None
    if not isinstance(data, dict):
        return None
    return _coerce_slides(data.get("slides"))


def clean_enhanced_content(text: str) -> str:
    """Normalize enhanced slide content into an HTML fragment."""
    content = strip_code_fence(text)

    # Markdown emphasis that slipped through
    content = _BOLD_RE.sub(r"<strong>\1</strong>", content)
    content = _ITALIC_RE.sub(r"<em>\1</em>", content)

    if content and "<" not in content:
        content = f"<p>{content}</p>"
    return content


def is_acceptable_enhancement(original: str, enhanced: str) -> bool:
    """Reject output whose visible text shrank below the retained ratio."""
    return len(strip_markup(enhanced)) >= len(strip_markup(original)) * MIN_RETAINED_RATIO
