"""Deterministic, network-free content used when the AI path is unavailable."""

from html import escape
from typing import List

from deckpilot.models.api import PresentationRequest, Presentation, Slide
from deckpilot.parsing import strip_markup

# Below this many words the structural enhancement pads with generic points
SHORT_CONTENT_WORDS = 15

GENERIC_SUPPORTING_POINTS = [
    "Key benefit: Provides significant value to users",
    "Implementation: Easy to integrate and use",
    "Impact: Measurable improvements in efficiency",
    "Next steps: Ready for immediate deployment",
]


def fallback_presentation(request: PresentationRequest) -> Presentation:
    """Build a placeholder presentation from the request alone.

    Produces exactly ``slide_count`` slides when ``slide_count >= 2``. Smaller
    counts still get the title and conclusion slides.
    """
    topic = escape(request.topic)
    audience = escape(request.audience)

    slides: List[Slide] = [
        Slide(
            title=request.topic,
            content=f"<h1>{topic}</h1><p>A comprehensive presentation for {audience}</p>",
            type="title",
        )
    ]

    for number in range(1, request.slide_count - 1):
        slides.append(Slide(
            title=f"Key Point {number}",
            content=(
                f"<h2>Key Point {number}</h2>"
                f"<ul><li>Important information about {topic}</li>"
                "<li>Supporting details and examples</li>"
                "<li>Relevant data and insights</li></ul>"
            ),
            type="content",
        ))

    slides.append(Slide(
        title="Thank You",
        content="<h1>Thank You</h1><p>Questions &amp; Discussion</p>",
        type="conclusion",
    ))

    return Presentation(
        title=request.topic,
        subtitle=f"Presentation for {request.audience}",
        slides=slides,
    )


def structural_enhancement(title: str, content: str) -> str:
    """Rule-based enhancement of slide content. Never fails."""
    plain_text = strip_markup(content)
    heading = f"<h2>{escape(title)}</h2>"

    if len(plain_text.split()) < SHORT_CONTENT_WORDS:
        points = "\n".join(f"<li>{point}</li>" for point in GENERIC_SUPPORTING_POINTS)
        return f"{heading}\n<p>{plain_text}</p>\n<ul>\n{points}\n</ul>"

    if "<ul>" not in content and "<h2>" not in content:
        sentences = [s.strip() for s in plain_text.split(".") if s.strip()]
        if len(sentences) > 1:
            details = "".join(f"<li>{s}</li>" for s in sentences[1:])
            return f"{heading}\n<p>{sentences[0]}.</p>\n<ul>\n{details}\n</ul>"

    return content if "<h2>" in content else f"{heading}{content}"
