"""
Prompt text for presentation generation, slide enhancement and speaker notes.
Tuned for gpt-3.5-class chat models that must answer with strict JSON or bare HTML.
"""

from typing import List

from deckpilot.models.api import PresentationRequest, Slide
from deckpilot.parsing import strip_markup

PRESENTATION_FORMAT = """{
  "title": "Presentation Title",
  "subtitle": "Brief subtitle",
  "slides": [
    {
      "title": "Slide Title",
      "content": "HTML content with h1/h2/p/ul/li tags",
      "type": "title|content|conclusion"
    }
  ]
}"""

# Keyed by EnhancementMode value; only shapes the wording of the request
ENHANCEMENT_INSTRUCTIONS = {
    "very_short": """
- This content is too brief ({word_count} words). Expand significantly with:
  * 3-5 detailed bullet points explaining key aspects
  * Specific examples or use cases
  * Supporting details that add value
  * Clear structure with headings if appropriate""",
    "short": """
- This content needs expansion ({word_count} words). Add:
  * 2-3 additional bullet points with specifics
  * More detailed explanations
  * Examples or supporting evidence
  * Better structure and flow""",
    "unstructured": """
- Convert this plain text into structured content with:
  * Clear headings (h2) for main topics
  * Bullet points (ul/li) for key information
  * Logical flow and hierarchy
  * Professional formatting""",
    "structured": """
- Improve existing structure by:
  * Making bullet points more specific and actionable
  * Adding missing details or examples
  * Improving clarity and professional tone
  * Ensuring logical flow and hierarchy""",
}

CONTENT_TYPE_LABELS = {
    "very_short": "Very short",
    "short": "Short",
    "unstructured": "Adequate length",
    "structured": "Adequate length",
}

ENHANCEMENT_RULES = """SPECIFIC ENHANCEMENT RULES:
1. Always use proper HTML structure (h1, h2, p, ul, li)
2. Make bullet points specific and actionable
3. Add concrete examples where relevant
4. Use professional, engaging language
5. Ensure content matches the slide title
6. Keep formatting clean and readable
7. If content is about benefits, add specific value propositions
8. If content is about processes, add clear steps
9. If content is about features, add practical applications

RETURN FORMAT: Return ONLY the enhanced HTML content, no explanations or additional text."""

def user_message(prompt: str) -> List[dict]:
    """Wrap a prompt as the single user-role message sent upstream."""
    return [{"role": "user", "content": prompt}]

def build_presentation_prompt(request: PresentationRequest) -> str:
    """Prompt for a complete presentation as strict JSON."""
    additional = f"- Additional: {request.additional_info}\n" if request.additional_info else ""
    return f"""Create a professional presentation about "{request.topic}" for {request.audience} audience.
Requirements:
- {request.slide_count} slides total
- {request.duration}-minute presentation duration
{additional}
Return ONLY valid JSON in this exact format:
{PRESENTATION_FORMAT}

Make content engaging and professional. First slide = title, last slide = conclusion."""

def build_enhancement_prompt(title: str, content: str, mode: str, word_count: int,
                             has_lists: bool, has_headings: bool) -> str:
    """Context-aware prompt for improving a single slide."""
    instructions = ENHANCEMENT_INSTRUCTIONS[mode].format(word_count=word_count)
    return f"""You are an expert presentation consultant. Analyze and enhance this slide content:

SLIDE TITLE: "{title}"
CURRENT CONTENT: {content}

ANALYSIS CONTEXT:
- Word count: {word_count}
- Has bullet points: {str(has_lists).lower()}
- Has headings: {str(has_headings).lower()}
- Content type: {CONTENT_TYPE_LABELS[mode]}

ENHANCEMENT REQUIREMENTS:
{instructions}

{ENHANCEMENT_RULES}

ENHANCED CONTENT:"""

def build_batch_prompt(slides: List[Slide]) -> str:
    """Compact prompt enhancing a whole deck in one call."""
    entries = "|".join(
        f"{i}:{slide.title}-{strip_markup(slide.content)[:50]}"
        for i, slide in enumerate(slides, 1)
    )
    return f'Enhance slides: {entries} Return JSON:{{"slides":[{{"title":"","content":"","type":""}}]}}'

def build_speaker_notes_prompt(title: str, content: str) -> str:
    return f"""Generate helpful speaker notes for this presentation slide:

Title: {title}
Content: {content}

Provide 3-5 key talking points that a presenter should mention. Be concise and practical."""
