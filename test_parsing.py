"""Tests for response parsing and enhancement content checks."""

import json

import pytest

from conftest import presentation_json
from deckpilot.parsing import (
    ParseOutcome,
    clean_enhanced_content,
    is_acceptable_enhancement,
    parse_presentation,
    parse_slides,
    strip_code_fence,
    strip_markup,
)


class TestParsePresentation:

    def test_valid_document(self):
        result = parse_presentation(presentation_json(slide_count=4))
        assert result.is_valid
        assert result.outcome is ParseOutcome.VALID
        assert result.presentation.title == "AI Deck"
        assert [s.type for s in result.presentation.slides] == ["title", "content", "content", "conclusion"]

    def test_json_inside_code_fence(self):
        text = "```json\n" + presentation_json() + "\n```"
        assert parse_presentation(text).is_valid

    @pytest.mark.parametrize("text", [
        "Here is your presentation!",
        "{not json",
        "",
        '["slides"]',
    ])
    def test_malformed(self, text):
        result = parse_presentation(text)
        assert result.outcome is ParseOutcome.MALFORMED
        assert result.presentation is None

    def test_deeply_nested_json_is_malformed(self):
        result = parse_presentation("[" * 100000)
        assert result.outcome is ParseOutcome.MALFORMED
        assert result.presentation is None

    @pytest.mark.parametrize("payload", [
        {"title": "No slides"},
        {"title": "Empty", "slides": []},
        {"title": "Wrong type", "slides": "slide one"},
        {"title": "Not objects", "slides": ["a", "b"]},
    ])
    def test_structurally_invalid(self, payload):
        result = parse_presentation(json.dumps(payload))
        assert result.outcome is ParseOutcome.STRUCTURALLY_INVALID
        assert not result.is_valid

    def test_missing_fields_are_coerced(self):
        payload = {"slides": [{"title": "Intro"}, {"content": "<p>Body</p>"}, {"title": 3, "type": "bogus"}]}
        presentation = parse_presentation(json.dumps(payload)).presentation
        assert presentation.title == "Intro"
        assert presentation.subtitle == ""
        assert presentation.slides[0].content == ""
        assert presentation.slides[1].title == ""
        assert presentation.slides[2].title == "3"
        assert [s.type for s in presentation.slides] == ["title", "content", "conclusion"]


class TestParseSlides:

    def test_valid_batch(self):
        slides = parse_slides('{"slides":[{"title":"A","content":"<p>a</p>","type":"content"}]}')
        assert len(slides) == 1
        assert slides[0].title == "A"

    @pytest.mark.parametrize("text", ["nope", '{"slides": []}', "[]"])
    def test_unusable_batch(self, text):
        assert parse_slides(text) is None

    def test_deeply_nested_batch_is_unusable(self):
        assert parse_slides('{"slides":' + "[" * 100000 + "]" * 100000 + "}") is None


class TestEnhancementChecks:

    def test_strip_markup(self):
        assert strip_markup("<h2>Title</h2> <p>Body text</p>") == "Title Body text"

    def test_strip_code_fence_leaves_plain_text(self):
        assert strip_code_fence("  <p>x</p> ") == "<p>x</p>"
        assert strip_code_fence("```html\n<p>x</p>\n```") == "<p>x</p>"

    def test_markdown_emphasis_rewritten(self):
        cleaned = clean_enhanced_content("<p>**Bold** and *italic*</p>")
        assert cleaned == "<p><strong>Bold</strong> and <em>italic</em></p>"

    def test_tagless_text_wrapped_in_paragraph(self):
        assert clean_enhanced_content("  Just words  ") == "<p>Just words</p>"

    def test_accepts_expanded_content(self):
        original = "<p>Solar power is cheap</p>"
        enhanced = "<h2>Solar</h2><ul><li>Solar power is cheap and getting cheaper</li></ul>"
        assert is_acceptable_enhancement(original, enhanced)

    def test_rejects_truncated_content(self):
        original = "<p>" + "word " * 50 + "</p>"
        assert not is_acceptable_enhancement(original, "<p>word word</p>")

    def test_boundary_at_eighty_percent(self):
        original = "x" * 100
        assert is_acceptable_enhancement(original, "<p>" + "y" * 80 + "</p>")
        assert not is_acceptable_enhancement(original, "<p>" + "y" * 79 + "</p>")
