"""
Shared test fixtures for pytest.

- FakeClock: manually advanced clock for cache TTL tests
- FakeLLMClient: scripted stand-in for OpenRouterClient that records calls
- cache, fake_llm, enhancer, generator: wired pipeline built on the fakes
"""

import json
from typing import Any, Dict, List

import pytest

from deckpilot.cache import CacheStore
from deckpilot.config import Settings
from deckpilot.enhancement import SlideEnhancer
from deckpilot.errors import NetworkError
from deckpilot.generation import PresentationGenerator
from deckpilot.models.api import PresentationRequest


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeLLMClient:
    """Returns scripted responses in order; the last one repeats.

    Exception instances in the script are raised instead of returned.
    """

    def __init__(self, *responses: Any):
        self.responses: List[Any] = list(responses) or [NetworkError("upstream unreachable")]
        self.calls: List[Dict[str, Any]] = []

    async def complete(self, messages, max_tokens):
        self.calls.append({"messages": messages, "max_tokens": max_tokens})
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, BaseException):
            raise item
        return item

    def get_current_provider_info(self):
        return {
            "provider": "openrouter",
            "model": "test-model",
            "base_url": "https://openrouter.test/api/v1",
            "timeout": 5.0,
            "max_tokens": 3000,
            "temperature": 0.7,
        }

    @property
    def call_count(self) -> int:
        return len(self.calls)


def presentation_json(slide_count: int = 3, title: str = "AI Deck") -> str:
    slides = [{"title": "Welcome", "content": "<h1>Welcome</h1>", "type": "title"}]
    for i in range(1, slide_count - 1):
        slides.append({
            "title": f"Topic {i}",
            "content": f"<h2>Topic {i}</h2><ul><li>Detail {i}</li></ul>",
            "type": "content",
        })
    slides.append({"title": "Wrap Up", "content": "<h1>Wrap Up</h1>", "type": "conclusion"})
    return json.dumps({"title": title, "subtitle": "Generated", "slides": slides})


@pytest.fixture
def test_settings():
    settings = Settings()
    settings.RETRY_BACKOFF = 0.0
    settings.CACHE_TTL_SECONDS = 30 * 60
    return settings


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock, test_settings):
    return CacheStore(ttl=test_settings.CACHE_TTL_SECONDS, clock=clock)


@pytest.fixture
def fake_llm():
    return FakeLLMClient()


@pytest.fixture
def enhancer(fake_llm, test_settings):
    return SlideEnhancer(fake_llm, test_settings)


@pytest.fixture
def generator(fake_llm, cache, enhancer, test_settings):
    return PresentationGenerator(fake_llm, cache, enhancer, test_settings)


@pytest.fixture
def climate_request():
    return PresentationRequest(
        topic="Climate Change Solutions",
        audience="business",
        slide_count=5,
        duration=30,
    )
