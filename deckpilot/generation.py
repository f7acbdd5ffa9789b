"""Presentation generation pipeline.

Per request: cache lookup, then up to ``MAX_ATTEMPTS`` sequential upstream
attempts, each validated by ``parse_presentation``. An unusable answer counts
as a failed attempt just like a transport error. When every attempt fails the
deterministic fallback presentation is used. The final result, AI-derived or
not, is written through to the cache.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_none,
    wait_random,
)

from deckpilot.cache import CacheStore, fingerprint
from deckpilot.config import Settings, settings as default_settings
from deckpilot.enhancement import SlideEnhancer
from deckpilot.errors import (
    MalformedResponseError,
    NetworkError,
    UpstreamError,
    ValidationError,
)
from deckpilot.fallback import fallback_presentation
from deckpilot.llm_providers import OpenRouterClient
from deckpilot.models.api import Presentation, PresentationForm, PresentationRequest
from deckpilot.parsing import parse_presentation
from deckpilot.prompts import build_presentation_prompt, user_message

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (UpstreamError, NetworkError, MalformedResponseError)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def build_presentation_request(form: PresentationForm) -> PresentationRequest:
    """Validate a raw generation form.

    Raises:
        ValidationError: if topic, audience, slideCount or duration is missing
            or not usable.
    """
    if (_is_blank(form.topic) or _is_blank(form.audience)
            or _is_blank(form.slide_count) or _is_blank(form.duration)):
        raise ValidationError("Missing required fields: topic, audience, slideCount, duration")

    try:
        slide_count = int(form.slide_count)
        duration = int(form.duration)
    except (TypeError, ValueError):
        raise ValidationError("slideCount and duration must be integers")

    if slide_count < 1:
        raise ValidationError("slideCount must be at least 1")
    if duration < 1:
        raise ValidationError("duration must be at least 1")

    return PresentationRequest(
        topic=form.topic.strip(),
        audience=form.audience.strip(),
        slide_count=slide_count,
        duration=duration,
        additional_info=form.additional_info or None,
    )


def _log_attempt(retry_state: RetryCallState) -> None:
    logger.info(f"Attempt {retry_state.attempt_number} to generate presentation")


def _log_failed_attempt(retry_state: RetryCallState) -> None:
    logger.warning(f"Attempt {retry_state.attempt_number} failed: {retry_state.outcome.exception()}")


class PresentationGenerator:
    """Cached, retrying presentation generator with a deterministic fallback."""

    def __init__(
        self,
        client: OpenRouterClient,
        cache: CacheStore,
        enhancer: SlideEnhancer,
        settings: Optional[Settings] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        self.client = client
        self.cache = cache
        self.enhancer = enhancer
        self.settings = settings or default_settings
        self._sleep = sleep or asyncio.sleep

    async def generate(self, request: PresentationRequest) -> Presentation:
        """Return a presentation for ``request``. Never raises for upstream failures."""
        key = fingerprint(request)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info("Returning cached base presentation")
            return cached.value.model_copy(deep=True)

        result = await self._generate_uncached(request)
        self.cache.put(key, result)
        return result.model_copy(deep=True)

    def _retrying(self) -> AsyncRetrying:
        """Sequential attempts; only pipeline errors are retried."""
        backoff = self.settings.RETRY_BACKOFF
        if backoff > 0:
            wait = wait_exponential(multiplier=backoff, max=backoff * 8) + wait_random(0, backoff * 0.1)
        else:
            wait = wait_none()
        return AsyncRetrying(
            stop=stop_after_attempt(self.settings.MAX_ATTEMPTS),
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            wait=wait,
            sleep=self._sleep,
            before=_log_attempt,
            before_sleep=_log_failed_attempt,
        )

    async def _attempt(self, prompt: str) -> Presentation:
        response = await self.client.complete(
            user_message(prompt), self.settings.GENERATION_MAX_TOKENS
        )
        parsed = parse_presentation(response)
        if not parsed.is_valid:
            raise MalformedResponseError(f"{parsed.outcome.value}: {parsed.error}")
        return parsed.presentation

    async def _generate_uncached(self, request: PresentationRequest) -> Presentation:
        prompt = build_presentation_prompt(request)
        try:
            return await self._retrying()(self._attempt, prompt)
        except RetryError as e:
            logger.warning(
                f"Using fallback presentation for topic '{request.topic}': "
                f"{e.last_attempt.exception()}"
            )
            return fallback_presentation(request)

    async def generate_and_enhance(self, request: PresentationRequest) -> Presentation:
        """Generate, then enhance every slide. A failing slide keeps its original content."""
        key = fingerprint(request, enhanced=True)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info("Returning cached enhanced presentation")
            return cached.value.model_copy(deep=True)

        base = await self.generate(request)

        slides = []
        for index, slide in enumerate(base.slides, 1):
            try:
                enhanced = await self.enhancer.enhance(slide.title, slide.content)
                slides.append(slide.model_copy(update={"content": enhanced.content, "auto_enhanced": True}))
            except Exception as e:
                logger.error(f"Failed to enhance slide {index}: {e}")
                slides.append(slide.model_copy(update={"auto_enhanced": False}))

        result = base.model_copy(update={"slides": slides, "auto_enhanced": True})
        self.cache.put(key, result)
        return result.model_copy(deep=True)
