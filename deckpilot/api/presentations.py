from fastapi import APIRouter, Depends, HTTPException
import logging

from deckpilot.api.deps import get_enhancer, get_generator
from deckpilot.enhancement import SlideEnhancer, require_slide_fields
from deckpilot.generation import PresentationGenerator, build_presentation_request
from deckpilot.models.api import (
    EnhancementResult,
    Presentation,
    PresentationForm,
    SlideContentRequest,
    SlidesPayload,
    SpeakerNotes,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["presentations"])

@router.post("/generate-presentation", response_model=Presentation, response_model_exclude_none=True)
async def generate_presentation(form: PresentationForm, generator: PresentationGenerator = Depends(get_generator)):
    """Generate a presentation from the editor's creation form."""
    request = build_presentation_request(form)
    logger.info(f"Generating presentation for topic: {request.topic}")
    return await generator.generate(request)

@router.post("/generate-and-enhance-presentation", response_model=Presentation, response_model_exclude_none=True)
async def generate_and_enhance_presentation(form: PresentationForm, generator: PresentationGenerator = Depends(get_generator)):
    """Generate a presentation and auto-enhance each slide."""
    request = build_presentation_request(form)
    logger.info(f"Generating enhanced presentation for topic: {request.topic}")
    return await generator.generate_and_enhance(request)

@router.post("/enhance-slide", response_model=EnhancementResult)
async def enhance_slide(body: SlideContentRequest, enhancer: SlideEnhancer = Depends(get_enhancer)):
    """Enhance a single slide's content."""
    return await enhancer.enhance(body.title, body.content)

@router.post("/enhance-all-slides", response_model=SlidesPayload, response_model_exclude_none=True)
async def enhance_all_slides(body: SlidesPayload, enhancer: SlideEnhancer = Depends(get_enhancer)):
    """Enhance every slide with one upstream call; originals come back on failure."""
    slides = await enhancer.enhance_all(body.slides)
    return SlidesPayload(slides=slides)

@router.post("/generate-speaker-notes", response_model=SpeakerNotes)
async def generate_speaker_notes(body: SlideContentRequest, enhancer: SlideEnhancer = Depends(get_enhancer)):
    """Generate speaker notes. No cache and no fallback."""
    require_slide_fields(body.title, body.content)
    try:
        return await enhancer.generate_speaker_notes(body.title, body.content)
    except Exception as e:
        logger.error(f"Generate speaker notes error: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to generate speaker notes: {str(e)}")
