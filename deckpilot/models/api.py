from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Literal, Union
from datetime import datetime

SlideType = Literal["title", "content", "conclusion"]

class PresentationForm(BaseModel):
    """Raw generation form as posted by the editor. Validated into a PresentationRequest."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    topic: Optional[str] = None
    audience: Optional[str] = None
    slide_count: Optional[Union[int, str]] = Field(default=None, alias="slideCount")
    duration: Optional[Union[int, str]] = None
    additional_info: Optional[str] = Field(default=None, alias="additionalInfo")

class PresentationRequest(BaseModel):
    """Validated, immutable generation request."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    topic: str
    audience: str
    slide_count: int = Field(..., ge=1, alias="slideCount")
    duration: int
    additional_info: Optional[str] = Field(default=None, alias="additionalInfo")

class Slide(BaseModel):
    """A single slide; content is an HTML fragment."""
    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    content: str = ""
    type: SlideType = "content"
    auto_enhanced: Optional[bool] = Field(default=None, alias="autoEnhanced")

class EditorSlide(Slide):
    """Slide as held by the editor. Its type and extra fields are passed through untouched."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: str = "content"

class Presentation(BaseModel):
    """Structured presentation document returned to the editor."""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    subtitle: str = ""
    slides: List[Slide] = Field(..., min_length=1)
    auto_enhanced: Optional[bool] = Field(default=None, alias="autoEnhanced")

class EnhancementResult(BaseModel):
    """Enhanced slide content."""
    content: str

class SlideContentRequest(BaseModel):
    """Request body for single-slide operations (enhance, speaker notes)."""
    title: Optional[str] = None
    content: Optional[str] = None

class SlidesPayload(BaseModel):
    """Batch of slides for enhance-all."""
    slides: List[EditorSlide]

class SpeakerNotes(BaseModel):
    """Speaker notes for one slide."""
    notes: str

class ProviderInfo(BaseModel):
    """Information about the upstream AI provider."""
    provider: str
    model: str
    base_url: str
    timeout: float
    max_tokens: int
    temperature: Optional[float] = None

class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: datetime
    cache_size: int
    provider_info: Optional[ProviderInfo] = None
    version: str = "1.0.0"
