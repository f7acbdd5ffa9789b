from fastapi import APIRouter, Depends
from datetime import datetime, timezone

from deckpilot.api.deps import get_cache, get_llm_client
from deckpilot.cache import CacheStore
from deckpilot.llm_providers import OpenRouterClient
from deckpilot.models.api import HealthResponse, ProviderInfo

router = APIRouter(prefix="/api", tags=["health"])

@router.get("/health", response_model=HealthResponse)
async def health_check(cache: CacheStore = Depends(get_cache), llm_client: OpenRouterClient = Depends(get_llm_client)):
    """Health check with cache size and provider configuration."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        cache_size=len(cache),
        provider_info=ProviderInfo(**llm_client.get_current_provider_info()),
    )
