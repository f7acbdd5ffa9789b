from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager, suppress
import asyncio
import logging

from deckpilot.config import settings
from deckpilot.cache import CacheStore, run_sweeper
from deckpilot.enhancement import SlideEnhancer
from deckpilot.errors import ValidationError
from deckpilot.generation import PresentationGenerator
from deckpilot.llm_providers import OpenRouterClient
from deckpilot.api.health import router as health_router
from deckpilot.api.presentations import router as presentations_router

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the pipeline services and run the cache sweeper for the app's lifetime."""
    logger.info("Starting AI Presentation Builder backend...")

    cache = CacheStore(ttl=settings.CACHE_TTL_SECONDS)
    llm_client = OpenRouterClient(settings)
    enhancer = SlideEnhancer(llm_client, settings)

    app.state.cache = cache
    app.state.llm_client = llm_client
    app.state.enhancer = enhancer
    app.state.generator = PresentationGenerator(llm_client, cache, enhancer, settings)

    logger.info(f"Frontend URL: {settings.FRONTEND_URL}")
    logger.info(f"OpenRouter API configured: {'Yes' if settings.OPENROUTER_API_KEY else 'No'}")
    logger.info(f"Cache enabled: Yes ({settings.CACHE_TTL_SECONDS / 60:g} minutes)")

    sweeper = asyncio.create_task(run_sweeper(cache, settings.CACHE_SWEEP_INTERVAL))
    try:
        yield
    finally:
        sweeper.cancel()
        with suppress(asyncio.CancelledError):
            await sweeper
        await llm_client.get_client().close()
        logger.info("Shutting down AI Presentation Builder backend...")

# Create FastAPI app
app = FastAPI(
    title="AI Presentation Builder",
    description="Presentation generation and slide enhancement backed by OpenRouter",
    version="1.0.0",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router)
app.include_router(presentations_router)

def jsonable_errors(exc: RequestValidationError) -> list:
    """Pydantic error list without non-serializable context objects."""
    return [{"loc": list(err.get("loc", ())), "msg": err.get("msg", "")} for err in exc.errors()]

# Exception handlers
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})

@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": jsonable_errors(exc)})

@app.exception_handler(404)
async def not_found_handler(request: Request, exc: Exception):
    return JSONResponse(status_code=404, content={"error": "Endpoint not found"})

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "deckpilot.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=True,
        log_level="info"
    )
