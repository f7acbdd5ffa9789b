import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

class Settings:
    """Application configuration settings."""

    # OpenRouter Configuration (OpenAI-compatible chat completions)
    OPENROUTER_API_KEY: str = os.getenv("OPENROUTER_API_KEY", "")
    OPENROUTER_BASE_URL: str = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")
    OPENROUTER_MODEL: str = os.getenv("OPENROUTER_MODEL", "openai/gpt-3.5-turbo-0613")
    APP_TITLE: str = "AI Presentation Builder"

    # Sampling is fixed for consistent, non-repetitive structured output
    TEMPERATURE: float = 0.7
    TOP_P: float = 0.9
    FREQUENCY_PENALTY: float = 0.1
    PRESENCE_PENALTY: float = 0.1

    # Upstream call bounds (seconds)
    UPSTREAM_TIMEOUT: float = float(os.getenv("UPSTREAM_TIMEOUT", "60"))
    RETRY_BACKOFF: float = float(os.getenv("RETRY_BACKOFF", "0"))
    MAX_ATTEMPTS: int = 3

    # Per-call token budgets
    GENERATION_MAX_TOKENS: int = 3000
    ENHANCEMENT_MAX_TOKENS: int = 1500
    SPEAKER_NOTES_MAX_TOKENS: int = 800
    BATCH_MAX_TOKENS: int = 2000

    # Cache Configuration (seconds)
    CACHE_TTL_SECONDS: float = float(os.getenv("CACHE_TTL_SECONDS", str(30 * 60)))
    CACHE_SWEEP_INTERVAL: float = float(os.getenv("CACHE_SWEEP_INTERVAL", str(5 * 60)))

    # App Configuration
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:3000")
    PORT: int = int(os.getenv("PORT", "3000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Global settings instance
settings = Settings()
