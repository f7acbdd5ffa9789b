from fastapi import Request

from deckpilot.cache import CacheStore
from deckpilot.enhancement import SlideEnhancer
from deckpilot.generation import PresentationGenerator
from deckpilot.llm_providers import OpenRouterClient

# Services are built once in the app lifespan and stored on app.state

def get_generator(request: Request) -> PresentationGenerator:
    return request.app.state.generator

def get_enhancer(request: Request) -> SlideEnhancer:
    return request.app.state.enhancer

def get_cache(request: Request) -> CacheStore:
    return request.app.state.cache

def get_llm_client(request: Request) -> OpenRouterClient:
    return request.app.state.llm_client
