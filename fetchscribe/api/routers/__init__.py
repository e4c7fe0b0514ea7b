"""API router package for endpoint composition."""

from .fetchers import api_create_fetchers_router
from .health import api_create_health_router
from .transcriptions import api_create_transcriptions_router

__all__ = ["api_create_fetchers_router", "api_create_health_router", "api_create_transcriptions_router"]
