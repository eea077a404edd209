"""Version 1 API package."""

from vocab_review.api.v1.api import api_router

__all__ = ["api_router"]
