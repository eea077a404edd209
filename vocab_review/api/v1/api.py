"""API router for version 1."""
from fastapi import APIRouter

from vocab_review.api.v1.endpoints import memorize, words


api_router = APIRouter()
api_router.include_router(words.router)
api_router.include_router(memorize.router)
