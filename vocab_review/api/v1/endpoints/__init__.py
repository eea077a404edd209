"""API endpoint modules for v1."""

from vocab_review.api.v1.endpoints import memorize, words

__all__ = ["memorize", "words"]
