"""Custom exception classes and error handling utilities."""
from typing import Any, Dict, Optional
from fastapi import HTTPException, status
from loguru import logger


class VocabReviewException(Exception):
    """Base exception for the application."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(VocabReviewException):
    """Store connection settings are missing or unusable."""
    pass


class RemoteQueryError(VocabReviewException):
    """The data store rejected or failed to answer a query."""
    pass


class EmptySelectionError(VocabReviewException):
    """A memorization session was requested without any word ids."""
    pass


class EmptyResultError(VocabReviewException):
    """The store answered, but nothing matched the requested words."""
    pass


def handle_configuration_error(error: ConfigurationError) -> HTTPException:
    """Handle missing store configuration."""
    logger.error(f"Configuration error: {error.message}")
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Vocabulary store is not configured."
    )


def handle_remote_query_error(error: RemoteQueryError) -> HTTPException:
    """Handle failed store queries."""
    logger.error(f"Remote query error: {error.message}")
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail="Unable to load words. Try again later."
    )


def handle_empty_selection_error(error: EmptySelectionError) -> HTTPException:
    """Handle requests that carry no selected words."""
    logger.warning(f"Empty selection: {error.message}")
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=error.message
    )
