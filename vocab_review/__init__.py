"""Vocabulary review service package."""
