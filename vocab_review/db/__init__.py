"""Direct database access to the vocabulary table."""
