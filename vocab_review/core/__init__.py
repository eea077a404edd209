"""Framework-free building blocks for the review screens."""
