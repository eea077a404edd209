"""Screen controllers for the word list and memorization views."""

from vocab_review.screens.memorization import MemorizationScreen
from vocab_review.screens.word_list import WordListScreen, group_by_day

__all__ = ["MemorizationScreen", "WordListScreen", "group_by_day"]
