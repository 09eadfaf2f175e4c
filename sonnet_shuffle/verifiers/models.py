"""Data models for order verification."""

from typing import List, Set
from pydantic import BaseModel, Field


class CheckResult(BaseModel):
    """Result of checking the board against the canonical order."""
    all_correct: bool
    flagged_indices: Set[int] = Field(default_factory=set)  # Incorrect or empty slots
    correct_indices: List[int] = Field(default_factory=list)
    incorrect_indices: List[int] = Field(default_factory=list)
    empty_indices: List[int] = Field(default_factory=list)
    attempt: int = 0  # Attempt counter after this check
