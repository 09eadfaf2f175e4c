"""
Pydantic models for the environment layer.

This module contains the data models (configuration, drag sessions, frame views)
used throughout the environment layer. The main logic classes (PuzzleState,
PlacementEngine, FeedbackTimer, SonnetShuffle) remain in their respective files.
"""

from pathlib import Path
from typing import List, Optional, Literal, Tuple
from pydantic import BaseModel, Field, field_validator


# Number of lines in a sonnet, and therefore of slots on the board
NUM_SLOTS = 14

# Type aliases
Line = str
SlotAnnotation = Literal["UNSET", "CORRECT", "INCORRECT", "SHAKING"]
DropOutcome = Literal["MOVE", "SWAP", "REVERT", "IGNORED"]


class DragSession(BaseModel):
    """A line being carried between pick-up and drop."""
    source_index: int = Field(..., ge=0, lt=NUM_SLOTS)
    line: Line
    pointer: Optional[Tuple[float, float]] = None
    hovered_index: Optional[int] = None


class SlotView(BaseModel):
    """What the presentation layer needs to draw a single slot."""
    index: int
    line: Optional[Line] = None
    annotation: SlotAnnotation = "UNSET"
    offset: float = 0.0
    hovered: bool = False


class FrameView(BaseModel):
    """Read-only snapshot handed to the presentation layer every frame."""
    slots: List[SlotView] = Field(default_factory=list)
    drag: Optional[DragSession] = None
    attempts: int = 0
    passed: bool = False
    can_check: bool = False
    can_start_new_puzzle: bool = False
    message: Optional[str] = None


class ShuffleConfig(BaseModel):
    """Configuration for a puzzle session."""
    seed: Optional[int] = None
    sonnets_path: Optional[Path] = None  # Defaults to the bundled collection
    shake_duration_ms: float = Field(default=500.0, gt=0)
    shake_frequency_hz: float = Field(default=20.0, gt=0)
    shake_amplitude: float = Field(default=10.0, ge=0)
    compact_layout: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()
