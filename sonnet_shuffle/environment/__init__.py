"""Puzzle environment for sonnet-shuffle."""

from .errors import PuzzleError, InvalidInput, Unavailable
from .models import (
    NUM_SLOTS,
    Line,
    SlotAnnotation,
    DropOutcome,
    DragSession,
    SlotView,
    FrameView,
    ShuffleConfig,
)
from .puzzle import PuzzleState, validate_canonical
from .placement import PlacementEngine
from .feedback import FeedbackTimer
from .sonnets import SonnetSource, normalize_sonnet, parse_sonnet_file
from .geometry import SlotGeometry, Rect

__all__ = [
    "PuzzleError",
    "InvalidInput",
    "Unavailable",
    "NUM_SLOTS",
    "Line",
    "SlotAnnotation",
    "DropOutcome",
    "DragSession",
    "SlotView",
    "FrameView",
    "ShuffleConfig",
    "PuzzleState",
    "validate_canonical",
    "PlacementEngine",
    "FeedbackTimer",
    "SonnetSource",
    "normalize_sonnet",
    "parse_sonnet_file",
    "SlotGeometry",
    "Rect",
]
