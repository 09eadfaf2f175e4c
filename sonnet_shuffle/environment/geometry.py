"""
Slot geometry for pointer-driven front ends.

Slots are stacked in a single column below a row of two buttons. The compact
layout (narrow viewports) uses taller slots, a taller button row and a
canvas whose width follows the viewport.
"""

from typing import Dict, Optional, NamedTuple
from pydantic import BaseModel, Field

from .models import NUM_SLOTS


SLOT_MARGIN = 5
SLOT_START_X = 28
BUTTON_MARGIN = 10
DESKTOP_CANVAS_WIDTH = 540
DESKTOP_CANVAS_HEIGHT = 775
MIN_COMPACT_CANVAS_WIDTH = 280
MAX_COMPACT_CANVAS_WIDTH = 500


class Rect(NamedTuple):
    """Axis-aligned rectangle in canvas pixels."""
    x: float
    y: float
    width: float
    height: float

    def contains(self, px: float, py: float) -> bool:
        """Edges count as inside."""
        return self.x <= px <= self.x + self.width and self.y <= py <= self.y + self.height


class SlotGeometry(BaseModel):
    """
    Maps slot indices to canvas rectangles and back.

    Attributes:
        compact: Use the narrow-viewport layout
        canvas_width: Canvas width in pixels
    """

    compact: bool = False
    canvas_width: float = Field(default=DESKTOP_CANVAS_WIDTH, ge=MIN_COMPACT_CANVAS_WIDTH)

    @classmethod
    def for_viewport(cls, viewport_width: float, compact: bool = False) -> "SlotGeometry":
        """Size the canvas for a viewport, leaving a 20 px gutter each side when compact."""
        if compact:
            width = min(viewport_width - 40, MAX_COMPACT_CANVAS_WIDTH)
            return cls(compact=True, canvas_width=max(width, MIN_COMPACT_CANVAS_WIDTH))
        return cls(compact=False, canvas_width=DESKTOP_CANVAS_WIDTH)

    @property
    def slot_width(self) -> float:
        return self.canvas_width - 44 if self.compact else 480

    @property
    def slot_height(self) -> float:
        return 45 if self.compact else 40

    @property
    def slot_start_y(self) -> float:
        return 100 if self.compact else 90

    @property
    def canvas_height(self) -> float:
        if self.compact:
            return self.slot_start_y + NUM_SLOTS * (self.slot_height + SLOT_MARGIN) + 30
        return DESKTOP_CANVAS_HEIGHT

    def slot_rect(self, index: int) -> Rect:
        """Rectangle of a slot (one slot per row)."""
        if not 0 <= index < NUM_SLOTS:
            raise IndexError(f"Slot index out of range: {index}")
        y = self.slot_start_y + index * (self.slot_height + SLOT_MARGIN)
        return Rect(SLOT_START_X, y, self.slot_width, self.slot_height)

    def slot_at(self, x: float, y: float) -> Optional[int]:
        """Slot under a canvas point, or None outside all slots."""
        for i in range(NUM_SLOTS):
            if self.slot_rect(i).contains(x, y):
                return i
        return None

    def buttons(self) -> Dict[str, Rect]:
        """Rectangles of the "Check Order" and "New Sonnet" buttons."""
        y = 15 if self.compact else 20
        width = 110 if self.compact else 130
        height = 40 if self.compact else 35
        return {
            "check_order": Rect(SLOT_START_X, y, width, height),
            "new_sonnet": Rect(SLOT_START_X + width + BUTTON_MARGIN, y, width, height),
        }

    def button_at(self, x: float, y: float) -> Optional[str]:
        """Name of the button under a canvas point, or None."""
        for name, rect in self.buttons().items():
            if rect.contains(x, y):
                return name
        return None
