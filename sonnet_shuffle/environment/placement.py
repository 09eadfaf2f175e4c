"""
Placement engine for drag-and-drop gestures over slot indices.

The engine never sees pointer or touch events. The presentation layer turns
those into "pick up slot i", "hover slot j (or nothing)" and "drop on slot k
(or nothing)", and the engine turns a finished gesture into a move, a swap,
or no change at all.
"""

import logging
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict

from .models import NUM_SLOTS, DragSession, DropOutcome
from .puzzle import PuzzleState


logger = logging.getLogger(__name__)


def _as_slot(index: Optional[int]) -> Optional[int]:
    """Map anything that is not a valid slot index to None."""
    if isinstance(index, bool) or not isinstance(index, int):
        return None
    return index if 0 <= index < NUM_SLOTS else None


class PlacementEngine(BaseModel):
    """
    Interprets drag gestures as mutations of a PuzzleState.

    At most one DragSession exists at a time; a second pick-up while one is
    active is ignored.

    Attributes:
        state: The puzzle being edited
        session: The gesture in progress, if any
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    state: PuzzleState
    session: Optional[DragSession] = None

    @property
    def is_dragging(self) -> bool:
        """Whether a gesture is in progress."""
        return self.session is not None

    def pick_up(
        self,
        source_index: Optional[int],
        pointer: Optional[Tuple[float, float]] = None,
    ) -> bool:
        """
        Start carrying the line held by a slot.

        The source slot keeps its line until the drop.

        Args:
            source_index: Slot under the pointer when the gesture began
            pointer: Optional pointer position for ghost rendering

        Returns:
            True if a session was started, False if the pick-up was ignored
        """
        if self.session is not None:
            return False

        index = _as_slot(source_index)
        if index is None:
            return False

        line = self.state.slots[index]
        if line is None:
            return False

        self.session = DragSession(
            source_index=index,
            line=line,
            pointer=pointer,
            hovered_index=index,
        )
        return True

    def hover(
        self,
        target_index: Optional[int],
        pointer: Optional[Tuple[float, float]] = None,
    ) -> None:
        """Track which slot is under the carried line; no effect on the board."""
        if self.session is None:
            return
        self.session.hovered_index = _as_slot(target_index)
        if pointer is not None:
            self.session.pointer = pointer

    def drop(self, target_index: Optional[int]) -> DropOutcome:
        """
        Finish the gesture on a slot, or outside all slots with None.

        Dropping outside the board or back onto the source leaves everything
        as it was. Dropping onto another slot swaps with its line, or moves
        into it when empty.

        Args:
            target_index: Slot under the pointer at release, or None

        Returns:
            The outcome applied to the board
        """
        session = self.session
        if session is None:
            return "IGNORED"

        # The session ends whatever happens below
        self.session = None

        source = session.source_index
        target = _as_slot(target_index)
        if target is None or target == source:
            logger.debug("Drop from slot %d reverted", source)
            return "REVERT"

        if self.state.slots[target] is not None:
            self.state.swap(source, target)
            outcome: DropOutcome = "SWAP"
        else:
            self.state.move(source, target)
            outcome = "MOVE"

        logger.debug("Drop %s: slot %d -> slot %d", outcome, source, target)
        return outcome

    def cancel(self) -> None:
        """Abandon the gesture without touching the board."""
        self.session = None
