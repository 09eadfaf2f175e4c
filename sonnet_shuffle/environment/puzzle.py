import logging
import random
from collections import Counter
from typing import List, Dict, Optional, Sequence, Tuple
from pydantic import BaseModel, Field, ConfigDict, model_validator

from .errors import InvalidInput
from .models import NUM_SLOTS, Line, SlotAnnotation


logger = logging.getLogger(__name__)


def validate_canonical(lines: Sequence[Line]) -> Tuple[Line, ...]:
    """
    Check that a canonical sequence can seed a puzzle.

    Args:
        lines: Candidate lines in their correct order

    Returns:
        The lines as a tuple, unmodified

    Raises:
        InvalidInput: If there are not exactly 14 non-empty string lines
    """
    if not isinstance(lines, (list, tuple)):
        raise InvalidInput("Canonical sequence must be a sequence of lines")

    if len(lines) != NUM_SLOTS:
        raise InvalidInput(
            f"Canonical sequence must have exactly {NUM_SLOTS} lines, got {len(lines)}"
        )

    for i, line in enumerate(lines):
        if not isinstance(line, str) or not line.strip():
            raise InvalidInput(f"Line {i + 1} of the canonical sequence is empty")

    return tuple(lines)


class PuzzleState(BaseModel):
    """
    Holds the canonical sonnet and the current slot assignment.

    Besides slot contents, the state carries the check bookkeeping that
    belongs to one puzzle instance: per-slot annotations, the attempt
    counter and the pass flag. A new puzzle replaces the whole object.

    Attributes:
        canonical: The 14 lines in their correct order
        slots: Current content of each slot (None when empty)
        annotations: Result of the last check for each slot
        attempts: Number of checks performed on this puzzle
        passed: Whether the most recent check found the board fully correct
        seed: Optional random seed used for the shuffle
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    canonical: Tuple[Line, ...]
    slots: List[Optional[Line]] = Field(default_factory=lambda: [None] * NUM_SLOTS)
    annotations: List[SlotAnnotation] = Field(default_factory=lambda: ["UNSET"] * NUM_SLOTS)
    attempts: int = Field(default=0, ge=0)
    passed: bool = False
    seed: Optional[int] = None

    @model_validator(mode="after")
    def check_board(self) -> "PuzzleState":
        """Reject boards that could not arise from shuffling the canonical lines."""
        validate_canonical(self.canonical)
        if len(self.slots) != NUM_SLOTS:
            raise ValueError(f"Expected {NUM_SLOTS} slots, got {len(self.slots)}")
        if len(self.annotations) != NUM_SLOTS:
            raise ValueError(f"Expected {NUM_SLOTS} annotations, got {len(self.annotations)}")

        extra = Counter(self.lines()) - Counter(self.canonical)
        if extra:
            raise ValueError(f"Lines not available in this sonnet: {sorted(extra)}")
        return self

    @classmethod
    def create(
        cls,
        canonical: Sequence[Line],
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> "PuzzleState":
        """
        Factory method to start a new puzzle with shuffled slots.

        Lines are shuffled, slot indices are shuffled independently, and the
        shuffled lines are dealt to the shuffled slots in order.

        Args:
            canonical: The 14 lines in their correct order
            seed: Optional random seed for reproducibility
            rng: Optional generator to draw from instead of seeding a new one

        Returns:
            A new PuzzleState with every line placed in some slot

        Raises:
            InvalidInput: If the canonical sequence is malformed
        """
        lines = validate_canonical(canonical)
        rng = rng or random.Random(seed)

        shuffled_lines = list(lines)
        rng.shuffle(shuffled_lines)
        slot_indices = list(range(NUM_SLOTS))
        rng.shuffle(slot_indices)

        slots: List[Optional[Line]] = [None] * NUM_SLOTS
        for slot_index, line in zip(slot_indices, shuffled_lines):
            slots[slot_index] = line

        logger.info("New puzzle created (seed=%s)", seed)
        return cls(canonical=lines, slots=slots, seed=seed)

    @property
    def occupied_indices(self) -> List[int]:
        """Indices of slots that currently hold a line."""
        return [i for i, line in enumerate(self.slots) if line is not None]

    @property
    def has_any_line(self) -> bool:
        """Check if at least one line is placed."""
        return any(line is not None for line in self.slots)

    def lines(self) -> List[Line]:
        """Non-empty slot contents in slot order."""
        return [line for line in self.slots if line is not None]

    def get(self, index: int) -> Optional[Line]:
        """
        Get the line held by a slot.

        Raises:
            InvalidInput: If the index is not a slot index
        """
        self._check_index(index)
        return self.slots[index]

    def set(self, index: int, line: Optional[Line]) -> None:
        """
        Place a line in a slot, or empty it with None.

        Args:
            index: Slot to write
            line: Line to place, or None to empty the slot

        Raises:
            InvalidInput: If the index is not a slot index, the line is not part
                of this sonnet, or placing it would duplicate a line
        """
        self._check_index(index)
        if self.slots[index] == line:
            return

        if line is not None:
            if line not in self.canonical:
                raise InvalidInput(f"'{line}' is not a line of this sonnet")
            placed_elsewhere = sum(
                1 for i, other in enumerate(self.slots) if i != index and other == line
            )
            if placed_elsewhere >= self.canonical.count(line):
                raise InvalidInput(f"'{line}' is already placed in another slot")

        self.slots[index] = line
        self.clear_marks(index)

    def move(self, source: int, target: int) -> None:
        """
        Move a line into an empty slot, emptying its source.

        Raises:
            InvalidInput: If the source is empty, the target is occupied, or
                the two indices are the same
        """
        self._check_index(source)
        self._check_index(target)
        if source == target:
            raise InvalidInput("Cannot move a line onto its own slot")
        if self.slots[source] is None:
            raise InvalidInput(f"Slot {source} is empty")
        if self.slots[target] is not None:
            raise InvalidInput(f"Slot {target} is occupied")

        self.slots[target] = self.slots[source]
        self.slots[source] = None
        self.clear_marks(source, target)

    def swap(self, a: int, b: int) -> None:
        """
        Exchange the contents of two slots.

        Raises:
            InvalidInput: If either index is not a slot index or both are equal
        """
        self._check_index(a)
        self._check_index(b)
        if a == b:
            raise InvalidInput("Cannot swap a slot with itself")

        self.slots[a], self.slots[b] = self.slots[b], self.slots[a]
        self.clear_marks(a, b)

    def clear_marks(self, *indices: int) -> None:
        """Reset annotations of edited slots; any edit invalidates a pass."""
        for i in indices:
            self.annotations[i] = "UNSET"
        self.passed = False

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < NUM_SLOTS:
            raise InvalidInput(f"Slot index must be 0..{NUM_SLOTS - 1}, got {index!r}")

    def get_state(self) -> Dict:
        """
        Get the current puzzle state as a dictionary.

        Useful for serialization and logging.

        Returns:
            Dictionary containing puzzle state
        """
        return {
            "slots": list(self.slots),
            "annotations": list(self.annotations),
            "lines_placed": len(self.occupied_indices),
            "attempts": self.attempts,
            "passed": self.passed,
        }
