"""
Order verification for the sonnet board.

Checks compare slot contents to the canonical sequence by strict positional
equality: a line one slot away from home is just as wrong as one at the far
end. There is no partial credit.

A check also does the bookkeeping that belongs to it:
1. Bumps the attempt counter (once per call, even if nothing changed)
2. Annotates every slot as CORRECT, INCORRECT or UNSET (empty)
3. Sets the pass flag
4. Starts the shake for incorrect and empty slots, when given a timer
"""

import logging
from typing import List, Optional

from ..environment.feedback import FeedbackTimer
from ..environment.models import SlotAnnotation
from ..environment.puzzle import PuzzleState
from .models import CheckResult


logger = logging.getLogger(__name__)


def check_order(
    state: PuzzleState,
    timer: Optional[FeedbackTimer] = None,
    now: Optional[float] = None,
) -> Optional[CheckResult]:
    """
    Check the board and record the outcome on the state.

    Args:
        state: Puzzle to check
        timer: Optional shake timer to restart with the flagged slots
        now: Current time in milliseconds, required when a timer is given

    Returns:
        CheckResult, or None if the board is empty and nothing was checked
    """
    if not state.has_any_line:
        return None

    if timer is not None and now is None:
        raise ValueError("A time is required to start the feedback timer")

    annotations: List[SlotAnnotation] = []
    correct: List[int] = []
    incorrect: List[int] = []
    empty: List[int] = []

    for i, (content, expected) in enumerate(zip(state.slots, state.canonical)):
        if content is None:
            annotations.append("UNSET")
            empty.append(i)
        elif content == expected:
            annotations.append("CORRECT")
            correct.append(i)
        else:
            annotations.append("INCORRECT")
            incorrect.append(i)

    flagged = set(incorrect) | set(empty)
    all_correct = not flagged

    # Everything is computed; apply in one go
    state.attempts += 1
    state.annotations = annotations
    state.passed = all_correct

    if timer is not None:
        timer.start(flagged, now)

    logger.info(
        "Check #%d: %d correct, %d incorrect, %d empty",
        state.attempts, len(correct), len(incorrect), len(empty),
    )

    return CheckResult(
        all_correct=all_correct,
        flagged_indices=flagged,
        correct_indices=correct,
        incorrect_indices=incorrect,
        empty_indices=empty,
        attempt=state.attempts,
    )


def is_complete(state: PuzzleState) -> bool:
    """Check if every slot holds the canonical line for its position."""
    return all(content == expected for content, expected in zip(state.slots, state.canonical))


def can_check(state: PuzzleState) -> bool:
    """A check needs at least one line on the board."""
    return state.has_any_line


def can_start_new_puzzle(state: PuzzleState) -> bool:
    """A new puzzle unlocks only when the last check proved the board correct."""
    return state.passed and is_complete(state)
