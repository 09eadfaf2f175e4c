"""Test drag-and-drop placement: pick-up, hover, and the three drop outcomes."""

import random
from collections import Counter

import pytest

from sonnet_shuffle.environment import PlacementEngine, PuzzleState, NUM_SLOTS


CANONICAL = [chr(ord("A") + i) for i in range(NUM_SLOTS)]


def make_engine(slots=None) -> PlacementEngine:
    """Engine over a board where slot 0 holds "C" and slot 5 holds "F"."""
    if slots is None:
        slots = ["C", "B", "A", "D", "E", "F", "G", "H", "I", "J", "K", "L", "M", "N"]
    state = PuzzleState(canonical=tuple(CANONICAL), slots=list(slots))
    return PlacementEngine(state=state)


class TestPickUp:
    """Test cases for starting a gesture."""

    def test_pick_up_filled_slot(self):
        engine = make_engine()
        assert engine.pick_up(0) is True
        assert engine.is_dragging
        assert engine.session.source_index == 0
        assert engine.session.line == "C"

    def test_source_keeps_line_while_dragging(self):
        """The source slot is not cleared until the drop."""
        engine = make_engine()
        engine.pick_up(0)
        assert engine.state.get(0) == "C"

    def test_pick_up_empty_slot_ignored(self):
        engine = make_engine()
        engine.state.set(3, None)
        assert engine.pick_up(3) is False
        assert engine.session is None

    def test_pick_up_out_of_range_ignored(self):
        engine = make_engine()
        assert engine.pick_up(14) is False
        assert engine.pick_up(None) is False
        assert engine.session is None

    def test_second_pick_up_ignored(self):
        """First gesture wins."""
        engine = make_engine()
        engine.pick_up(0)
        assert engine.pick_up(5) is False
        assert engine.session.source_index == 0

    def test_pointer_recorded(self):
        engine = make_engine()
        engine.pick_up(0, pointer=(40.0, 100.0))
        assert engine.session.pointer == (40.0, 100.0)


class TestHover:
    """Test cases for hovering."""

    def test_hover_updates_session(self):
        engine = make_engine()
        engine.pick_up(0)
        engine.hover(7, pointer=(50.0, 420.0))
        assert engine.session.hovered_index == 7
        assert engine.session.pointer == (50.0, 420.0)

    def test_hover_outside(self):
        engine = make_engine()
        engine.pick_up(0)
        engine.hover(None)
        assert engine.session.hovered_index is None

    def test_hover_has_no_board_effect(self):
        engine = make_engine()
        before = list(engine.state.slots)
        engine.pick_up(0)
        engine.hover(5)
        assert engine.state.slots == before

    def test_hover_without_session(self):
        engine = make_engine()
        engine.hover(3)
        assert engine.session is None


class TestDrop:
    """Test cases for finishing a gesture."""

    def test_swap_scenario(self):
        """Dragging "C" from slot 0 onto "F" in slot 5 swaps them."""
        engine = make_engine()
        engine.state.annotations = ["INCORRECT"] * NUM_SLOTS
        engine.state.passed = True

        engine.pick_up(0)
        outcome = engine.drop(5)

        assert outcome == "SWAP"
        assert engine.state.get(0) == "F"
        assert engine.state.get(5) == "C"
        assert engine.state.annotations[0] == "UNSET"
        assert engine.state.annotations[5] == "UNSET"
        assert engine.state.annotations[1] == "INCORRECT"
        assert engine.state.passed is False
        assert engine.session is None

    def test_move_into_empty_slot(self):
        engine = make_engine()
        engine.state.set(9, None)
        engine.pick_up(0)
        assert engine.drop(9) == "MOVE"
        assert engine.state.get(9) == "C"
        assert engine.state.get(0) is None

    def test_drop_outside_reverts(self):
        """An aborted drag is lossless."""
        engine = make_engine()
        engine.state.annotations = ["CORRECT"] * NUM_SLOTS
        engine.state.passed = True
        before = list(engine.state.slots)

        engine.pick_up(0)
        assert engine.drop(None) == "REVERT"

        assert engine.state.slots == before
        assert engine.state.annotations == ["CORRECT"] * NUM_SLOTS
        assert engine.state.passed is True
        assert engine.session is None

    def test_drop_on_source_reverts(self):
        engine = make_engine()
        before = list(engine.state.slots)
        engine.pick_up(0)
        assert engine.drop(0) == "REVERT"
        assert engine.state.slots == before

    def test_drop_out_of_range_reverts(self):
        engine = make_engine()
        before = list(engine.state.slots)
        engine.pick_up(0)
        assert engine.drop(99) == "REVERT"
        assert engine.state.slots == before

    def test_drop_without_session(self):
        engine = make_engine()
        assert engine.drop(3) == "IGNORED"

    def test_cancel(self):
        engine = make_engine()
        before = list(engine.state.slots)
        engine.pick_up(0)
        engine.cancel()
        assert engine.session is None
        assert engine.state.slots == before

    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_lines_conserved(self, seed):
        """No sequence of drops creates or destroys a line."""
        rng = random.Random(seed)
        engine = make_engine()
        engine.state.set(4, None)
        engine.state.set(11, None)
        expected = Counter(engine.state.lines())

        targets = list(range(NUM_SLOTS)) + [None, 20]
        for _ in range(500):
            engine.pick_up(rng.randrange(NUM_SLOTS))
            engine.hover(rng.choice(targets))
            engine.drop(rng.choice(targets))
            assert Counter(engine.state.lines()) == expected
            assert engine.session is None
