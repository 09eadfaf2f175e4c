"""Test slot and button hit testing."""

import pytest
from pydantic import ValidationError

from sonnet_shuffle.environment import SlotGeometry, NUM_SLOTS
from sonnet_shuffle.environment.geometry import SLOT_START_X


class TestDesktopLayout:
    """Test cases for the fixed desktop layout."""

    def test_first_slot(self):
        geometry = SlotGeometry()
        rect = geometry.slot_rect(0)
        assert (rect.x, rect.y, rect.width, rect.height) == (28, 90, 480, 40)

    def test_slots_stack_with_margin(self):
        geometry = SlotGeometry()
        assert geometry.slot_rect(1).y == 135
        assert geometry.slot_rect(13).y == 90 + 13 * 45

    def test_slot_at_inside(self):
        geometry = SlotGeometry()
        assert geometry.slot_at(100, 110) == 0
        assert geometry.slot_at(100, 155) == 1

    def test_slot_edges_inclusive(self):
        geometry = SlotGeometry()
        assert geometry.slot_at(28, 90) == 0
        assert geometry.slot_at(508, 130) == 0

    def test_gap_between_slots(self):
        geometry = SlotGeometry()
        assert geometry.slot_at(100, 132) is None

    def test_outside(self):
        geometry = SlotGeometry()
        assert geometry.slot_at(5, 110) is None
        assert geometry.slot_at(100, 10) is None
        assert geometry.slot_at(100, 2000) is None

    def test_slot_rect_out_of_range(self):
        with pytest.raises(IndexError):
            SlotGeometry().slot_rect(NUM_SLOTS)

    def test_canvas_height(self):
        assert SlotGeometry().canvas_height == 775


class TestCompactLayout:
    """Test cases for narrow viewports."""

    def test_for_viewport(self):
        geometry = SlotGeometry.for_viewport(400, compact=True)
        assert geometry.canvas_width == 360
        assert geometry.slot_width == 316
        assert geometry.slot_height == 45

    def test_canvas_width_capped(self):
        assert SlotGeometry.for_viewport(1000, compact=True).canvas_width == 500

    def test_tiny_viewport_keeps_usable_slots(self):
        """Very narrow viewports fall back to the smallest usable canvas."""
        geometry = SlotGeometry.for_viewport(30, compact=True)
        assert geometry.canvas_width == 280
        assert geometry.slot_width > 0
        assert geometry.slot_at(SLOT_START_X + 1, geometry.slot_start_y + 1) == 0
        buttons = geometry.buttons()
        new_sonnet = buttons["new_sonnet"]
        assert new_sonnet.x + new_sonnet.width <= geometry.canvas_width

    def test_canvas_width_floor(self):
        with pytest.raises(ValidationError):
            SlotGeometry(compact=True, canvas_width=40)

    def test_canvas_height(self):
        geometry = SlotGeometry(compact=True, canvas_width=360)
        assert geometry.canvas_height == 100 + 14 * 50 + 30

    def test_slot_at(self):
        geometry = SlotGeometry(compact=True, canvas_width=360)
        assert geometry.slot_at(30, 100) == 0
        assert geometry.slot_at(30, 150) == 1


class TestButtons:
    """Test cases for button hit testing."""

    def test_check_order_button(self):
        assert SlotGeometry().button_at(30, 25) == "check_order"

    def test_new_sonnet_button(self):
        assert SlotGeometry().button_at(170, 25) == "new_sonnet"

    def test_between_buttons(self):
        assert SlotGeometry().button_at(163, 25) is None

    def test_compact_buttons(self):
        buttons = SlotGeometry(compact=True, canvas_width=360).buttons()
        assert buttons["new_sonnet"].x == 28 + 110 + 10
        assert buttons["check_order"].height == 40
