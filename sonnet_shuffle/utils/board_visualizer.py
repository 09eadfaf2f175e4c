from typing import Dict

from ..environment.models import FrameView, SlotView, SlotAnnotation

MARKERS: Dict[SlotAnnotation, str] = {
    "UNSET": " ",
    "CORRECT": "✓",
    "INCORRECT": "✗",
    "SHAKING": "~",
}

EMPTY_SLOT = "(empty)"


def render_slot(slot: SlotView, width: int = 60) -> str:
    """Render one slot as a numbered row; shaking slots are shifted right."""
    marker = MARKERS[slot.annotation]
    if slot.hovered:
        marker = ">"

    shift = " " * int(round(abs(slot.offset)))
    text = slot.line if slot.line is not None else EMPTY_SLOT
    if len(text) > width:
        text = text[:width - 3] + "..."

    return f"{slot.index + 1:>2} {marker} | {shift}{text}"


def render_board(frame: FrameView, width: int = 60) -> str:
    """Render a frame to a string."""
    if not frame.slots:
        return frame.message or "No puzzle in progress."

    check = "Check Order" if frame.can_check else "(Check Order)"
    new = "New Sonnet" if frame.can_start_new_puzzle else "(New Sonnet)"

    lines = [f"[{check}] [{new}]", f"Checks: {frame.attempts}", ""]
    lines.extend(render_slot(slot, width) for slot in frame.slots)

    if frame.drag is not None:
        lines.append("")
        lines.append(f"Carrying line {frame.drag.source_index + 1}: {frame.drag.line}")

    if frame.passed:
        lines.append("")
        lines.append("Every line is in place!")

    if frame.message:
        lines.append("")
        lines.append(frame.message)

    return "\n".join(lines)
