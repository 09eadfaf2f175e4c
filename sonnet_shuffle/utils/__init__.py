"""Rendering and logging helpers."""

from .board_visualizer import render_board, render_slot
from .logging_config import setup_logging

__all__ = [
    "render_board",
    "render_slot",
    "setup_logging",
]
