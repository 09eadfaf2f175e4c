"""Sonnet-shuffle: restore the order of a shuffled sonnet."""

from .shuffle import SonnetShuffle

__all__ = ["SonnetShuffle"]
