"""
Sonnet source: picks a sonnet and normalizes it into 14 lines.

Sources can be the bundled collection, a YAML file holding a list of
multi-line strings (optionally under a `sonnets` key), or a plain text file
with sonnets separated by lines containing only `---`.
"""

import logging
import random
import re
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, Field

import yaml

from .data import load_bundled_sonnets
from .errors import Unavailable
from .models import NUM_SLOTS, Line


logger = logging.getLogger(__name__)

_SEPARATOR = re.compile(r"^[ \t]*---[ \t]*$", re.MULTILINE)


def normalize_sonnet(text: str) -> Optional[List[Line]]:
    """
    Turn raw sonnet text into its first 14 trimmed, non-blank lines.

    Returns:
        The lines, or None if the text has fewer than 14 non-blank lines
    """
    lines = [line.strip() for line in text.split("\n") if line.strip()]
    if len(lines) < NUM_SLOTS:
        return None
    return lines[:NUM_SLOTS]


def parse_sonnet_file(path: str | Path) -> List[str]:
    """
    Read raw sonnet texts from a YAML or plain text file.

    Args:
        path: A .yaml/.yml file or a text file with `---` separators

    Returns:
        List of raw sonnet texts

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a YAML file is malformed or does not contain a list
            of strings
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Sonnet file not found: {path}")

    text = path.read_text(encoding="utf-8")

    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        if isinstance(data, dict):
            data = data.get("sonnets")
        if not isinstance(data, list) or not all(isinstance(s, str) for s in data):
            raise ValueError(f"Expected a list of sonnet strings in {path}")
        return data

    return [chunk for chunk in _SEPARATOR.split(text) if chunk.strip()]


class SonnetSource(BaseModel):
    """
    Supplies the canonical lines for new puzzles.

    Attributes:
        sonnets: Raw sonnet texts to choose from
        seed: Optional random seed for reproducibility
    """

    sonnets: List[str] = Field(default_factory=list)
    seed: Optional[int] = None
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        self._rng = random.Random(self.seed)

    @classmethod
    def bundled(cls, seed: Optional[int] = None) -> "SonnetSource":
        """Source backed by the sonnets shipped with the package."""
        return cls(sonnets=load_bundled_sonnets(), seed=seed)

    @classmethod
    def from_file(cls, path: str | Path, seed: Optional[int] = None) -> "SonnetSource":
        """Source backed by a YAML or text file."""
        return cls(sonnets=parse_sonnet_file(path), seed=seed)

    def valid_sonnets(self) -> List[List[Line]]:
        """All sonnets that normalize to a full set of lines."""
        normalized = (normalize_sonnet(text) for text in self.sonnets)
        return [lines for lines in normalized if lines is not None]

    def load_sonnet(self) -> List[Line]:
        """
        Pick a sonnet uniformly among the usable ones.

        Returns:
            Exactly 14 trimmed, non-empty lines in their original order

        Raises:
            Unavailable: If no sonnet has at least 14 non-blank lines
        """
        candidates = self.valid_sonnets()
        if not candidates:
            logger.warning("No usable sonnet among %d candidates", len(self.sonnets))
            raise Unavailable(
                f"No sonnet with at least {NUM_SLOTS} non-empty lines is available"
            )
        return self._rng.choice(candidates)
