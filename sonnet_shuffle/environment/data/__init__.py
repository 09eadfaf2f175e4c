"""Bundled sonnet collection."""

from pathlib import Path
from typing import List

import yaml

_DATA_FILE = Path(__file__).parent / "sonnets.yaml"


def load_bundled_sonnets() -> List[str]:
    '''
    Returns the bundled sonnets, one multi-line string each.
    '''
    with open(_DATA_FILE, encoding="utf-8") as f:
        return list(yaml.safe_load(f)["sonnets"])


__all__ = ["load_bundled_sonnets"]
