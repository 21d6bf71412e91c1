"""
Id factories.

Ids are generated through a callable passed into every operation that creates
or duplicates a field/option, so tests can supply deterministic ids.
"""

from __future__ import annotations

import itertools
import uuid
from typing import Callable, Dict, Iterator

# prefix -> new id (e.g. "field" -> "field-3f9c2a1b7d40")
IdFactory = Callable[[str], str]


def random_ids(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class SequentialIds:
    """
    Deterministic id factory: `field-1`, `field-2`, `opt-1`, ...

    Counters are kept per prefix.
    """

    def __init__(self, start: int = 1) -> None:
        self._start = start
        self._counters: Dict[str, Iterator[int]] = {}

    def __call__(self, prefix: str) -> str:
        counter = self._counters.setdefault(prefix, itertools.count(self._start))
        return f"{prefix}-{next(counter)}"
