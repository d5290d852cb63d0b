from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Callable, Optional

from inline_calc.models.result import Result


class ResultCache:
    """
    In-memory map from raw expression text to its evaluated Result.

    Keys are used verbatim (no whitespace or case normalisation). Entries are
    never invalidated; growth is unbounded unless ``max_entries`` is set, in
    which case the oldest inserted entries are evicted first.
    """

    def __init__(self, max_entries: Optional[int] = None) -> None:
        self._lock = threading.RLock()
        self._entries: "OrderedDict[str, Result]" = OrderedDict()
        self._max_entries = max_entries

    def get(self, expression: str) -> Optional[Result]:
        with self._lock:
            return self._entries.get(expression)

    def save(self, expression: str, result: Result) -> None:
        with self._lock:
            self._entries[expression] = result
            if self._max_entries is not None:
                while len(self._entries) > self._max_entries:
                    self._entries.popitem(last=False)

    def get_or_compute(self, expression: str, compute: Callable[[str], Result]) -> Result:
        """Return the cached Result, computing and storing it on a miss as one atomic step."""
        with self._lock:
            cached = self._entries.get(expression)
            if cached is not None:
                return cached
            result = compute(expression)
            self.save(expression, result)
            return result

    def __contains__(self, expression: object) -> bool:
        with self._lock:
            return expression in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
