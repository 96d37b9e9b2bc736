"""Two-level counting map: GMT date -> URL -> hits."""
from __future__ import annotations
from collections import defaultdict
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Tuple

from .record_parser import GmtDate


class TallyStore:
    """Counts URL hits per GMT date.

    Entries are only ever added and counts only grow, so every stored count
    is at least 1 and the set of dates is exactly the dates observed.
    Ordering is left to the report emitter.
    """

    def __init__(self):
        self._counts: Dict[GmtDate, Dict[str, int]] = defaultdict(dict)
        self._total = 0

    def increment(self, day: GmtDate, url: str) -> int:
        """Add one hit for (day, url) and return the new count."""
        urls = self._counts[day]
        urls[url] = urls.get(url, 0) + 1
        self._total += 1
        return urls[url]

    def entries(self) -> Iterator[Tuple[GmtDate, Mapping[str, int]]]:
        """Yield (date, read-only URL->count mapping) in no particular order."""
        for day, urls in self._counts.items():
            yield day, MappingProxyType(urls)

    def count(self, day: GmtDate, url: str) -> int:
        urls = self._counts.get(day)
        return urls.get(url, 0) if urls else 0

    def dates(self) -> List[GmtDate]:
        return list(self._counts)

    def total(self) -> int:
        """Number of records tallied so far."""
        return self._total

    def __len__(self) -> int:
        return len(self._counts)

    def __bool__(self) -> bool:
        return self._total > 0

    def __repr__(self) -> str:
        return f"TallyStore(dates={len(self._counts)}, hits={self._total})"
