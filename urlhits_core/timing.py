"""Per-phase wall-clock timings reported by the export command."""
from __future__ import annotations
import time
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, Optional


class PhaseTimer:
    """Times named, non-repeating phases of one command run.

    ``clock`` is any monotonic seconds source; tests pass a fake one.
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter):
        self._clock = clock
        self._started = clock()
        self._phases: Dict[str, float] = {}

    @contextmanager
    def phase(self, name: str) -> Iterator[None]:
        if name in self._phases:
            raise ValueError(f"phase {name!r} already timed")
        begin = self._clock()
        try:
            yield
        finally:
            self._phases[name] = self._clock() - begin

    def seconds(self, name: str) -> float:
        return self._phases[name]

    def rate(self, name: str, units: int) -> Optional[float]:
        """Units processed per second during ``name``; None when too fast to measure."""
        elapsed = self._phases[name]
        if elapsed <= 0:
            return None
        return round(units / elapsed, 1)

    def as_dict(self, ndigits: int = 6) -> Dict[str, float]:
        """``{<phase>_s: seconds, ..., total_s: seconds}`` in phase order."""
        out = {f"{name}_s": round(secs, ndigits) for name, secs in self._phases.items()}
        out['total_s'] = round(self._clock() - self._started, ndigits)
        return out
