"""Per-production profiling for the translator, enabled through JSONXML_PROFILE."""

import os
import time
from dataclasses import dataclass
from typing import Any
from typing import Protocol

# Evaluated at import; reload the module after changing the environment
PROFILE_HOT_PATHS = __debug__ and "JSONXML_PROFILE" in os.environ


class _Positioned(Protocol):
    pos: int


@dataclass
class HotPathStats:
    """Calls, elapsed time and input consumed by one production."""

    production: str
    call_count: int = 0
    total_time_ns: int = 0
    chars_consumed: int = 0

    def record_call(self, duration_ns: int, consumed: int = 0) -> None:
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.chars_consumed += consumed


_hot_path_stats: dict[str, HotPathStats] = {}

if PROFILE_HOT_PATHS:

    class ProfileContext:
        """
        Times one production and measures how far it moved the cursor.

        Nested productions are counted again under their own name, so the
        consumed characters of ``parse_array`` include its elements.
        """

        def __init__(self, production: str, cursor: _Positioned | None = None):
            self.production = production
            self.cursor = cursor
            self.start_pos = 0
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            if self.cursor is not None:
                self.start_pos = self.cursor.pos
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            consumed = (
                self.cursor.pos - self.start_pos if self.cursor is not None else 0
            )
            stats = _hot_path_stats.setdefault(
                self.production, HotPathStats(self.production)
            )
            stats.record_call(duration, consumed)

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(
            self, production: str, cursor: _Positioned | None = None
        ) -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass


def get_hot_path_stats() -> dict[str, HotPathStats]:
    """Returns a copy of the statistics keyed by production name."""
    return _hot_path_stats.copy()


def clear_hot_path_stats() -> None:
    _hot_path_stats.clear()
