"""Boundary Protocols — contracts between core and its external collaborators.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - URL normalizers signal failure with ValueError (UrlNormalizationError is one);
      callers recover with the raw string
    - Frame entities are read-only from the core's point of view

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Clock is a plain callable so tests pass a lambda returning a fixed time
"""

import time
from typing import Callable, Protocol


Clock = Callable[[], int]


def wall_clock_ms() -> int:
    """Current wall-clock time in milliseconds since epoch."""
    return int(time.time() * 1000)


class UrlNormalizer(Protocol):
    """Raw URL -> canonical string. Raises ValueError on malformed input."""
    def __call__(self, raw_url: str) -> str: ...


class SettingsProvider(Protocol):
    """Setting key -> value lookup, implemented by the shell."""
    def get_setting(self, key: str) -> object: ...


class FrameLike(Protocol):
    """Read-only view of a browser tab the core can derive a site detail from."""
    location: str | None
    pinned_location: str | None
    title: str | None
    partition_number: int | None
    icon: str | None
    theme_color: str | None
    computed_theme_color: str | None
