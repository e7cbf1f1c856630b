"""Domain Types — tags, record kinds and identity types for the site list.

Invariants:
    - SiteTag values are the only tags a record may carry
    - SiteKind is derived from tags, never stored
    - ROOT_FOLDER_ID (0) is the implicit top level ("Bookmarks Toolbar")

Design Decisions:
    - str Enums: tags compare equal to their wire strings, so app-state dicts
      load without custom decoders
    - NewType over wrappers: zero runtime cost, full type-checker support
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

FolderId = NewType("FolderId", int)
PartitionNumber = NewType("PartitionNumber", int)
Timestamp = NewType("Timestamp", int)   # milliseconds since epoch


# ─── Constants ───────────────────────────────────────────────────

ROOT_FOLDER_ID: int = 0
FIRST_FOLDER_ID: int = 1
DEFAULT_PARTITION: int = 0
FILE_ORIGIN: str = "file:///"
AUTOCOMPLETE_HISTORY_SIZE_KEY: str = "advanced.autocomplete-history-size"


# ─── Enums ───────────────────────────────────────────────────────

class SiteTag(str, Enum):
    """Role markers on a site record. No tags = plain history entry."""
    BOOKMARK = "bookmark"
    BOOKMARK_FOLDER = "bookmark-folder"
    PINNED = "pinned"
    READING_LIST = "reading-list"


class SiteKind(str, Enum):
    """Closed record variant derived from the tag set."""
    HISTORY = "history"
    BOOKMARK = "bookmark"
    FOLDER = "folder"
    PINNED = "pinned"
    OTHER = "other"
