"""Site Record — one history entry, bookmark or bookmark folder.

Invariants:
    - Records are frozen: every change goes through dataclasses.replace
    - None means "absent" for every optional field
    - tags is always a tuple of SiteTag (None / list / single tag are coerced)
    - A partial record (new detail passed to add_site) is also a SiteRecord

Design Decisions:
    - Frozen dataclass over dict: attribute typos fail loudly, hashing is free
    - SiteList is a tuple: returned lists cannot be mutated by callers holding
      older snapshots (undo, time-travel)
"""

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from site_collection.core.domain_types import SiteTag


TagsLike = SiteTag | str | Iterable[SiteTag | str] | None


def coerce_tags(tags: TagsLike) -> tuple[SiteTag, ...]:
    """Normalize a tag argument to a de-duplicated tuple, keeping first-seen order."""
    if tags is None:
        return ()
    if isinstance(tags, str):
        return (SiteTag(tags),)
    result: list[SiteTag] = []
    for tag in tags:
        tag = SiteTag(tag)
        if tag not in result:
            result.append(tag)
    return tuple(result)


@dataclass(frozen=True)
class SiteRecord:
    """Immutable site record — pure dataclass, no IO."""

    location: str | None = None
    title: str | None = None
    custom_title: str | None = None
    tags: tuple[SiteTag, ...] = field(default_factory=tuple)

    # None after history is cleared on a bookmark
    last_accessed_time: int | None = None

    # Visit counter, only tracked on tag-less records
    count: int | None = None

    # Folder tree
    folder_id: int | None = None
    parent_folder_id: int | None = None

    partition_number: int | None = None
    favicon: str | None = None
    theme_color: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", coerce_tags(self.tags))

    @property
    def has_tags(self) -> bool:
        return len(self.tags) > 0

    @property
    def display_title(self) -> str:
        """customTitle wins over title."""
        return self.custom_title or self.title or ""

    def evolve(self, **changes: object) -> "SiteRecord":
        """Copy with the given fields replaced."""
        return replace(self, **changes)


SiteList = tuple[SiteRecord, ...]
