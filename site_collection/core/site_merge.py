"""Site Merge — computes the record stored by add_site from old + new details.

Invariants:
    - Tags only grow here: old tags plus the requested tag, de-duplicated
    - Bookmark and folder merges never default last_accessed_time to "now",
      so a fresh bookmark is never promoted into recents
    - count exists only when the merged tag set is empty
    - parent_folder_id, partition_number, favicon and theme_color fall back to
      the old record when the new detail omits them

Design Decisions:
    - Clock injected as a parameter: merge stays deterministic under test
    - Rules applied in a fixed order, one block each, mirroring the data model
"""

from site_collection.core.boundary_protocols import Clock, wall_clock_ms
from site_collection.core.domain_types import SiteTag
from site_collection.core.site_record import SiteRecord, coerce_tags


def _merge_tags(old: SiteRecord | None, tag: SiteTag | None) -> tuple[SiteTag, ...]:
    tags = old.tags if old is not None else ()
    if tag:
        tags = coerce_tags((*tags, tag))
    return tags


def _merge_custom_title(old: SiteRecord | None, new: SiteRecord) -> str | None:
    if isinstance(new.custom_title, str):
        return new.custom_title
    return old.custom_title if old is not None else None


def _merge_last_accessed(new: SiteRecord, tag: SiteTag | None, clock: Clock) -> int:
    if tag in (SiteTag.BOOKMARK, SiteTag.BOOKMARK_FOLDER):
        return new.last_accessed_time or 0
    return new.last_accessed_time or clock()


def merge_site_details(
    old: SiteRecord | None,
    new: SiteRecord,
    tag: SiteTag | None = None,
    folder_id: int | None = None,
    clock: Clock = wall_clock_ms,
) -> SiteRecord:
    """Build the stored record for new, inheriting omitted details from old."""
    tags = _merge_tags(old, tag)
    custom_title = _merge_custom_title(old, new)

    parent_folder_id = None
    if new.parent_folder_id is not None:
        parent_folder_id = int(new.parent_folder_id)
    elif old is not None and old.parent_folder_id:
        parent_folder_id = int(old.parent_folder_id)

    # Explicit 0 on the new detail wins over the old partition
    partition_number = None
    if new.partition_number is not None:
        partition_number = int(new.partition_number)
    elif old is not None and old.partition_number:
        partition_number = int(old.partition_number)

    favicon = new.favicon or (old.favicon if old is not None else None)
    theme_color = new.theme_color or (old.theme_color if old is not None else None)

    count = None
    if not tags:
        count = ((old.count if old is not None else None) or 0) + 1

    return SiteRecord(
        location=new.location or None,
        title=new.title,
        custom_title=custom_title,
        tags=tags,
        last_accessed_time=_merge_last_accessed(new, tag, clock),
        count=count,
        folder_id=int(folder_id) if folder_id else None,
        parent_folder_id=parent_folder_id,
        partition_number=partition_number,
        favicon=favicon or None,
        theme_color=theme_color or None,
    )
