"""Identity & Lookup — tag-aware record identity over the flat site list.

Invariants:
    - Folder context matches folder records by folder_id only
    - Any other context matches by (location, partition_number or 0)
    - The list holds at most one match per identity rule (not checked here;
      see enforce_invariants)
    - next_folder_id is strictly greater than every folder_id in the list

Design Decisions:
    - site_kind centralizes tag branching; callers ask for a kind instead of
      probing tag membership
    - Missing list or detail yields -1 / False, never an exception
"""

from collections.abc import Sequence

from site_collection.core.domain_types import (
    DEFAULT_PARTITION, FIRST_FOLDER_ID, SiteKind, SiteTag,
)
from site_collection.core.site_record import SiteRecord, TagsLike, coerce_tags


def has_tag(tags: TagsLike, tag: SiteTag) -> bool:
    """Whether a tag argument (single tag, collection or None) contains tag."""
    return tag in coerce_tags(tags)


def is_bookmark(detail: SiteRecord | None) -> bool:
    if detail is None:
        return False
    return SiteTag.BOOKMARK in detail.tags


def is_folder(detail: SiteRecord | None) -> bool:
    if detail is None:
        return False
    return SiteTag.BOOKMARK_FOLDER in detail.tags


def is_history_entry(detail: SiteRecord | None) -> bool:
    """Visited, non-folder, non-internal page."""
    if detail is None or not isinstance(detail.location, str):
        return False
    if detail.location.startswith("about:"):
        return False
    return bool(detail.last_accessed_time) and not is_folder(detail)


def site_kind(detail: SiteRecord) -> SiteKind:
    """Derive the record variant. Precedence: folder > bookmark > pinned > other."""
    if not detail.tags:
        return SiteKind.HISTORY
    if SiteTag.BOOKMARK_FOLDER in detail.tags:
        return SiteKind.FOLDER
    if SiteTag.BOOKMARK in detail.tags:
        return SiteKind.BOOKMARK
    if SiteTag.PINNED in detail.tags:
        return SiteKind.PINNED
    return SiteKind.OTHER


def location_key(detail: SiteRecord) -> tuple[str | None, int]:
    """Identity of a non-folder record."""
    return detail.location, detail.partition_number or DEFAULT_PARTITION


def find_site_index(
    sites: Sequence[SiteRecord] | None,
    detail: SiteRecord | None,
    tags: TagsLike = None,
) -> int:
    """Index of the record matching detail under the identity rule for tags, or -1."""
    if not sites or detail is None:
        return -1
    if has_tag(tags, SiteTag.BOOKMARK_FOLDER):
        for index, site in enumerate(sites):
            if is_folder(site) and site.folder_id == detail.folder_id:
                return index
        return -1
    key = location_key(detail)
    for index, site in enumerate(sites):
        if location_key(site) == key:
            return index
    return -1


def is_site_bookmarked(
    sites: Sequence[SiteRecord] | None, detail: SiteRecord | None,
) -> bool:
    index = find_site_index(sites, detail, SiteTag.BOOKMARK)
    if index == -1:
        return False
    return is_bookmark(sites[index])


def next_folder_id(sites: Sequence[SiteRecord] | None) -> int:
    """max(folder_id) + 1 over records exposing a folder_id; 1 when there are none."""
    folder_ids = [site.folder_id for site in sites or () if site.folder_id is not None]
    if not folder_ids:
        return FIRST_FOLDER_ID
    return max(max(folder_ids), 0) + 1
