"""Site Queries — derived views over the site list (recents, bookmarks, folder trees).

Invariants:
    - All functions are PURE and total: bad input yields None / [] / the input list
    - filter_out_non_recents keeps every tagged record, in list order, before
      the capped tag-less records, most recent first
    - get_folders lists a parent before its children and siblings in list order
    - get_origin maps every file:// URL to the single FILE_ORIGIN root;
      URLs without "//" (mailto:, about:) yield scheme:host

Design Decisions:
    - Recents cap is a parameter, not a settings read: callers inject it
    - Folder listing walks a derived adjacency map and skips revisits
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from urllib.parse import urlsplit

from site_collection.core.boundary_protocols import FrameLike
from site_collection.core.domain_types import (
    DEFAULT_PARTITION, FILE_ORIGIN, ROOT_FOLDER_ID, SiteTag,
)
from site_collection.core.folder_tree import folder_children_map
from site_collection.core.site_lookup import is_bookmark, is_folder
from site_collection.core.site_record import SiteList, SiteRecord


@dataclass(frozen=True)
class FolderEntry:
    """One row of the folder picker."""
    folder_id: int | None
    parent_folder_id: int | None
    label: str

    def to_dict(self) -> dict:
        return {
            "folderId": self.folder_id,
            "parentFolderId": self.parent_folder_id,
            "label": self.label,
        }


@dataclass(frozen=True)
class FrameOpts:
    """What the viewing layer needs to open a record."""
    location: str | None
    partition_number: int | None

    def to_dict(self) -> dict:
        return {"location": self.location, "partitionNumber": self.partition_number}


# ─── Origins ──────────────────────────────────────────────────

_OPAQUE_HOST_END = re.compile(r"[/?#\s<>\"`{}|\\^']")
_HOSTLESS_SCHEMES = frozenset({"javascript"})


def _opaque_origin(scheme: str, rest: str) -> str | None:
    """scheme:host for URLs without "//", e.g. mailto:user@host -> mailto:host."""
    if scheme in _HOSTLESS_SCHEMES:
        return None
    host = _OPAQUE_HOST_END.split(rest, 1)[0].rpartition("@")[2].lower()
    if not host:
        return None
    return f"{scheme}:{host}"


def get_origin(location: object) -> str | None:
    """scheme + host (+ port) of location, FILE_ORIGIN for file URLs, else None."""
    if not isinstance(location, str):
        return None
    if location.startswith("file://"):
        return FILE_ORIGIN
    try:
        parsed = urlsplit(location)
        port = parsed.port
    except ValueError:
        return None
    if not parsed.scheme:
        return None
    if not parsed.netloc:
        return _opaque_origin(parsed.scheme, parsed.path)
    host = parsed.hostname
    if not host:
        return None
    if ":" in host:
        host = f"[{host}]"
    if port is not None:
        host = f"{host}:{port}"
    return f"{parsed.scheme}://{host}"


# ─── Filters ──────────────────────────────────────────────────

def filter_out_non_recents(sites: Sequence[SiteRecord], max_count: int) -> SiteList:
    """Tagged records plus the max_count most recently accessed history entries."""
    tagged = tuple(site for site in sites if site.tags)
    history = sorted(
        (site for site in sites if not site.tags),
        key=lambda site: site.last_accessed_time or 0,
        reverse=True,
    )
    return tagged + tuple(history[:max(max_count, 0)])


def filter_sites_relative_to(
    sites: Sequence[SiteRecord], folder: SiteRecord,
) -> SiteList:
    """Records directly inside folder; the whole list when folder has no folder_id."""
    sites = tuple(sites)
    if not folder.folder_id:
        return sites
    return tuple(site for site in sites if site.parent_folder_id == folder.folder_id)


def clear_history(sites: Sequence[SiteRecord]) -> SiteList:
    """Drop history entries and forget when the remaining bookmarks were visited."""
    return tuple(
        site.evolve(last_accessed_time=None) if site.last_accessed_time else site
        for site in sites
        if site.tags
    )


def has_no_tag_sites(sites: Sequence[SiteRecord]) -> bool:
    return any(not site.tags for site in sites)


def get_bookmarks(sites: Sequence[SiteRecord] | None) -> SiteList:
    """Bookmarks and bookmark folders."""
    if not sites:
        return ()
    return tuple(site for site in sites if is_folder(site) or is_bookmark(site))


# ─── Folder tree ──────────────────────────────────────────────

def get_folders(
    sites: Sequence[SiteRecord],
    exclude_folder_id: int | None = None,
    parent_id: int = ROOT_FOLDER_ID,
    label_prefix: str = "",
) -> list[FolderEntry]:
    """Depth-first folder listing with "Parent / Child" labels.

    exclude_folder_id drops that folder and its whole subtree, e.g. the
    folder being moved.
    """
    children = folder_children_map(sites)
    folders: list[FolderEntry] = []
    visited: set[int] = set()

    def walk(parent: int, prefix: str) -> None:
        for site in children.get(parent, ()):
            if site.folder_id == exclude_folder_id:
                continue
            label = prefix + site.display_title
            folders.append(FolderEntry(site.folder_id, site.parent_folder_id, label))
            if site.folder_id is None or site.folder_id in visited:
                continue
            visited.add(site.folder_id)
            walk(site.folder_id, label + " / ")

    walk(parent_id or ROOT_FOLDER_ID, label_prefix)
    return folders


# ─── Identity & projections ───────────────────────────────────

def is_equivalent(first: SiteRecord, second: SiteRecord) -> bool:
    """Same folder_id for two folders, same (location, partition) for two non-folders."""
    first_is_folder = is_folder(first)
    if first_is_folder != is_folder(second):
        return False
    if first_is_folder:
        return first.folder_id == second.folder_id
    return (
        first.location == second.location
        and (first.partition_number or DEFAULT_PARTITION)
        == (second.partition_number or DEFAULT_PARTITION)
    )


def to_frame_opts(site: SiteRecord) -> FrameOpts:
    return FrameOpts(site.location, site.partition_number)


def get_detail_from_frame(frame: FrameLike, tag: SiteTag | str | None = None) -> SiteRecord:
    """Site detail for a tab; pinned tabs use their pinned location when they have one."""
    tag = SiteTag(tag) if tag else None
    location = frame.location
    if frame.pinned_location and tag == SiteTag.PINNED:
        location = frame.pinned_location
    return SiteRecord(
        location=location,
        title=frame.title,
        partition_number=frame.partition_number,
        tags=(tag,) if tag else (),
        favicon=frame.icon,
        theme_color=frame.theme_color or frame.computed_theme_color,
    )
