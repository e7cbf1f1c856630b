"""Site Mutation — add, remove, move and favicon updates on the site list.

Invariants:
    - All functions are PURE: input sequences are never mutated, a new tuple is returned
    - A call that changes nothing returns the input tuple itself
    - New folders get next_folder_id unless the detail carries its own folder_id
    - Importing a folder with an explicit folder_id first removes any folder
      sharing its (parent_folder_id, custom_title)
    - Removing a folder removes every child for each of the child's tags first
    - A folder can never be moved into itself or one of its descendants

Design Decisions:
    - Copy-on-write tuple slicing over in-place edits: prior snapshots stay valid
    - Cascade tracks visited folder ids: a corrupt cyclic tree terminates
"""

from collections.abc import Sequence

from site_collection.core.boundary_protocols import Clock, UrlNormalizer, wall_clock_ms
from site_collection.core.domain_types import ROOT_FOLDER_ID, SiteTag
from site_collection.core.folder_tree import ancestor_folder_ids, child_sites
from site_collection.core.site_lookup import find_site_index, is_folder, next_folder_id
from site_collection.core.site_merge import merge_site_details
from site_collection.core.site_record import SiteList, SiteRecord
from site_collection.core.url_rules import is_not_url


def _replace_at(sites: SiteList, index: int, site: SiteRecord) -> SiteList:
    return sites[:index] + (site,) + sites[index + 1:]


def _delete_at(sites: SiteList, index: int) -> SiteList:
    return sites[:index] + sites[index + 1:]


def _insert_at(sites: SiteList, index: int, site: SiteRecord) -> SiteList:
    return sites[:index] + (site,) + sites[index:]


# ─── add_site ─────────────────────────────────────────────────

def _find_duplicate_folder(sites: SiteList, detail: SiteRecord) -> SiteRecord | None:
    # None and 0 both mean top level
    parent = detail.parent_folder_id or ROOT_FOLDER_ID
    for site in sites:
        if (
            is_folder(site)
            and (site.parent_folder_id or ROOT_FOLDER_ID) == parent
            and site.custom_title == detail.custom_title
        ):
            return site
    return None


def add_site(
    sites: Sequence[SiteRecord] | None,
    detail: SiteRecord,
    tag: SiteTag | str | None = None,
    original_detail: SiteRecord | None = None,
    clock: Clock = wall_clock_ms,
) -> SiteList:
    """Add detail or update the record it identifies.

    tag defaults to the first tag on detail. original_detail, when given, is
    used for the lookup instead of detail (renames, moves between folders).
    """
    sites = tuple(sites or ())
    if tag is None and detail.tags:
        tag = detail.tags[0]
    tag = SiteTag(tag) if tag else None

    index = find_site_index(sites, original_detail or detail, tag)
    old = sites[index] if index != -1 else None
    folder_id = detail.folder_id

    if tag == SiteTag.BOOKMARK_FOLDER:
        if old is None and folder_id:
            # Import path: drop the folder this one replaces
            duplicate = _find_duplicate_folder(sites, detail)
            if duplicate is not None:
                sites = remove_site(sites, duplicate, SiteTag.BOOKMARK_FOLDER)
        elif not folder_id:
            folder_id = next_folder_id(sites)

    site = merge_site_details(old, detail, tag, folder_id, clock)
    if index == -1:
        return sites + (site,)
    return _replace_at(sites, index, site)


# ─── remove_site ──────────────────────────────────────────────

def _remove_site(
    sites: SiteList, detail: SiteRecord, tag: SiteTag | None, visited: set[int],
) -> SiteList:
    context = tag if tag else detail.tags
    index = find_site_index(sites, detail, context)
    if index == -1:
        return sites

    target = sites[index]
    if is_folder(target) and target.folder_id not in visited:
        visited.add(target.folder_id)
        for child in child_sites(sites, target.folder_id):
            for child_tag in child.tags:
                sites = _remove_site(sites, child, child_tag, visited)
        index = find_site_index(sites, detail, context)
        if index == -1:
            return sites
        target = sites[index]

    if not target.tags and not tag:
        return _delete_at(sites, index)
    if not tag:
        # Bookmark keeps its identity, only its history is cleared
        return _replace_at(sites, index, target.evolve(last_accessed_time=None))
    return _replace_at(sites, index, target.evolve(
        parent_folder_id=ROOT_FOLDER_ID,
        custom_title=None,
        tags=tuple(t for t in target.tags if t != tag),
    ))


def remove_site(
    sites: Sequence[SiteRecord] | None,
    detail: SiteRecord | None,
    tag: SiteTag | str | None = None,
) -> SiteList:
    """Strip tag from the record identified by detail, or drop its history when no tag.

    A tag-less record removed without a tag is deleted outright.
    """
    sites = tuple(sites or ())
    if detail is None:
        return sites
    return _remove_site(sites, detail, SiteTag(tag) if tag else None, set())


# ─── Moves ────────────────────────────────────────────────────

def is_move_allowed(
    sites: Sequence[SiteRecord], source: SiteRecord, destination: SiteRecord,
) -> bool:
    """Folders cannot become their own parent or move under a descendant."""
    if isinstance(destination.parent_folder_id, int) and isinstance(source.folder_id, int):
        if source.folder_id == destination.folder_id:
            return False
        if source.folder_id in ancestor_folder_ids(sites, destination):
            return False
    return True


def move_site(
    sites: Sequence[SiteRecord] | None,
    source: SiteRecord,
    destination: SiteRecord,
    prepend: bool = False,
    destination_is_parent: bool = False,
    disallow_reparent: bool = False,
) -> SiteList:
    """Move source next to destination, or to the end of the list inside it.

    prepend places source before destination and is ignored when
    destination_is_parent is set. disallow_reparent keeps source's
    parent_folder_id as is.
    """
    sites = tuple(sites or ())
    if not is_move_allowed(sites, source, destination):
        return sites

    source_index = find_site_index(sites, source, source.tags)
    if destination_is_parent:
        destination_index = len(sites) - 1
        prepend = False
    else:
        destination_index = find_site_index(sites, destination, destination.tags)
    if source_index == -1 or destination_index == -1:
        return sites

    new_index = destination_index + (0 if prepend else 1)
    source_site = sites[source_index]
    destination_site = sites[destination_index]
    sites = _delete_at(sites, source_index)
    if new_index > source_index:
        new_index -= 1

    if not disallow_reparent:
        if destination_is_parent and destination.folder_id != source_site.folder_id:
            source_site = source_site.evolve(parent_folder_id=destination.folder_id)
        elif not destination_site.parent_folder_id:
            source_site = source_site.evolve(parent_folder_id=None)
        elif destination_site.parent_folder_id != source_site.parent_folder_id:
            source_site = source_site.evolve(
                parent_folder_id=destination_site.parent_folder_id,
            )
    return _insert_at(sites, new_index, source_site)


# ─── Favicons ─────────────────────────────────────────────────

def _normalized(location: str, normalizer: UrlNormalizer | None) -> str:
    if normalizer is None:
        return location
    try:
        return normalizer(location)
    except ValueError:
        return location


def update_site_favicon(
    sites: Sequence[SiteRecord] | None,
    location: str,
    favicon: str | None,
    normalizer: UrlNormalizer | None = None,
) -> SiteList:
    """Set favicon on every non-folder record whose normalized location matches."""
    sites = tuple(sites or ())
    if is_not_url(location):
        return sites

    target = _normalized(location, normalizer)
    updated = sites
    for index, site in enumerate(sites):
        if is_folder(site) or is_not_url(site.location):
            continue
        if _normalized(site.location, normalizer) == target:
            updated = _replace_at(updated, index, site.evolve(favicon=favicon))
    return updated
