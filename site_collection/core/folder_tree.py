"""Folder Tree — traversal helpers over the tree encoded by parent_folder_id.

Invariants:
    - The flat ordered site list stays the source of truth; maps here are
      derived on demand and never stored
    - Sibling order in derived maps equals list order
    - Walks stop on a revisited folder id, so a corrupt cyclic tree terminates

Design Decisions:
    - Adjacency map built once per traversal instead of a linear scan per level
"""

from collections.abc import Sequence

from site_collection.core.domain_types import ROOT_FOLDER_ID
from site_collection.core.site_lookup import is_folder
from site_collection.core.site_record import SiteRecord


def folder_children_map(sites: Sequence[SiteRecord]) -> dict[int, list[SiteRecord]]:
    """parent folder id (0 for top level) -> folder records, in list order."""
    children: dict[int, list[SiteRecord]] = {}
    for site in sites:
        if is_folder(site):
            children.setdefault(site.parent_folder_id or ROOT_FOLDER_ID, []).append(site)
    return children


def child_sites(sites: Sequence[SiteRecord], folder_id: int | None) -> list[SiteRecord]:
    """Every record (folder or not) living directly inside folder_id."""
    return [site for site in sites if site.parent_folder_id == folder_id]


def find_folder(sites: Sequence[SiteRecord], folder_id: int) -> SiteRecord | None:
    for site in sites:
        if site.folder_id == folder_id:
            return site
    return None


def ancestor_folder_ids(sites: Sequence[SiteRecord], record: SiteRecord) -> list[int]:
    """Folder ids from record's parent up to the top level, nearest first."""
    ancestors: list[int] = []
    parent_id = record.parent_folder_id
    while parent_id and parent_id not in ancestors:
        ancestors.append(parent_id)
        parent = find_folder(sites, parent_id)
        if parent is None:
            break
        parent_id = parent.parent_folder_id
    return ancestors
