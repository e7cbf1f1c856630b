"""Site List Invariant Enforcement — structural checks over a whole site list.

Invariants:
    - All functions are PURE: no IO, no side effects
    - Return error dict on violation, None on success
    - A violation is a programming error in a caller, never an expected state

Design Decisions:
    - Checks run in the shell after each mutation (strict mode), not inside
      the mutations themselves: the core stays total and cheap
"""

from collections.abc import Sequence

from site_collection.core.domain_types import ROOT_FOLDER_ID
from site_collection.core.folder_tree import ancestor_folder_ids
from site_collection.core.site_lookup import is_folder
from site_collection.core.site_record import SiteRecord


def check_unique_folder_ids(sites: Sequence[SiteRecord]) -> dict | None:
    """Every folder_id appears on at most one folder."""
    seen: set[int] = set()
    for site in sites:
        if not is_folder(site) or site.folder_id is None:
            continue
        if site.folder_id in seen:
            return _error(
                "DUPLICATE_FOLDER_ID",
                f"Folder id {site.folder_id} is used by more than one folder.",
            )
        seen.add(site.folder_id)
    return None


def check_folder_tree_acyclic(sites: Sequence[SiteRecord]) -> dict | None:
    """No folder is its own ancestor."""
    for site in sites:
        if not is_folder(site) or site.folder_id is None:
            continue
        if site.folder_id in ancestor_folder_ids(sites, site):
            return _error(
                "FOLDER_CYCLE",
                f"Folder {site.folder_id} is its own ancestor.",
            )
    return None


def check_no_duplicate_folders(sites: Sequence[SiteRecord]) -> dict | None:
    """No two folders share (parent_folder_id, custom_title)."""
    seen: set[tuple[int, str | None]] = set()
    for site in sites:
        if not is_folder(site):
            continue
        key = (site.parent_folder_id or ROOT_FOLDER_ID, site.custom_title)
        if key in seen:
            return _error(
                "DUPLICATE_FOLDER",
                f"Folder {site.custom_title!r} appears twice under folder {key[0]}.",
            )
        seen.add(key)
    return None


def check_history_counts(sites: Sequence[SiteRecord]) -> dict | None:
    """Visit counts live only on tag-less records."""
    for site in sites:
        if site.tags and site.count is not None:
            return _error(
                "COUNT_ON_TAGGED_SITE",
                f"Tagged site {site.location!r} carries a visit count.",
            )
    return None


def validate_site_list(sites: Sequence[SiteRecord]) -> dict | None:
    """First violation found across all checks, or None."""
    for check in (
        check_unique_folder_ids,
        check_folder_tree_acyclic,
        check_no_duplicate_folders,
        check_history_counts,
    ):
        error = check(sites)
        if error is not None:
            return error
    return None


def _error(code: str, message: str) -> dict:
    """Build standard error response dict."""
    return {"status": "error", "error_code": code, "message": message}
