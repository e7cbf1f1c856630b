"""Site Store — single-writer container around the authoritative site list.

Invariants:
    - The store is the only writer: every transition goes through _apply
    - Core functions receive the clock, normalizer and recents cap explicitly
    - In strict mode a transition that breaks a structural invariant is
      rejected with SiteInvariantError and the previous list stays current
    - Undo history is bounded by undo_depth; unchanged results are not recorded

Design Decisions:
    - Imperative shell around the pure core: logging, settings and snapshots
      live here, never in core/
    - Snapshots are the immutable tuples themselves, so undo is a pointer swap
"""

import logging
from collections import deque
from collections.abc import Callable, Iterable

from site_collection.config import Settings, get_settings
from site_collection.core.boundary_protocols import (
    Clock, SettingsProvider, UrlNormalizer, wall_clock_ms,
)
from site_collection.core.domain_types import AUTOCOMPLETE_HISTORY_SIZE_KEY, SiteTag
from site_collection.core.enforce_invariants import validate_site_list
from site_collection.core.errors import ErrorContext, SiteInvariantError
from site_collection.core.site_mutation import (
    add_site, move_site, remove_site, update_site_favicon,
)
from site_collection.core.site_queries import (
    FolderEntry, clear_history, filter_out_non_recents, get_bookmarks, get_folders,
)
from site_collection.core.site_record import SiteList, SiteRecord
from site_collection.infrastructure.observability import operation_extra
from site_collection.infrastructure.settings_provider import AppSettingsProvider
from site_collection.infrastructure.url_normalizer import normalize_url

logger = logging.getLogger(__name__)


class SiteStore:
    """Holds the current site list and applies core transitions to it."""

    def __init__(
        self,
        sites: Iterable[SiteRecord] = (),
        *,
        settings: Settings | None = None,
        settings_provider: SettingsProvider | None = None,
        clock: Clock = wall_clock_ms,
        normalizer: UrlNormalizer = normalize_url,
    ):
        self._settings = settings or get_settings()
        self._settings_provider = settings_provider or AppSettingsProvider(self._settings)
        self._clock = clock
        self._normalizer = normalizer
        self._sites: SiteList = tuple(sites)
        self._undo: deque[SiteList] = deque(maxlen=max(self._settings.undo_depth, 0))

    @property
    def sites(self) -> SiteList:
        return self._sites

    def __len__(self) -> int:
        return len(self._sites)

    # ─── Transitions ──────────────────────────────────────────

    def _apply(
        self, operation: str, transition: Callable[[SiteList], SiteList], **fields: object,
    ) -> SiteList:
        before = self._sites
        after = transition(before)
        if after is before:
            logger.debug(f"{operation}: no change", extra=operation_extra(
                operation, before, after, **fields,
            ))
            return before

        if self._settings.enforce_invariants:
            violation = validate_site_list(after)
            if violation is not None:
                logger.error(
                    f"{operation} rejected: {violation['message']}",
                    extra=operation_extra(
                        operation, before, after,
                        error_code=violation["error_code"], **fields,
                    ),
                )
                raise SiteInvariantError(violation, ErrorContext(operation=operation))

        self._undo.append(before)
        self._sites = after
        logger.info(operation, extra=operation_extra(operation, before, after, **fields))
        return after

    def add(
        self,
        detail: SiteRecord,
        tag: SiteTag | str | None = None,
        original_detail: SiteRecord | None = None,
    ) -> SiteList:
        return self._apply(
            "add_site",
            lambda sites: add_site(sites, detail, tag, original_detail, self._clock),
            location=detail.location, folder_id=detail.folder_id,
        )

    def remove(self, detail: SiteRecord, tag: SiteTag | str | None = None) -> SiteList:
        return self._apply(
            "remove_site",
            lambda sites: remove_site(sites, detail, tag),
            location=detail.location, folder_id=detail.folder_id,
        )

    def move(
        self,
        source: SiteRecord,
        destination: SiteRecord,
        prepend: bool = False,
        destination_is_parent: bool = False,
        disallow_reparent: bool = False,
    ) -> SiteList:
        return self._apply(
            "move_site",
            lambda sites: move_site(
                sites, source, destination,
                prepend, destination_is_parent, disallow_reparent,
            ),
            location=source.location, folder_id=source.folder_id,
        )

    def update_favicon(self, location: str, favicon: str | None) -> SiteList:
        return self._apply(
            "update_site_favicon",
            lambda sites: update_site_favicon(sites, location, favicon, self._normalizer),
            location=location,
        )

    def clear_history(self) -> SiteList:
        return self._apply("clear_history", clear_history)

    def undo(self) -> bool:
        """Restore the list before the last applied transition."""
        if not self._undo:
            return False
        self._sites = self._undo.pop()
        logger.info("undo", extra={"operation": "undo", "site_count": len(self._sites)})
        return True

    # ─── Views ────────────────────────────────────────────────

    def recents(self) -> SiteList:
        """Tagged sites plus the configured number of most recent history entries."""
        max_count = self._settings_provider.get_setting(AUTOCOMPLETE_HISTORY_SIZE_KEY)
        if max_count is None:
            max_count = self._settings.autocomplete_history_size
        return filter_out_non_recents(self._sites, int(max_count))

    def bookmarks(self) -> SiteList:
        return get_bookmarks(self._sites)

    def folders(self, exclude_folder_id: int | None = None) -> list[FolderEntry]:
        return get_folders(self._sites, exclude_folder_id)
