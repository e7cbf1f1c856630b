"""Site Merge — tests for the record computed from old + new details.

Tests cover:
    - Tag accumulation without duplicates
    - customTitle precedence (explicit string, including "", wins)
    - lastAccessedTime defaults: 0 for bookmarks/folders, clock for history
    - parent/partition/favicon/themeColor inheritance
    - Visit count only on tag-less records
"""

from site_collection.core.domain_types import SiteTag
from site_collection.core.site_merge import merge_site_details
from site_collection.core.site_record import SiteRecord

from site_builders import FIXED_NOW, bookmark, history


def _clock():
    return FIXED_NOW


# ─── Tags ────────────────────────────────────────────────────────

def test_merge_adds_tag_to_old_tags():
    old = SiteRecord(location="https://a.com", tags=(SiteTag.PINNED,))
    merged = merge_site_details(old, history("https://a.com"), SiteTag.BOOKMARK, clock=_clock)
    assert set(merged.tags) == {SiteTag.PINNED, SiteTag.BOOKMARK}


def test_merge_does_not_duplicate_tag():
    old = bookmark("https://a.com")
    merged = merge_site_details(old, bookmark("https://a.com"), SiteTag.BOOKMARK, clock=_clock)
    assert merged.tags == (SiteTag.BOOKMARK,)


def test_merge_without_old_or_tag_has_no_tags():
    merged = merge_site_details(None, history("https://a.com"), None, clock=_clock)
    assert merged.tags == ()


# ─── customTitle ─────────────────────────────────────────────────

def test_new_custom_title_wins():
    old = bookmark("https://a.com", custom_title="Old")
    new = bookmark("https://a.com", custom_title="New")
    assert merge_site_details(old, new, SiteTag.BOOKMARK).custom_title == "New"


def test_empty_custom_title_is_an_explicit_value():
    old = bookmark("https://a.com", custom_title="Old")
    new = bookmark("https://a.com", custom_title="")
    assert merge_site_details(old, new, SiteTag.BOOKMARK).custom_title == ""


def test_custom_title_falls_back_to_old():
    old = bookmark("https://a.com", custom_title="Old")
    assert merge_site_details(old, bookmark("https://a.com"), SiteTag.BOOKMARK).custom_title == "Old"


def test_title_always_comes_from_new_detail():
    old = bookmark("https://a.com", title="Old")
    assert merge_site_details(old, bookmark("https://a.com"), SiteTag.BOOKMARK).title is None


# ─── lastAccessedTime ────────────────────────────────────────────

def test_bookmark_without_timestamp_defaults_to_zero():
    merged = merge_site_details(None, SiteRecord(location="https://a.com"), SiteTag.BOOKMARK, clock=_clock)
    assert merged.last_accessed_time == 0


def test_folder_without_timestamp_defaults_to_zero():
    merged = merge_site_details(None, SiteRecord(custom_title="F"), SiteTag.BOOKMARK_FOLDER, 1, _clock)
    assert merged.last_accessed_time == 0


def test_history_without_timestamp_uses_clock():
    merged = merge_site_details(None, SiteRecord(location="https://a.com"), None, clock=_clock)
    assert merged.last_accessed_time == FIXED_NOW


def test_explicit_timestamp_is_kept():
    merged = merge_site_details(None, history("https://a.com", last_accessed=42), None, clock=_clock)
    assert merged.last_accessed_time == 42


# ─── Inherited details ───────────────────────────────────────────

def test_folder_id_set_only_when_given():
    assert merge_site_details(None, SiteRecord(), SiteTag.BOOKMARK_FOLDER, 9).folder_id == 9
    assert merge_site_details(None, SiteRecord(), SiteTag.BOOKMARK_FOLDER, None).folder_id is None


def test_parent_folder_id_inherited_from_old():
    old = bookmark("https://a.com", parent=4)
    assert merge_site_details(old, bookmark("https://a.com"), SiteTag.BOOKMARK).parent_folder_id == 4


def test_parent_folder_id_from_new_wins_even_when_zero():
    old = bookmark("https://a.com", parent=4)
    new = bookmark("https://a.com", parent=0)
    assert merge_site_details(old, new, SiteTag.BOOKMARK).parent_folder_id == 0


def test_partition_zero_on_new_detail_overrides_old():
    old = history("https://a.com", partition_number=3)
    new = history("https://a.com", partition_number=0)
    assert merge_site_details(old, new, None, clock=_clock).partition_number == 0


def test_partition_inherited_from_old_when_absent():
    old = history("https://a.com", partition_number=3)
    assert merge_site_details(old, history("https://a.com"), None, clock=_clock).partition_number == 3


def test_favicon_and_theme_color_inherited():
    old = history("https://a.com", favicon="a.ico", theme_color="#fff")
    merged = merge_site_details(old, history("https://a.com"), None, clock=_clock)
    assert merged.favicon == "a.ico"
    assert merged.theme_color == "#fff"


def test_new_favicon_wins():
    old = history("https://a.com", favicon="a.ico")
    merged = merge_site_details(old, history("https://a.com", favicon="b.ico"), None, clock=_clock)
    assert merged.favicon == "b.ico"


def test_location_absent_for_folders():
    merged = merge_site_details(None, SiteRecord(custom_title="F"), SiteTag.BOOKMARK_FOLDER, 1)
    assert merged.location is None


# ─── count ───────────────────────────────────────────────────────

def test_first_visit_counts_one():
    merged = merge_site_details(None, history("https://a.com"), None, clock=_clock)
    assert merged.count == 1


def test_repeat_visit_increments_old_count():
    old = history("https://a.com", count=4)
    assert merge_site_details(old, history("https://a.com"), None, clock=_clock).count == 5


def test_tagged_record_has_no_count():
    old = history("https://a.com", count=4)
    assert merge_site_details(old, history("https://a.com"), SiteTag.BOOKMARK).count is None
