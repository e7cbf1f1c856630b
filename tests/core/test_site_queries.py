"""Site Queries — tests for derived views over the site list.

Tests cover:
    - get_origin for http(s), ports, file URLs, slash-less URLs and non-strings
    - filter_out_non_recents ordering and cap
    - filter_sites_relative_to, clear_history, has_no_tag_sites, get_bookmarks
    - get_folders labels, ordering and exclusion
    - is_equivalent, to_frame_opts, get_detail_from_frame
"""

from site_collection.core.domain_types import SiteTag
from site_collection.core.site_queries import (
    FolderEntry,
    clear_history,
    filter_out_non_recents,
    filter_sites_relative_to,
    get_bookmarks,
    get_detail_from_frame,
    get_folders,
    get_origin,
    has_no_tag_sites,
    is_equivalent,
    to_frame_opts,
)
from site_collection.core.site_record import SiteRecord
from site_collection.schemas.site import FrameSnapshot

from site_builders import bookmark, folder, history


# ─── get_origin ──────────────────────────────────────────────────

def test_origin_keeps_port():
    assert get_origin("https://example.com:8080/path") == "https://example.com:8080"


def test_origin_without_port():
    assert get_origin("http://Example.com/a?b=c#d") == "http://example.com"


def test_origin_of_file_url_is_file_root():
    assert get_origin("file:///Users/x") == "file:///"


def test_origin_of_non_string_is_none():
    assert get_origin(42) is None
    assert get_origin(None) is None


def test_origin_without_host_is_none():
    assert get_origin("not a url") is None
    assert get_origin("javascript:alert(1)") is None
    assert get_origin("http:///path") is None


def test_origin_without_slashes_is_scheme_and_host():
    assert get_origin("mailto:user@Host.com") == "mailto:host.com"
    assert get_origin("mailto:user@host.com?subject=hi") == "mailto:host.com"
    assert get_origin("about:blank") == "about:blank"


def test_origin_with_bad_port_is_none():
    assert get_origin("http://example.com:notaport/") is None


# ─── filter_out_non_recents ──────────────────────────────────────

def test_recents_keeps_tagged_and_caps_history_most_recent_first():
    sites = (
        history("https://h1.com", last_accessed=30),
        bookmark("https://b.com", last_accessed_time=1),
        history("https://h2.com", last_accessed=50),
        history("https://h3.com", last_accessed=10),
        folder(1, "F"),
        history("https://h4.com", last_accessed=40),
        history("https://h5.com", last_accessed=20),
    )
    result = filter_out_non_recents(sites, 3)
    assert [s.location for s in result] == [
        "https://b.com", None,
        "https://h2.com", "https://h4.com", "https://h1.com",
    ]


def test_recents_missing_timestamp_sorts_last():
    sites = (history("https://old.com", last_accessed=None), history("https://new.com", last_accessed=5))
    assert [s.location for s in filter_out_non_recents(sites, 2)] == [
        "https://new.com", "https://old.com",
    ]


def test_recents_with_zero_cap_keeps_only_tagged():
    sites = (history("https://h.com"), bookmark("https://b.com"))
    assert filter_out_non_recents(sites, 0) == (sites[1],)


# ─── Filters ─────────────────────────────────────────────────────

def test_filter_relative_to_folder():
    sites = (folder(1, "F"), bookmark("https://a.com", parent=1), bookmark("https://b.com"))
    assert filter_sites_relative_to(sites, sites[0]) == (sites[1],)


def test_filter_relative_to_non_folder_returns_everything():
    sites = (bookmark("https://a.com", parent=1), bookmark("https://b.com"))
    assert filter_sites_relative_to(sites, bookmark("https://x.com")) == sites


def test_clear_history_drops_history_and_forgets_visits():
    sites = (
        history("https://h.com", last_accessed=9),
        bookmark("https://b.com", last_accessed_time=9),
        bookmark("https://never.com", last_accessed_time=0),
    )
    result = clear_history(sites)
    assert [s.location for s in result] == ["https://b.com", "https://never.com"]
    assert result[0].last_accessed_time is None
    assert result[1].last_accessed_time == 0


def test_has_no_tag_sites():
    assert has_no_tag_sites((bookmark("https://b.com"), history("https://h.com")))
    assert not has_no_tag_sites((bookmark("https://b.com"),))


def test_get_bookmarks_keeps_bookmarks_and_folders():
    sites = (
        history("https://h.com"), bookmark("https://b.com"), folder(1, "F"),
        SiteRecord(location="https://p.com", tags=(SiteTag.PINNED,)),
    )
    assert get_bookmarks(sites) == (sites[1], sites[2])


def test_get_bookmarks_of_missing_list():
    assert get_bookmarks(None) == ()


# ─── get_folders ─────────────────────────────────────────────────

def _folder_tree():
    return (
        folder(1, "A"),
        bookmark("https://x.com", parent=1),
        folder(4, "D", parent=0),
        folder(2, "B", parent=1),
        folder(3, "C", parent=2),
    )


def test_get_folders_lists_parents_before_children():
    result = get_folders(_folder_tree())
    assert [(f.folder_id, f.label) for f in result] == [
        (1, "A"), (2, "A / B"), (3, "A / B / C"), (4, "D"),
    ]
    assert result[1] == FolderEntry(2, 1, "A / B")


def test_get_folders_excludes_subtree():
    result = get_folders(_folder_tree(), exclude_folder_id=2)
    assert [f.label for f in result] == ["A", "D"]


def test_get_folders_from_nested_parent_with_prefix():
    result = get_folders(_folder_tree(), parent_id=1, label_prefix="A / ")
    assert [f.label for f in result] == ["A / B", "A / B / C"]


def test_get_folders_falls_back_to_title():
    sites = (SiteRecord(title="Plain", folder_id=1, tags=(SiteTag.BOOKMARK_FOLDER,)),)
    assert get_folders(sites)[0].label == "Plain"


def test_folder_entry_to_dict():
    assert FolderEntry(2, 1, "A / B").to_dict() == {
        "folderId": 2, "parentFolderId": 1, "label": "A / B",
    }


# ─── Identity & projections ──────────────────────────────────────

def test_folders_with_same_id_are_equivalent():
    assert is_equivalent(folder(5, "One"), folder(5, "Two"))
    assert not is_equivalent(folder(5, "One"), folder(6, "One"))


def test_folder_is_never_equivalent_to_non_folder():
    assert not is_equivalent(folder(5, "F"), bookmark("https://a.com", folder_id=5))


def test_non_folders_compare_location_and_partition():
    assert is_equivalent(bookmark("https://a.com"), history("https://a.com", partition_number=0))
    assert not is_equivalent(history("https://a.com"), history("https://a.com", partition_number=2))
    assert not is_equivalent(history("https://a.com"), history("https://b.com"))


def test_to_frame_opts():
    opts = to_frame_opts(history("https://a.com", partition_number=3))
    assert opts.to_dict() == {"location": "https://a.com", "partitionNumber": 3}


def test_detail_from_frame():
    frame = FrameSnapshot(
        location="https://a.com", title="A", partition_number=1,
        icon="a.ico", computed_theme_color="#123",
    )
    detail = get_detail_from_frame(frame)
    assert detail.location == "https://a.com"
    assert detail.title == "A"
    assert detail.partition_number == 1
    assert detail.favicon == "a.ico"
    assert detail.theme_color == "#123"
    assert detail.tags == ()


def test_detail_from_pinned_frame_uses_pinned_location():
    frame = FrameSnapshot(
        location="https://a.com/page", pinned_location="https://a.com", theme_color="#fff",
    )
    detail = get_detail_from_frame(frame, SiteTag.PINNED)
    assert detail.location == "https://a.com"
    assert detail.tags == (SiteTag.PINNED,)
    assert detail.theme_color == "#fff"


def test_detail_from_frame_ignores_pinned_location_for_other_tags():
    frame = FrameSnapshot(location="https://a.com/page", pinned_location="https://a.com")
    assert get_detail_from_frame(frame, SiteTag.BOOKMARK).location == "https://a.com/page"
