"""Tests for tag length enforcement."""

import logging

from build_tag_generator.length_enforcement import enforce_length, shrink_segments
from build_tag_generator.models import TagField

SERVICE = TagField.SERVICE
DATE = TagField.DATE
BRANCH = TagField.BRANCH


def test_short_tag_is_unchanged():
    """Test that a tag within the limit is returned as is."""
    segments = ((SERVICE, "api"), (DATE, "2024-01-15"), (BRANCH, "main"))
    assert enforce_length(segments, 63, "00") == "api_2024-01-15_main_00"


def test_exact_length_is_unchanged():
    """Test the boundary where the tag is exactly max_length long."""
    segments = ((BRANCH, "main"), (DATE, "2024-01-15"))
    assert enforce_length(segments, 15) == "main_2024-01-15"


def test_truncation_preserves_counter():
    """Test that the counter suffix survives truncation intact."""
    segments = (
        (SERVICE, "very-long-service-name"),
        (DATE, "2024-01-15"),
        (BRANCH, "feature-login"),
    )
    tag = enforce_length(segments, 20, "03")
    assert len(tag) == 20
    assert tag.endswith("_03")
    assert tag == "v_2024_feature-lo_03"


def test_branch_excess_is_cut_first():
    """Test that branch characters beyond the reserved span go first."""
    segments = ((SERVICE, "api"), (DATE, "2024-01-15"), (BRANCH, "feature-user-login"))
    assert enforce_length(segments, 29, "00") == "api_2024-01-15_feature-use_00"


def test_service_is_cut_before_reserved_branch():
    """Test that a long service is shortened instead of the branch floor."""
    segments = (
        (SERVICE, "payment-gateway-service"),
        (DATE, "2024-01-15"),
        (BRANCH, "feature-user-login"),
    )
    assert enforce_length(segments, 30, "01") == "payme_2024-01-15_feature-us_01"


def test_date_is_cut_after_service():
    """Test that the date shrinks once the service is down to one character."""
    segments = ((SERVICE, "service"), (DATE, "2024-01-15"), (BRANCH, "feature-login"))
    assert enforce_length(segments, 18, "00") == "s_20_feature-lo_00"


def test_branch_floor_cut_as_last_resort(caplog):
    """Test that the reserved branch span is cut only when nothing else is left."""
    segments = ((SERVICE, "svc"), (DATE, "2024-01-15"), (BRANCH, "feature-login"))
    with caplog.at_level(logging.WARNING):
        tag = enforce_length(segments, 12, "00")
    assert tag == "s_2_featu_00"
    assert "reserved characters" in caplog.text


def test_separators_are_never_removed():
    """Test that truncation only shortens field content."""
    segments = ((BRANCH, "feature-login"), (DATE, "2024-01-15"))
    assert enforce_length(segments, 14, "07") == "feature-l_2_07"


def test_impossible_length_returns_shortest_tag(caplog):
    """Test best effort when even one character per field does not fit."""
    segments = ((SERVICE, "api"), (DATE, "2024-01-15"), (BRANCH, "main"))
    with caplog.at_level(logging.WARNING):
        tag = enforce_length(segments, 5, "00")
    assert tag == "a_2_m_00"
    assert "cannot be shortened" in caplog.text


def test_without_counter():
    """Test truncation of formats that carry no counter."""
    segments = ((DATE, "2024-01-15"), (BRANCH, "feature-user-login"))
    assert enforce_length(segments, 21) == "2024-01-15_feature-us"


def test_shrink_segments_leaves_room_for_counter():
    """Test that shrinking reserves the counter width and keeps field order."""
    segments = ((SERVICE, "api"), (DATE, "2024-01-15"), (BRANCH, "feature-user-login"))
    assert shrink_segments(segments, 25, "00") == (
        (SERVICE, "a"),
        (DATE, "2024-01-1"),
        (BRANCH, "feature-us"),
    )


def test_shrink_segments_matches_final_tag():
    """Test that a placeholder counter gives the prefix of the final tag."""
    segments = ((SERVICE, "api"), (DATE, "2024-01-15"), (BRANCH, "feature-user-login"))
    shrunk = shrink_segments(segments, 25, "00")
    assert enforce_length(segments, 25, "07") == enforce_length(shrunk, 25, "07") == "a_2024-01-1_feature-us_07"
