"""Tests for template helper functions."""

from folio.models.domain import Profile
from folio.utils.template_helpers import (
    clip,
    contact_items,
    format_period,
    initials,
    social_entries,
    with_alpha,
)


def test_format_period_precedence():
    """Test start-end, then single year, then free text, then empty."""
    assert format_period("2010", "2014", "ignored") == "2010 – 2014"
    assert format_period("2010", None, "ignored") == "2010"
    assert format_period(None, "2014", "ignored") == "2014"
    assert format_period(None, None, "2019") == "2019"
    assert format_period() == ""


def test_initials():
    assert initials("maria clara duarte") == "MC"
    assert initials("Ana") == "A"
    assert initials("  ") == "CV"
    assert initials(None) == "CV"
    assert initials("123 456") == "CV"


def test_clip():
    assert clip("abcdef", 3) == "abc…"
    assert clip("abc", 3) == "abc"
    assert clip("abcdef") == "abcdef"
    assert clip(None, 3) == ""
    assert clip("", 3) == ""


def test_contact_items_skip_blank_fields():
    profile = Profile(email="a@example.com", phone="  ", location="Porto")

    assert contact_items(profile) == [
        {"kind": "email", "value": "a@example.com"},
        {"kind": "location", "value": "Porto"},
    ]


def test_social_entries_keep_known_non_empty_links_in_order():
    profile = Profile(
        social_links={
            "instagram": "https://instagram.com/a",
            "github": "https://github.com/a",
            "linkedin": "",
            "website": None,
            "mastodon": "https://mastodon.social/@a",
        }
    )

    assert [entry["key"] for entry in social_entries(profile)] == ["github", "instagram"]


def test_with_alpha():
    assert with_alpha("#a21d4c", "14") == "#a21d4c14"
    assert with_alpha("rgb(0,0,0)", "14") == "rgb(0,0,0)"
