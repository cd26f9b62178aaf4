import pytest

from audiometa.tags import Tags


def test_get_missing_key_is_empty():
    tags = Tags()
    assert tags.get("TITLE") == []
    assert tags.get_first("TITLE") == ""


def test_set_and_get_round_trip():
    tags = Tags()
    tags.set("GENRE", "Rock", "Alternative")
    assert tags.get("GENRE") == ["Rock", "Alternative"]
    assert tags.get_first("GENRE") == "Rock"


def test_get_returns_copy():
    tags = Tags()
    tags.set("COMMENT", "Remastered")
    values = tags.get("COMMENT")
    values.append("changed")
    assert tags.get("COMMENT") == ["Remastered"]


def test_set_without_values_removes_key():
    tags = Tags()
    tags.set("COMMENT", "Remastered")
    tags.set("COMMENT")
    assert tags.get("COMMENT") == []
    assert dict(tags.items()) == {}


def test_get_best_picks_first_non_empty():
    tags = Tags()
    tags.set("artist", "Lower")
    tags.set("TPE1", "Frame")
    assert tags.get_best("ARTIST", "artist", "TPE1") == "Lower"
    assert tags.get_best("ARTIST", "NOPE") == ""


def test_items_yields_all_raw_tags():
    tags = Tags()
    tags.set("A", "1")
    tags.set("B", "2", "3")
    assert dict(tags.items()) == {"A": ["1"], "B": ["2", "3"]}


def test_filter_by_predicate():
    tags = Tags()
    tags.set("MUSICBRAINZ_TRACKID", "t")
    tags.set("MUSICBRAINZ_ALBUMID", "a")
    tags.set("TITLE", "x")
    found = dict(tags.filter(lambda k: k.startswith("MUSICBRAINZ")))
    assert set(found) == {"MUSICBRAINZ_TRACKID", "MUSICBRAINZ_ALBUMID"}


def test_merge_fills_only_empty_fields():
    tags = Tags(title="Mine")
    other = Tags(title="Theirs", artist="Someone", year=1999, track_number=4)
    tags.merge(other)
    assert tags.title == "Mine"
    assert tags.artist == "Someone"
    assert tags.year == 1999
    assert tags.track_number == 4


def test_merge_lists_unique_case_insensitive():
    tags = Tags(genres=["Rock"])
    other = Tags(genres=["rock", "Jazz"], composers=["Bach"])
    tags.merge(other)
    assert tags.genres == ["Rock", "Jazz"]
    assert tags.composers == ["Bach"]


def test_merge_copies_raw_tags_and_none_is_noop():
    tags = Tags(title="Same")
    other = Tags()
    other.set("VENDOR", "enc")
    tags.merge(other)
    assert tags.get("VENDOR") == ["enc"]
    before = tags.clone()
    tags.merge(None)
    assert tags == before


def test_clone_is_deep_and_equal():
    tags = Tags(title="T", artists=["A"])
    tags.set("X", "1")
    copy = tags.clone()
    assert copy == tags
    copy.artists.append("B")
    copy.set("X", "2")
    assert tags.artists == ["A"]
    assert tags.get("X") == ["1"]
    assert copy != tags


@pytest.mark.parametrize(
    "change",
    [
        lambda t: setattr(t, "title", "other"),
        lambda t: setattr(t, "disc_total", 3),
        lambda t: t.genres.append("Pop"),
        lambda t: t.set("RAW", "v"),
    ],
)
def test_equality_detects_differences(change):
    a = Tags(title="T")
    b = a.clone()
    change(b)
    assert not (a == b)


def test_equality_with_other_type():
    assert (Tags() == "tags") is False