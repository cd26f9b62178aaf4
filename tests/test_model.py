from datetime import timedelta

from audiometa.errors import ParseWarning
from audiometa.formats import Format
from audiometa.model import AudioFile


def test_defaults_are_empty():
    f = AudioFile()
    assert f.format == Format.UNKNOWN
    assert f.chapters == []
    assert f.warnings == []
    assert f.audio.duration == timedelta(0)
    assert f.tags.title == ""


def test_instances_do_not_share_lists():
    a = AudioFile()
    b = AudioFile()
    a.add_warning("metadata", "x")
    assert b.warnings == []


def test_add_warning_appends_and_returns():
    f = AudioFile(path="song.mp3", format=Format.MP3, size=10)
    w = f.add_warning("technical", "no frame", 42)
    assert w == ParseWarning("technical", "no frame", 42)
    assert f.warnings == [w]
    assert str(w) == "technical (at offset 42): no frame"


def test_add_warning_default_offset():
    f = AudioFile()
    w = f.add_warning("metadata", "truncated")
    assert w.offset == 0
    assert str(f.warnings[0]) == "metadata: truncated"