from audiometa import registry
from audiometa.formats import Format
from audiometa.registry import ArtworkExtractor, FormatParser


class _Parser:
    def __init__(self, label):
        self.label = label

    def parse(self, source, size, path):
        return (self.label, size, path)


class _ParserWithArt(_Parser):
    def extract_artwork(self, source, size, path):
        return [self.label]


def test_register_and_get_returns_same_parser():
    parser = _Parser("wav")
    registry.register(Format.WAV, parser)
    found = registry.get(Format.WAV)
    assert found is parser
    assert found.parse(b"", 0, "x.wav") == ("wav", 0, "x.wav")


def test_register_replaces_previous():
    first, second = _Parser("one"), _Parser("two")
    registry.register(Format.AIFF, first)
    registry.register(Format.AIFF, second)
    assert registry.get(Format.AIFF) is second


def test_get_unregistered_returns_none():
    assert registry.get(Format.UNKNOWN) is None


def test_protocols_recognise_implementations():
    plain = _Parser("p")
    art = _ParserWithArt("a")
    registry.register(Format.WAV, plain)
    found_plain = registry.get(Format.WAV)
    assert isinstance(found_plain, FormatParser)
    assert not isinstance(found_plain, ArtworkExtractor)

    registry.register(Format.AIFF, art)
    found_art = registry.get(Format.AIFF)
    assert isinstance(found_art, ArtworkExtractor)
    assert found_art.extract_artwork(b"", 0, "f") == ["a"]