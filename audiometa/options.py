"""Settings that control how audio files are opened."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

Option = Callable[["OpenOptions"], None]


@dataclass
class OpenOptions:
    """Open settings.

    ``strict_parsing`` turns any warning into an error, ``preload_artwork``
    loads artwork while opening, ``ignore_warnings`` discards warnings and
    ``max_artwork_size`` skips larger pictures (0 means no limit).
    """

    strict_parsing: bool = False
    preload_artwork: bool = False
    ignore_warnings: bool = False
    max_artwork_size: int = 0


def with_strict_parsing() -> Option:
    """Treat any warning as a fatal error."""

    def apply(options: OpenOptions) -> None:
        options.strict_parsing = True

    return apply


def with_artwork_preload() -> Option:
    """Load artwork while opening instead of on first request."""

    def apply(options: OpenOptions) -> None:
        options.preload_artwork = True

    return apply


def with_ignore_warnings() -> Option:
    """Discard all warnings."""

    def apply(options: OpenOptions) -> None:
        options.ignore_warnings = True

    return apply


def with_max_artwork_size(num_bytes: int) -> Option:
    """Skip artwork larger than ``num_bytes`` (0 for no limit)."""

    def apply(options: OpenOptions) -> None:
        options.max_artwork_size = num_bytes

    return apply


def build_options(*args: Option) -> OpenOptions:
    """Start from the defaults and apply each option in order."""
    options = OpenOptions()
    for option in args:
        option(options)
    return options