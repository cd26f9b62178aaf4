"""Technical audio properties and chapter markers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional


@dataclass
class ReplayGainInfo:
    """Loudness normalisation values; gains in dB, peaks as amplitudes."""

    track_gain: float = 0.0
    track_peak: float = 0.0
    album_gain: float = 0.0
    album_peak: float = 0.0


_CHANNEL_NAMES = {0: "", 1: "mono", 2: "stereo", 4: "quad", 6: "5.1", 8: "7.1"}


def channel_description(channels: int) -> str:
    """Human-readable name for a channel count ("" for 0)."""
    return _CHANNEL_NAMES.get(channels, f"{channels}ch")


def _stepped_pow10(x: float) -> float:
    """10**x with the exponent truncated towards zero to a multiple of 0.1."""
    if x == 0:
        return 1.0
    return 10.0 ** (int(x * 10) / 10)


@dataclass
class AudioInfo:
    """Codec, container, duration and quality properties of an audio stream."""

    codec: str = ""
    container: str = ""
    duration: timedelta = field(default_factory=timedelta)
    sample_rate: int = 0
    bit_depth: int = 0
    channels: int = 0
    bitrate: int = 0
    lossless: bool = False
    vbr: bool = False
    replay_gain: Optional[ReplayGainInfo] = None

    def __str__(self) -> str:
        parts = [self.codec, f"{self.sample_rate / 1000:.1f}kHz"]
        if self.bit_depth > 0:
            parts.append(f"{self.bit_depth}-bit")
        parts.append(channel_description(self.channels))
        if self.lossless:
            parts.append("lossless")
        elif self.bitrate > 0:
            quality = f"{self.bitrate // 1000}kbps"
            if self.vbr:
                quality += " VBR"
            parts.append(quality)
        return " ".join(part for part in parts if part)

    def is_high_res(self) -> bool:
        """True when the sample rate exceeds 48 kHz or the bit depth exceeds 16."""
        return self.sample_rate > 48000 or self.bit_depth > 16

    def apply_replay_gain(self, amplitude: float, mode: str = "track") -> float:
        """Scale ``amplitude`` by the track or album gain, limited to avoid clipping.

        Any mode other than "album" uses the track values. The gain is applied
        in steps of 2 dB, truncated towards zero.
        """
        rg = self.replay_gain
        if rg is None:
            return amplitude
        if mode == "album":
            gain, peak = rg.album_gain, rg.album_peak
        else:
            gain, peak = rg.track_gain, rg.track_peak
        if peak == 0:
            return amplitude
        adjusted = amplitude * _stepped_pow10(gain / 20.0)
        if peak > 0 and adjusted > 1.0 / peak:
            adjusted = 1.0 / peak
        return adjusted


@dataclass
class Chapter:
    """A chapter marker; ``index`` counts from 1."""

    index: int
    title: str
    start_time: timedelta = field(default_factory=timedelta)
    end_time: timedelta = field(default_factory=timedelta)