"""
Stateless transforms of a SpectrumFrame into perceptual audio features.

Levels are normalised to [0, 1] by the frame's maximum magnitude. Every
function returns zero for an empty or silent frame instead of failing.
"""

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from particlevis.constants import BASS_SPLIT, DEFAULT_BPM, MID_SPLIT


class Bands(NamedTuple):
    bass: float
    mid: float
    treble: float


@dataclass(frozen=True)
class AudioFeatures:
    """Features for one tick. A fresh value is produced every tick."""

    volume: float = 0.0
    bass: float = 0.0
    mid: float = 0.0
    treble: float = 0.0
    energy: float = 0.0
    dominant_frequency: float = 0.0  # Hz
    bpm: float = float(DEFAULT_BPM)

    @classmethod
    def silent(cls, bpm=DEFAULT_BPM):
        return cls(bpm=float(bpm))


def band_ranges(length):
    """
    Split `length` bins into contiguous bass, mid and treble slices.
    The slices cover every bin exactly once.
    """
    bass_end = int(np.floor(length * BASS_SPLIT))
    mid_end = int(np.floor(length * MID_SPLIT))
    return slice(0, bass_end), slice(bass_end, mid_end), slice(mid_end, length)


def _mean_level(values, max_magnitude):
    if len(values) == 0 or max_magnitude <= 0:
        return 0.0
    return float(np.mean(values) / max_magnitude)


def extract_bands(frame):
    """Mean magnitude of each band."""
    values = frame.magnitudes
    bass, mid, treble = band_ranges(len(values))
    return Bands(
        bass=_mean_level(values[bass], frame.max_magnitude),
        mid=_mean_level(values[mid], frame.max_magnitude),
        treble=_mean_level(values[treble], frame.max_magnitude),
    )


def compute_volume(frame):
    """
    Root Mean Square of all magnitudes.
    RMS follows perceived loudness more closely than the plain mean.
    """
    if frame.is_empty or frame.max_magnitude <= 0:
        return 0.0
    rms = np.sqrt(np.mean(np.square(frame.magnitudes)))
    return float(rms / frame.max_magnitude)


def compute_energy(frame):
    """Plain mean of all magnitudes."""
    return _mean_level(frame.magnitudes, frame.max_magnitude)


def dominant_frequency(frame, sample_rate):
    """Frequency in Hz of the loudest bin (first one wins on ties)."""
    if frame.is_empty:
        return 0.0
    index = int(np.argmax(frame.magnitudes))
    return float(index * sample_rate / (2 * len(frame)))
