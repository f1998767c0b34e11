import logging
from collections import deque
from dataclasses import dataclass
from typing import Optional, Tuple

from particlevis.constants import (
    DEFAULT_BPM,
    MAX_BPM,
    MAX_INTERVALS,
    MAX_PEAKS,
    MIN_BPM,
    MIN_INTERVALS,
    PEAK_THRESHOLD,
    REFRACTORY_MS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TempoState:
    """Snapshot of the estimator's history."""

    peaks: Tuple[float, ...]
    intervals: Tuple[float, ...]
    last_peak_time: Optional[float]
    bpm: float


class TempoEstimator:
    """
    Folds a stream of bass levels into a BPM estimate by tracking the
    intervals between bass peaks.

    This is a heuristic, not a beat tracker. Syncopated or quiet material
    will confuse it.
    """

    def __init__(self, threshold=PEAK_THRESHOLD, refractory_ms=REFRACTORY_MS):
        self.threshold = threshold
        self.refractory_ms = refractory_ms
        self.reset()

    def reset(self):
        """Forget every peak and return to the default tempo."""
        self._peaks = deque(maxlen=MAX_PEAKS)
        self._intervals = deque(maxlen=MAX_INTERVALS)
        self._last_peak_time = None
        self._bpm = float(DEFAULT_BPM)

    @property
    def bpm(self):
        return self._bpm

    @property
    def peaks(self):
        return tuple(self._peaks)

    @property
    def intervals(self):
        return tuple(self._intervals)

    @property
    def last_peak_time(self):
        return self._last_peak_time

    @property
    def state(self):
        return TempoState(self.peaks, self.intervals, self._last_peak_time, self._bpm)

    def _is_peak(self, bass_level, timestamp):
        if bass_level <= self.threshold:
            return False
        if self._last_peak_time is None:
            return True
        return timestamp - self._last_peak_time > self.refractory_ms

    def observe(self, bass_level, timestamp):
        """
        Feed one bass level sampled at `timestamp` (ms) and return the
        current BPM estimate.
        """
        if not self._is_peak(bass_level, timestamp):
            return self._bpm

        if self._peaks:
            self._intervals.append(timestamp - self._peaks[-1])

            if len(self._intervals) >= MIN_INTERVALS:
                mean_interval = sum(self._intervals) / len(self._intervals)
                candidate = round(60000 / mean_interval)

                # Out-of-range candidates are outliers, keep the old value
                if MIN_BPM <= candidate <= MAX_BPM:
                    if candidate != self._bpm:
                        logger.debug(f"[i] Tempo estimate {self._bpm:.0f} -> {candidate} BPM")
                    self._bpm = float(candidate)

        self._peaks.append(timestamp)
        self._last_peak_time = timestamp
        return self._bpm
