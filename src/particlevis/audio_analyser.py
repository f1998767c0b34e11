import logging

from particlevis.constants import MIN_SPECTRUM_BINS
from particlevis.features import (
    AudioFeatures,
    compute_energy,
    compute_volume,
    dominant_frequency,
    extract_bands,
)
from particlevis.tempo import TempoEstimator

logger = logging.getLogger(__name__)


class AudioFeatureEngine:
    """
    Turns spectrum frames into AudioFeatures suitable for visualisation.
    Owns the tempo history, the only mutable state on the analysis path.
    """

    def __init__(self, tempo=None, min_bins=MIN_SPECTRUM_BINS):
        self.tempo = tempo if tempo is not None else TempoEstimator()
        self.min_bins = min_bins

    def analyze(self, frame, sample_rate, timestamp):
        """
        Returns the features of `frame`, sampled at `timestamp` (ms).
        """
        # One bad frame should never halt the visualisation
        if len(frame) < self.min_bins:
            logger.debug(f"[!] Skipping undersized spectrum ({len(frame)} bins)")
            return AudioFeatures.silent(self.tempo.bpm)

        bands = extract_bands(frame)
        bpm = self.tempo.observe(bands.bass, timestamp)

        return AudioFeatures(
            volume=compute_volume(frame),
            bass=bands.bass,
            mid=bands.mid,
            treble=bands.treble,
            energy=compute_energy(frame),
            dominant_frequency=dominant_frequency(frame, sample_rate),
            bpm=bpm,
        )

    def reset(self):
        self.tempo.reset()
