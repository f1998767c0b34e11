import logging

import librosa
import numpy as np

from particlevis.constants import MAX_MAGNITUDE, MIN_DB, N_FFT, SPECTRUM_BINS
from particlevis.spectrum import SpectrumFrame

logger = logging.getLogger(__name__)


class LibrosaSpectrumSource:
    """
    Loads an audio file and serves byte-scaled magnitude spectra by
    timestamp, like a browser analyser node does during playback.
    """

    def __init__(self, filepath, n_fft=N_FFT, hop_length=None):
        logger.info(f"[+] Loading audio: {filepath}...")
        # Load audio with original sampling rate
        self.y, self.sample_rate = librosa.load(filepath, sr=None)
        self.duration = librosa.get_duration(y=self.y, sr=self.sample_rate)

        self.n_fft = n_fft
        self.hop_length = hop_length or n_fft // 4

        logger.info("[+] Analyzing audio frequencies...")
        self._calculate_spectrogram()

    def _calculate_spectrogram(self):
        """
        Compute a linear magnitude spectrogram, one column per hop.
        """
        magnitudes = np.abs(librosa.stft(self.y, n_fft=self.n_fft, hop_length=self.hop_length))

        # Convert to decibels (Log scale) for better visual dynamic range
        S_dB = librosa.amplitude_to_db(magnitudes, ref=np.max)

        # Map the [-80, 0] dB range onto the byte scale, clipping the noise floor.
        # The Nyquist bin is dropped so each frame has exactly n_fft / 2 bins.
        S_norm = np.clip((S_dB - MIN_DB) / -MIN_DB, 0, 1)
        self.S_bytes = S_norm[: self.n_fft // 2] * MAX_MAGNITUDE

    @property
    def num_frames(self):
        return self.S_bytes.shape[1]

    def read_frame(self, timestamp):
        """
        Returns the spectrum at `timestamp` (ms). Past the end of the
        file the last frame is repeated.
        """
        # Convert time to frame index
        frame_index = librosa.time_to_frames(
            timestamp / 1000, sr=self.sample_rate, hop_length=self.hop_length
        )

        # Boundary checks
        frame_index = int(np.clip(frame_index, 0, self.num_frames - 1))
        return SpectrumFrame(self.S_bytes[:, frame_index])


class ArraySpectrumSource:
    """
    Serves frames from an in-memory sequence, one per read. Useful when
    spectra come from somewhere other than a file.
    """

    def __init__(self, frames, sample_rate, loop=False):
        self.frames = [f if isinstance(f, SpectrumFrame) else SpectrumFrame(f) for f in frames]
        self.sample_rate = sample_rate
        self.loop = loop
        self._position = 0

    def read_frame(self, timestamp):
        if not self.frames:
            return SpectrumFrame.zeros(0)
        if self._position >= len(self.frames):
            if not self.loop:
                return SpectrumFrame.zeros(SPECTRUM_BINS)
            self._position = 0
        frame = self.frames[self._position]
        self._position += 1
        return frame
