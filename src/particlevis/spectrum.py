from dataclasses import dataclass

import numpy as np

from particlevis.constants import MAX_MAGNITUDE


@dataclass(frozen=True, eq=False)
class SpectrumFrame:
    """
    One snapshot of spectral magnitudes for a single analysis tick.

    Magnitudes are copied into a read-only array on construction. NaN and
    infinite values become zero and everything is clipped into
    ``[0, max_magnitude]``.
    """

    magnitudes: np.ndarray
    max_magnitude: float = MAX_MAGNITUDE

    def __post_init__(self):
        values = np.asarray(self.magnitudes, dtype=np.float64).ravel().copy()
        values = np.nan_to_num(values, nan=0.0, posinf=0.0, neginf=0.0)
        values = np.clip(values, 0.0, self.max_magnitude)
        values.setflags(write=False)
        object.__setattr__(self, "magnitudes", values)

    @classmethod
    def zeros(cls, length, max_magnitude=MAX_MAGNITUDE):
        return cls(np.zeros(length), max_magnitude)

    def __len__(self):
        return len(self.magnitudes)

    @property
    def is_empty(self):
        return len(self.magnitudes) == 0
