import numpy as np
import pytest

from particlevis.features import AudioFeatures
from particlevis.spectrum import SpectrumFrame


@pytest.fixture
def silent_frame():
    return SpectrumFrame.zeros(256)


@pytest.fixture
def loud_frame():
    return SpectrumFrame(np.full(256, 255.0))


@pytest.fixture
def bass_frame():
    """Loud bass band, silence elsewhere."""
    values = np.zeros(256)
    values[:25] = 220
    return SpectrumFrame(values)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def quiet_features():
    return AudioFeatures()
