import numpy as np
import pytest

from particlevis.features import (
    band_ranges,
    compute_energy,
    compute_volume,
    dominant_frequency,
    extract_bands,
)
from particlevis.spectrum import SpectrumFrame


@pytest.mark.parametrize("length", [0, 1, 7, 10, 64, 256, 1024])
def test_band_ranges_partition_without_gaps(length):
    bass, mid, treble = band_ranges(length)
    assert bass.start == 0
    assert bass.stop == mid.start
    assert mid.stop == treble.start
    assert treble.stop == length
    covered = list(range(length))[bass] + list(range(length))[mid] + list(range(length))[treble]
    assert covered == list(range(length))


def test_band_ranges_use_ten_fifty_forty_split():
    bass, mid, treble = band_ranges(256)
    assert (bass.stop, mid.stop) == (25, 153)


def test_extract_bands_means_each_band(bass_frame):
    bands = extract_bands(bass_frame)
    assert bands.bass == pytest.approx(220 / 255)
    assert bands.mid == 0
    assert bands.treble == 0


def test_extract_bands_stay_in_range(rng):
    frame = SpectrumFrame(rng.uniform(0, 255, 256))
    for level in extract_bands(frame):
        assert 0 <= level <= 1


def test_silent_frame_gives_zero_everything(silent_frame):
    assert extract_bands(silent_frame) == (0, 0, 0)
    assert compute_volume(silent_frame) == 0
    assert compute_energy(silent_frame) == 0
    assert dominant_frequency(silent_frame, 44100) == 0


def test_empty_frame_gives_zero_everything():
    frame = SpectrumFrame([])
    assert extract_bands(frame) == (0, 0, 0)
    assert compute_volume(frame) == 0
    assert compute_energy(frame) == 0
    assert dominant_frequency(frame, 44100) == 0


def test_saturated_frame_volume_is_max(loud_frame):
    assert compute_volume(loud_frame) == pytest.approx(1.0)
    assert compute_energy(loud_frame) == pytest.approx(1.0)


def test_volume_is_rms_and_energy_is_mean():
    frame = SpectrumFrame([0, 255] * 8)
    assert compute_energy(frame) == pytest.approx(0.5)
    assert compute_volume(frame) == pytest.approx(np.sqrt(0.5))


def test_dominant_frequency_converts_bin_to_hz():
    values = np.zeros(256)
    values[64] = 200
    frame = SpectrumFrame(values)
    assert dominant_frequency(frame, 44100) == pytest.approx(64 * 44100 / 512)


def test_dominant_frequency_prefers_first_maximum():
    values = np.zeros(256)
    values[[10, 20]] = 100
    assert dominant_frequency(SpectrumFrame(values), 48000) == pytest.approx(10 * 48000 / 512)


def test_frame_clamps_bad_values():
    frame = SpectrumFrame([np.nan, np.inf, -np.inf, -5, 300, 100])
    assert list(frame.magnitudes) == [0, 0, 0, 0, 255, 100]


def test_frame_is_read_only():
    source = np.ones(16)
    frame = SpectrumFrame(source)
    source[0] = 99
    assert frame.magnitudes[0] == 1
    with pytest.raises(ValueError):
        frame.magnitudes[0] = 5
