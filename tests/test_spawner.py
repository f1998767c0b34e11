import math

import numpy as np
import pytest

from particlevis.constants import (
    BASE_LIFETIME,
    BASE_SPEED,
    BPM_DAMPING,
    HUE_JITTER,
    LIFETIME_JITTER,
    MID_HUE,
    TREBLE_HUE,
)
from particlevis.features import AudioFeatures
from particlevis.particle import Shape
from particlevis.spawner import ParticleSpawner, bpm_multiplier, spawn_count


def test_silence_still_spawns_one(quiet_features):
    assert spawn_count(quiet_features) == 1


def test_count_grows_with_band_levels():
    counts = [
        spawn_count(AudioFeatures(bass=level, mid=level, treble=level))
        for level in np.linspace(0, 1, 11)
    ]
    assert counts == sorted(counts)
    assert counts[-1] == 8 + 5 + 3 + 1


def test_bpm_multiplier_is_relative_to_120():
    assert bpm_multiplier(120) == pytest.approx(BPM_DAMPING)
    assert bpm_multiplier(240) == pytest.approx(2 * BPM_DAMPING)


def test_quiet_particles_move_at_base_speed(rng, quiet_features):
    spawner = ParticleSpawner(rng=rng)
    for _ in range(20):
        (particle,) = spawner.spawn(quiet_features, 800, 600)
        speed = math.hypot(particle.vx, particle.vy)
        assert speed == pytest.approx(BASE_SPEED * bpm_multiplier(120))


def test_bass_adds_explosion_impulse(rng):
    features = AudioFeatures(bass=1.0)
    particles = ParticleSpawner(rng=rng).spawn(features, 800, 600)
    base = BASE_SPEED * bpm_multiplier(120)
    speeds = [math.hypot(p.vx, p.vy) for p in particles]
    assert all(s >= base - 1e-9 for s in speeds)
    assert max(speeds) > base


def test_particles_start_inside_viewport(rng):
    features = AudioFeatures(bass=0.9, mid=0.9, treble=0.9, volume=0.5)
    spawner = ParticleSpawner(rng=rng)
    for _ in range(10):
        for p in spawner.spawn(features, 320, 240):
            assert 0 <= p.x <= 320
            assert 0 <= p.y <= 240
            assert p.shape in set(Shape)
            assert p.age == 0
            assert BASE_LIFETIME <= p.max_lifetime <= BASE_LIFETIME + LIFETIME_JITTER


def test_hue_cascade_prefers_bass(rng):
    spawner = ParticleSpawner(rng=rng)
    features = AudioFeatures(bass=0.9, mid=0.9, treble=0.9)
    for _ in range(50):
        hue = spawner.pick_hue(features)
        assert hue <= HUE_JITTER or hue >= 360 - HUE_JITTER


def test_hue_cascade_falls_through_to_treble(rng):
    spawner = ParticleSpawner(rng=rng)
    features = AudioFeatures(bass=0.1, mid=0.1, treble=0.9)
    for _ in range(50):
        assert abs(spawner.pick_hue(features) - TREBLE_HUE) <= HUE_JITTER


def test_hue_cascade_mid_beats_treble(rng):
    spawner = ParticleSpawner(rng=rng)
    features = AudioFeatures(bass=0.1, mid=0.9, treble=0.9)
    for _ in range(50):
        assert abs(spawner.pick_hue(features) - MID_HUE) <= HUE_JITTER


def test_hue_is_uniform_when_no_band_is_loud(rng):
    spawner = ParticleSpawner(rng=rng)
    features = AudioFeatures(bass=0.1, mid=0.1, treble=0.1)
    hues = np.array([spawner.pick_hue(features) for _ in range(400)])
    assert hues.min() >= 0
    assert hues.max() < 360
    counts, _ = np.histogram(hues, bins=4, range=(0, 360))
    assert all(count > 50 for count in counts)


def test_same_seed_spawns_same_particles():
    features = AudioFeatures(bass=0.8, mid=0.4, treble=0.2, volume=0.3, energy=0.3)
    a = ParticleSpawner(seed=7).spawn(features, 640, 480)
    b = ParticleSpawner(seed=7).spawn(features, 640, 480)
    assert [vars(p) for p in a] == [vars(p) for p in b]
