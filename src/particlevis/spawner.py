import math

import numpy as np

from particlevis.constants import (
    BASE_LIFETIME,
    BASE_SIZE,
    BASE_SPEED,
    BASS_HUE,
    BASS_HUE_THRESHOLD,
    BASS_SPAWN_WEIGHT,
    BPM_DAMPING,
    EXPLOSION_EXPONENT,
    EXPLOSION_STRENGTH,
    HUE_JITTER,
    LIFETIME_JITTER,
    MID_HUE,
    MID_HUE_THRESHOLD,
    MID_SPAWN_WEIGHT,
    REFERENCE_BPM,
    ROTATION_SPEED,
    SCALE_PULSE,
    TREBLE_HUE,
    TREBLE_HUE_THRESHOLD,
    TREBLE_SPAWN_WEIGHT,
    VOLUME_SIZE,
)
from particlevis.particle import Particle, Shape

SHAPES = tuple(Shape)

# Checked in order, first band over its threshold picks the hue
HUE_CASCADE = (
    ("bass", BASS_HUE_THRESHOLD, BASS_HUE),
    ("mid", MID_HUE_THRESHOLD, MID_HUE),
    ("treble", TREBLE_HUE_THRESHOLD, TREBLE_HUE),
)


def bpm_multiplier(bpm):
    """Motion scale for a tempo, damped so fast tracks stay readable."""
    return (bpm / REFERENCE_BPM) * BPM_DAMPING


def spawn_count(features):
    """How many particles to emit for one tick of `features`."""
    count = (
        math.floor(features.bass * BASS_SPAWN_WEIGHT)
        + math.floor(features.mid * MID_SPAWN_WEIGHT)
        + math.floor(features.treble * TREBLE_SPAWN_WEIGHT)
        + 1
    )
    return max(1, count)


class ParticleSpawner:
    """
    Creates particles whose number, motion and colour follow the audio.
    The pool enforces its own capacity, the spawner does not look at it.
    """

    def __init__(self, rng=None, seed=None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def pick_hue(self, features):
        for band, threshold, hue in HUE_CASCADE:
            if getattr(features, band) > threshold:
                return (hue + self.rng.uniform(-HUE_JITTER, HUE_JITTER)) % 360
        return self.rng.uniform(0, 360)

    def _make_particle(self, features, width, height, multiplier):
        angle = self.rng.uniform(0, 2 * np.pi)
        # Louder bass kicks harder, but sub-linearly
        explosion = self.rng.random() * EXPLOSION_STRENGTH * features.bass**EXPLOSION_EXPONENT
        speed = BASE_SPEED * multiplier + explosion

        return Particle(
            x=self.rng.uniform(0, width),
            y=self.rng.uniform(0, height),
            vx=np.cos(angle) * speed,
            vy=np.sin(angle) * speed,
            shape=SHAPES[self.rng.integers(len(SHAPES))],
            size=BASE_SIZE + features.volume * VOLUME_SIZE,
            hue=self.pick_hue(features),
            saturation=70 + features.energy * 30,
            lightness=40 + features.volume * 40,
            max_lifetime=BASE_LIFETIME + int(self.rng.integers(0, LIFETIME_JITTER + 1)),
            scale_velocity=features.bass * SCALE_PULSE,
            rotation=self.rng.uniform(0, 2 * np.pi),
            rotation_velocity=self.rng.uniform(-ROTATION_SPEED, ROTATION_SPEED),
        )

    def spawn(self, features, width, height):
        """
        Returns the new particles for this tick, placed inside a
        `width` x `height` viewport.
        """
        multiplier = bpm_multiplier(features.bpm)
        return [
            self._make_particle(features, width, height, multiplier)
            for _ in range(spawn_count(features))
        ]
