from enum import Enum

from particlevis.constants import (
    GRAVITY,
    HUE_DRIFT,
    MIN_SCALE,
    SCALE_DECREMENT,
    VELOCITY_DECAY,
)


class Shape(str, Enum):
    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"


class Particle:
    """Represents a single simulated particle driven by the audio features."""

    def __init__(
        self,
        x,
        y,
        vx,
        vy,
        shape=Shape.CIRCLE,
        size=2.0,
        hue=0.0,
        saturation=100.0,
        lightness=50.0,
        max_lifetime=90,
        scale=1.0,
        scale_velocity=0.0,
        rotation=0.0,
        rotation_velocity=0.0,
        opacity=1.0,
    ):
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.shape = shape
        self.size = size
        self.scale = scale
        self.scale_velocity = scale_velocity
        self.rotation = rotation
        self.rotation_velocity = rotation_velocity
        self.hue = hue
        self.saturation = saturation
        self.lightness = lightness
        self.opacity = opacity
        self.age = 0
        self.max_lifetime = max_lifetime

    def update(self, bpm_multiplier=1.0):
        """Advance the particle by one tick."""
        self.x += self.vx * bpm_multiplier
        self.y += self.vy * bpm_multiplier
        self.age += 1

        # Exponential damping, then gravity
        self.vx *= VELOCITY_DECAY
        self.vy *= VELOCITY_DECAY
        self.vy += GRAVITY * bpm_multiplier

        self.scale += self.scale_velocity
        self.scale_velocity *= VELOCITY_DECAY
        self.scale = max(MIN_SCALE, self.scale - SCALE_DECREMENT)

        self.rotation += self.rotation_velocity * bpm_multiplier
        self.hue = (self.hue + HUE_DRIFT) % 360

    def wrap(self, width, height, margin):
        """Reappear on the opposite edge once `margin` pixels outside the viewport."""
        if self.x < -margin:
            self.x = width + margin
        elif self.x > width + margin:
            self.x = -margin

        if self.y < -margin:
            self.y = height + margin
        elif self.y > height + margin:
            self.y = -margin

    def is_alive(self):
        """Check if particle should still be rendered."""
        return self.age < self.max_lifetime

    def get_alpha(self):
        """Get particle opacity based on lifetime, eased rather than linear."""
        remaining = max(0.0, 1 - (self.age / self.max_lifetime))
        return self.opacity * remaining**2
