import logging
from dataclasses import dataclass

from particlevis.constants import DEFAULT_RESOLUTION, MAX_PARTICLES, WRAP_MARGIN
from particlevis.particle import Shape

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParticleState:
    """Draw-ready view of one particle."""

    x: float
    y: float
    size: float
    rotation: float
    shape: Shape
    hue: float
    saturation: float
    lightness: float
    alpha: float
    age: int
    max_lifetime: int


def snapshot(particle):
    return ParticleState(
        x=particle.x,
        y=particle.y,
        size=particle.size * particle.scale,
        rotation=particle.rotation,
        shape=particle.shape,
        hue=particle.hue,
        saturation=particle.saturation,
        lightness=particle.lightness,
        alpha=particle.get_alpha(),
        age=particle.age,
        max_lifetime=particle.max_lifetime,
    )


class ParticlePool:
    """
    Owns the live particles, advances their physics once per tick and
    keeps the population under `capacity` by dropping the oldest first.
    """

    def __init__(self, capacity=MAX_PARTICLES, width=None, height=None, margin=WRAP_MARGIN):
        if capacity < 1:
            raise ValueError(f"Pool capacity must be positive, got {capacity}")
        self.capacity = capacity
        self.margin = margin
        self._particles = []
        self.resize(
            DEFAULT_RESOLUTION[0] if width is None else width,
            DEFAULT_RESOLUTION[1] if height is None else height,
        )

    def __len__(self):
        return len(self._particles)

    @property
    def particles(self):
        return tuple(self._particles)

    def resize(self, width, height):
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport must be positive, got {width}x{height}")
        self.width = width
        self.height = height

    def clear(self):
        self._particles.clear()

    def _admit(self, new_particles):
        self._particles.extend(new_particles)
        excess = len(self._particles) - self.capacity
        if excess > 0:
            logger.debug(f"[i] Evicting {excess} oldest particles")
            del self._particles[:excess]

    def tick(self, new_particles, bpm_multiplier=1.0):
        """
        Admit `new_particles`, advance every particle one tick and return
        the survivors' visual state in insertion order.
        """
        self._admit(new_particles)

        for particle in self._particles:
            particle.update(bpm_multiplier)
            particle.wrap(self.width, self.height, self.margin)

        self._particles = [p for p in self._particles if p.is_alive()]
        return tuple(snapshot(p) for p in self._particles)
