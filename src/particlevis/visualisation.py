import logging
from dataclasses import dataclass
from typing import Protocol, Tuple

from particlevis.audio_analyser import AudioFeatureEngine
from particlevis.clock import ManualFrameClock
from particlevis.constants import DEFAULT_RESOLUTION, MAX_PARTICLES
from particlevis.features import AudioFeatures
from particlevis.particle_pool import ParticlePool, ParticleState
from particlevis.spawner import ParticleSpawner, bpm_multiplier
from particlevis.spectrum import SpectrumFrame

logger = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when the visualisation cannot start with what it was given."""


class SpectrumSource(Protocol):
    sample_rate: int

    def read_frame(self, timestamp: float) -> SpectrumFrame: ...


class Renderer(Protocol):
    def render(self, scene: "Scene") -> None: ...


@dataclass(frozen=True)
class Scene:
    """Everything the renderer needs for one frame."""

    particles: Tuple[ParticleState, ...]
    features: AudioFeatures
    timestamp: float
    width: int
    height: int


class Visualiser:
    """
    Per-frame orchestrator: spectrum in, scene out.

    Runs one tick per frame of the host clock while started. Every tick
    runs to completion before the next is scheduled, so no locking is
    needed.
    """

    def __init__(
        self,
        renderer=None,
        clock=None,
        width=DEFAULT_RESOLUTION[0],
        height=DEFAULT_RESOLUTION[1],
        capacity=MAX_PARTICLES,
        seed=None,
        engine=None,
        spawner=None,
    ):
        self.renderer = renderer
        self.clock = clock if clock is not None else ManualFrameClock()
        self.engine = engine if engine is not None else AudioFeatureEngine()
        self.spawner = spawner if spawner is not None else ParticleSpawner(seed=seed)
        self.pool = ParticlePool(capacity, width, height)
        self.source = None
        self.last_scene = None
        self._handle = None

    @property
    def width(self):
        return self.pool.width

    @property
    def height(self):
        return self.pool.height

    @property
    def is_running(self):
        return self.source is not None

    def start(self, source):
        if source is None:
            raise ConfigurationError("No audio source configured")
        if self.is_running:
            self.stop()

        logger.info(f"[+] Starting visualisation at {self.width}x{self.height}")
        self.source = source
        self._handle = self.clock.schedule(self._on_frame)

    def stop(self):
        """Halt the tick loop, drop every particle and forget the tempo."""
        if self._handle is not None:
            self.clock.cancel(self._handle)
            self._handle = None
        self.source = None
        self.pool.clear()
        self.engine.reset()
        self.last_scene = None
        logger.info("[+] Visualisation stopped")

    def on_resize(self, width, height):
        """New bounds apply from the next tick onwards."""
        self.pool.resize(width, height)

    def _on_frame(self, timestamp):
        self._handle = None
        if not self.is_running:
            return
        self.tick(timestamp)
        if self.is_running:
            self._handle = self.clock.schedule(self._on_frame)

    def tick(self, timestamp):
        """
        Run one frame of the pipeline at `timestamp` (ms).
        Returns the scene handed to the renderer, or None when stopped.
        """
        if not self.is_running:
            return None

        frame = self.source.read_frame(timestamp)
        features = self.engine.analyze(frame, self.source.sample_rate, timestamp)

        new_particles = self.spawner.spawn(features, self.width, self.height)
        particles = self.pool.tick(new_particles, bpm_multiplier(features.bpm))

        scene = Scene(particles, features, timestamp, self.width, self.height)
        self.last_scene = scene
        if self.renderer is not None:
            self.renderer.render(scene)
        return scene
