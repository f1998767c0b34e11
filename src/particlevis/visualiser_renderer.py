import cv2
import numpy as np

from particlevis.constants import TRAIL_ALPHA_DECAY, TRAIL_LENGTH
from particlevis.particle import Shape


def hsl_to_bgr(hue, saturation, lightness):
    """Convert HSL (degrees, percent, percent) to an OpenCV BGR tuple."""
    # OpenCV stores 8-bit hue as degrees / 2
    hls = np.uint8(
        [[[
            int(hue % 360) // 2,
            int(np.clip(lightness, 0, 100) * 2.55),
            int(np.clip(saturation, 0, 100) * 2.55),
        ]]]
    )
    return tuple(int(c) for c in cv2.cvtColor(hls, cv2.COLOR_HLS2BGR)[0, 0])


def shape_points(shape, x, y, radius, rotation):
    """Polygon vertices for the square and triangle shapes."""
    sides = 4 if shape == Shape.SQUARE else 3
    angles = rotation + np.arange(sides) * 2 * np.pi / sides
    points = np.stack([x + radius * np.cos(angles), y + radius * np.sin(angles)], axis=1)
    return points.astype(np.int32)


class VisualiserRenderer:
    """
    Handles the drawing logic using OpenCV.
    Paints each scene onto a BGR canvas and keeps a few frames for trails.
    """

    def __init__(self, width, height, show_stats=False):
        self.w = width
        self.h = height
        self.show_stats = show_stats
        self.frame = np.zeros((height, width, 3), dtype=np.uint8)

        # Trail effect - store previous particle layers
        self.trail_frames = []

        # Colors (BGR format for OpenCV)
        self.bg_color = (5, 5, 10)

    def resize(self, width, height):
        self.w = width
        self.h = height
        self.trail_frames = []

    def _draw_orb(self, frame, features):
        """Central orb: radius follows volume, hue follows dominant frequency."""
        center = (self.w // 2, self.h // 2)
        base_radius = min(self.w, self.h) * 0.1
        radius = int(base_radius * (1 + features.volume * 2))
        hue = (features.dominant_frequency / 1000 * 360) % 360

        fill = hsl_to_bgr(hue, 70 + features.energy * 30, 20 + features.volume * 30)
        rim = hsl_to_bgr(hue, 100, 80)
        border = int(2 + features.volume * 8)

        cv2.circle(frame, center, radius, fill, -1, cv2.LINE_AA)
        cv2.circle(frame, center, radius, rim, border, cv2.LINE_AA)

    def _draw_particle(self, layer, state):
        color = tuple(int(c * state.alpha) for c in hsl_to_bgr(state.hue, state.saturation, state.lightness))
        radius = max(1, int(round(state.size)))
        x, y = int(state.x), int(state.y)

        if state.shape == Shape.CIRCLE:
            cv2.circle(layer, (x, y), radius, color, -1, cv2.LINE_AA)
        else:
            points = shape_points(state.shape, state.x, state.y, radius, state.rotation)
            cv2.fillPoly(layer, [points], color, cv2.LINE_AA)

    def _draw_stats(self, frame, features):
        lines = [
            f"BPM: {features.bpm:.0f}",
            f"Volume: {features.volume * 100:.1f}%",
            f"Frequency: {features.dominant_frequency:.0f}Hz",
            f"Bass: {features.bass * 100:.1f}%",
            f"Mid: {features.mid * 100:.1f}%",
            f"Treble: {features.treble * 100:.1f}%",
        ]
        for i, line in enumerate(lines):
            cv2.putText(frame, line, (16, 28 + i * 22), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1, cv2.LINE_AA)

    def render(self, scene):
        """
        Generates a single video frame from `scene` and keeps it in `self.frame`.
        """
        if (scene.width, scene.height) != (self.w, self.h):
            self.resize(scene.width, scene.height)

        frame = np.full((self.h, self.w, 3), self.bg_color, dtype=np.uint8)

        # Draw trail frames with fading
        for i, trail_frame in enumerate(self.trail_frames):
            alpha = TRAIL_ALPHA_DECAY ** (len(self.trail_frames) - i)
            frame = cv2.addWeighted(frame, 1.0, trail_frame, alpha * 0.3, 0)

        self._draw_orb(frame, scene.features)

        particle_layer = np.zeros((self.h, self.w, 3), dtype=np.uint8)
        for state in scene.particles:
            self._draw_particle(particle_layer, state)
        frame = cv2.add(frame, particle_layer)

        if self.show_stats:
            self._draw_stats(frame, scene.features)

        # Store current layer for trail effect
        self.trail_frames.append(particle_layer)
        if len(self.trail_frames) > TRAIL_LENGTH:
            self.trail_frames.pop(0)

        self.frame = frame
        return frame
