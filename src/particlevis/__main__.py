#!/usr/bin/env python3
"""
Particle Visualiser CLI Tool
============================

Renders an audio file into a video of audio-reactive particles. Librosa
provides the spectra, the particle engine turns them into scenes, and
OpenCV/MoviePy paint and encode the frames.

Features:
- Volume, band levels, dominant frequency and a running BPM estimate.
- Particles whose count, speed and colour follow the music.
- Central orb pulsing with the volume.

Usage:
    python -m particlevis input.wav --output result.mp4
    python -m particlevis -h (for help)
"""

import argparse
import logging
import os
import sys

import cv2
from moviepy import AudioFileClip, VideoClip

from particlevis.audio_source import LibrosaSpectrumSource
from particlevis.clock import ManualFrameClock
from particlevis.constants import DEFAULT_FPS, DEFAULT_RESOLUTION, MAX_PARTICLES
from particlevis.visualisation import Visualiser
from particlevis.visualiser_renderer import VisualiserRenderer

logger = logging.getLogger("particlevis")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate a particle visualisation video from an audio file."
    )
    parser.add_argument("input", help="Path to input audio file (WAV/MP3)")
    parser.add_argument("--output", "-o", default="output.mp4", help="Path to output video file")
    parser.add_argument("--width", type=int, default=DEFAULT_RESOLUTION[0], help="Video width")
    parser.add_argument("--height", type=int, default=DEFAULT_RESOLUTION[1], help="Video height")
    parser.add_argument("--fps", type=int, default=DEFAULT_FPS, help="Frames per second")
    parser.add_argument("--duration", type=float, help="Limit duration in seconds (optional)")
    parser.add_argument("--max-particles", type=int, default=MAX_PARTICLES, help="Particle pool capacity")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible renders")
    parser.add_argument("--stats", action="store_true", help="Overlay BPM, volume and band levels")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log per-frame details")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    # 1. Validation
    if not os.path.exists(args.input):
        sys.exit(f"[!] Input file not found: {args.input}")
    if args.width <= 0 or args.height <= 0 or args.max_particles <= 0:
        sys.exit("[!] Width, height and --max-particles must be positive")

    # 2. Analyse Audio
    try:
        source = LibrosaSpectrumSource(args.input)
    except Exception as e:
        sys.exit(f"[!] Error loading audio file: {e}")

    duration = source.duration
    if args.duration and args.duration < duration:
        duration = args.duration
        logger.info(f"[i] Truncating duration to {duration} seconds.")

    logger.info(f"[+] Preparing render: {args.width}x{args.height} @ {args.fps}fps")
    logger.info(f"[+] Duration: {duration:.2f} seconds")

    # 3. Wire the visualiser to a clock driven by the video writer
    clock = ManualFrameClock()
    renderer = VisualiserRenderer(args.width, args.height, show_stats=args.stats)
    visualiser = Visualiser(
        renderer=renderer,
        clock=clock,
        width=args.width,
        height=args.height,
        capacity=args.max_particles,
        seed=args.seed,
    )
    visualiser.start(source)

    def make_frame(t):
        clock.present(t * 1000)
        return cv2.cvtColor(renderer.frame, cv2.COLOR_BGR2RGB)

    video_clip = VideoClip(make_frame, duration=duration)

    # Attach original audio, cut if we truncated duration
    audio_clip = AudioFileClip(args.input).subclipped(0, duration)
    video_clip = video_clip.with_audio(audio_clip)

    # 4. Export
    logger.info("[+] Rendering video... (This may take a while)")
    try:
        video_clip.write_videofile(
            args.output,
            fps=args.fps,
            codec="libx264",
            audio_codec="aac",
            threads=4,
            preset="medium",  # Balance between speed and compression
            logger="bar",
        )
    finally:
        visualiser.stop()

    logger.info(f"[+] Done! Saved to {args.output}")


if __name__ == "__main__":
    main()
