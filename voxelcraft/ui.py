"""Text shown in the on-screen overlay."""

from __future__ import annotations


def fps_text(fps):
    return f"{fps} FPS"


def position_text(position):
    x, y, z = position
    return f"Position: {x:.1f}, {y:.1f}, {z:.1f}"