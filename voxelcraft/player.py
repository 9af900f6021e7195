"""First-person camera and player movement."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

CAMERA_SPEED = 0.18
MOUSE_SENSITIVITY = 0.006
_PITCH_MARGIN = 0.001


def _add(a, b):
    return tuple(x + y for x, y in zip(a, b))


def _sub(a, b):
    return tuple(x - y for x, y in zip(a, b))


def _scale(v, s):
    return tuple(x * s for x in v)


def _dot(a, b):
    return sum(x * y for x, y in zip(a, b))


def _cross(a, b):
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _length(v):
    return math.sqrt(_dot(v, v))


def _normalize(v):
    length = _length(v)
    return v if length == 0 else _scale(v, 1.0 / length)


def _angle(a, b):
    return math.atan2(_length(_cross(a, b)), _dot(a, b))


def _rotate(v, axis, angle):
    """Rotate ``v`` by ``angle`` radians around ``axis``."""
    axis = _normalize(axis)
    half = angle / 2.0
    w = _scale(axis, math.sin(half))
    wv = _cross(w, v)
    wwv = _cross(w, wv)
    return _add(_add(v, _scale(wv, 2.0 * math.cos(half))), _scale(wwv, 2.0))


class Movement(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


@dataclass
class Camera:
    position: tuple
    target: tuple
    up: tuple
    fovy: float = 60.0

    @property
    def forward(self):
        return _normalize(_sub(self.target, self.position))

    @property
    def up_axis(self):
        return _normalize(self.up)

    @property
    def right(self):
        return _normalize(_cross(self.forward, self.up_axis))

    def _translate(self, offset):
        self.position = _add(self.position, offset)
        self.target = _add(self.target, offset)


class Player:
    """A free-flying camera steered by the mouse and movement keys."""

    def __init__(self):
        position = (0.0, 80.0, 0.0)
        self.camera = Camera(
            position=position,
            target=_add(position, (0.0, 0.0, -1.0)),
            up=(0.0, 1.0, 0.0),
            fovy=60.0,
        )

    @property
    def position(self):
        return self.camera.position

    def yaw(self, angle):
        """Turn the view around the camera's up axis."""
        cam = self.camera
        offset = _rotate(_sub(cam.target, cam.position), cam.up_axis, angle)
        cam.target = _add(cam.position, offset)

    def pitch(self, angle):
        """Tilt the view, never past straight up or straight down."""
        cam = self.camera
        up = cam.up_axis
        offset = _sub(cam.target, cam.position)

        max_up = _angle(up, offset) - _PITCH_MARGIN
        angle = min(angle, max_up)
        max_down = -_angle(_scale(up, -1.0), offset) + _PITCH_MARGIN
        angle = max(angle, max_down)

        offset = _rotate(offset, cam.right, angle)
        cam.target = _add(cam.position, offset)

    def move_forward(self, distance):
        """Move along the view direction projected onto the ground plane."""
        fx, _, fz = self.camera.forward
        direction = _normalize((fx, 0.0, fz))
        self.camera._translate(_scale(direction, distance))

    def move_right(self, distance):
        """Strafe sideways within the ground plane."""
        rx, _, rz = self.camera.right
        direction = _normalize((rx, 0.0, rz))
        self.camera._translate(_scale(direction, distance))

    def move_up(self, distance):
        self.camera._translate(_scale(self.camera.up_axis, distance))

    def update(self, mouse_dx, mouse_dy, pressed):
        """Apply one frame of mouse movement and the held movement keys."""
        pressed = set(pressed)
        self.yaw(-mouse_dx * MOUSE_SENSITIVITY)
        self.pitch(-mouse_dy * MOUSE_SENSITIVITY)

        if Movement.FORWARD in pressed:
            self.move_forward(CAMERA_SPEED)
        if Movement.LEFT in pressed:
            self.move_right(-CAMERA_SPEED)
        if Movement.BACKWARD in pressed:
            self.move_forward(-CAMERA_SPEED)
        if Movement.RIGHT in pressed:
            self.move_right(CAMERA_SPEED)
        if Movement.UP in pressed:
            self.move_up(CAMERA_SPEED)
        if Movement.DOWN in pressed:
            self.move_up(-CAMERA_SPEED)