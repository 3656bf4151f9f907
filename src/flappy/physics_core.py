"""
physics_core.py: The deterministic kinematic functions and collision logic.
"""

from typing import Tuple

from .constants import (
    GRAVITY_ACCEL, JUMP_IMPULSE, TERMINAL_VEL_UP, TERMINAL_VEL_DOWN, FLOOR_Y,
    ROTATION_VELOCITY_SCALE, ROTATION_MIN, ROTATION_MAX, ROTATION_EASE
)
from .data_models import Strawberry, Pipe


class PhysicsCore:
    """
    Physics shared by the simulation loop: avatar integration under gravity and
    flap impulses, plus circle-vs-rectangle collision.

    All tunables are class attributes so an engine or a test can override them.
    """

    GRAVITY = GRAVITY_ACCEL
    FLAP_IMPULSE = JUMP_IMPULSE
    TERMINAL_VEL_UP = TERMINAL_VEL_UP
    TERMINAL_VEL_DOWN = TERMINAL_VEL_DOWN
    FLOOR_Y = FLOOR_Y

    def flap_velocity(self) -> float:
        """Returns the instantaneous velocity after a flap."""
        return self.FLAP_IMPULSE

    def clamp_velocity(self, velocity: float) -> float:
        return max(self.TERMINAL_VEL_UP, min(velocity, self.TERMINAL_VEL_DOWN))

    def apply_gravity_and_movement(self, y: float, velocity: float, dt: float,
                                   flap: bool = False) -> Tuple[float, float]:
        """
        Calculates new position and velocity after dt seconds.

        Velocity is updated and clamped before it moves the position, so a single
        tick never overshoots the terminal velocity.
        """
        if flap:
            velocity = self.flap_velocity()
        else:
            velocity += self.GRAVITY * dt
        velocity = self.clamp_velocity(velocity)
        y += velocity * dt
        return y, velocity

    @staticmethod
    def ease_rotation(rotation: float, velocity: float, dt: float) -> float:
        """Exponential smoothing toward a tilt derived from velocity."""
        target = min(ROTATION_MAX, max(ROTATION_MIN, velocity / ROTATION_VELOCITY_SCALE))
        return rotation + (target - rotation) * min(1.0, dt * ROTATION_EASE)

    def integrate(self, avatar: Strawberry, dt: float, flap: bool = False) -> bool:
        """
        Advances the avatar by dt seconds. Mutates the avatar.

        Returns True if the avatar hit the ground. The ceiling only stops the
        avatar and is never fatal.
        """
        avatar.y, avatar.velocity = self.apply_gravity_and_movement(
            avatar.y, avatar.velocity, dt, flap)
        avatar.rotation = self.ease_rotation(avatar.rotation, avatar.velocity, dt)

        if avatar.y + avatar.radius > self.FLOOR_Y:
            avatar.y = self.FLOOR_Y - avatar.radius
            return True
        if avatar.y - avatar.radius < 0:
            avatar.y = avatar.radius
            avatar.velocity = 0.0
        return False

    @staticmethod
    def circle_rect_collision(cx: float, cy: float, radius: float,
                              rx: float, ry: float, rw: float, rh: float) -> bool:
        """Circle vs axis-aligned rectangle. Touching counts as a hit."""
        if radius <= 0:
            # A point has no extent: it overlaps only from strictly inside.
            return rx < cx < rx + rw and ry < cy < ry + rh
        nearest_x = max(rx, min(cx, rx + rw))
        nearest_y = max(ry, min(cy, ry + rh))
        dx = cx - nearest_x
        dy = cy - nearest_y
        return dx * dx + dy * dy <= radius * radius

    def check_collision(self, avatar: Strawberry, pipe: Pipe) -> bool:
        """Checks the avatar against the top and bottom segments of a pipe."""
        if self.circle_rect_collision(avatar.x, avatar.y, avatar.radius,
                                      pipe.x, 0, pipe.width, pipe.top_height):
            return True
        return self.circle_rect_collision(avatar.x, avatar.y, avatar.radius,
                                          pipe.x, pipe.bottom_y, pipe.width, pipe.bottom_height)
