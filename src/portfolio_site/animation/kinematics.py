"""Closed-form pose synthesis for the walking skeleton.

The pose is not simulated: every joint is a trigonometric function of the
clock and a handful of per-mode gait parameters. Left and right limbs run
half a cycle apart and the arms swing against the legs.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from portfolio_site.animation.state import AnimationMode

__all__ = [
    "BASE_SPEED",
    "CLOCK_STEP",
    "GLITCH_JITTER",
    "HORIZONTAL_MARGIN",
    "SKELETON_SCALE",
    "GaitParams",
    "Point",
    "Pose",
    "compute_pose",
    "gait_params",
    "mode_speed",
    "no_jitter",
]

CLOCK_STEP = 0.05
BASE_SPEED = 2.5
HORIZONTAL_MARGIN = 100.0
SKELETON_SCALE = 1.2
GLITCH_JITTER = 150.0

_SPEED_FACTOR: dict[AnimationMode, float] = {
    AnimationMode.WALK: 1.0,
    AnimationMode.RUN: 2.0,
    AnimationMode.JUMP: 1.5,
    AnimationMode.DANCE: 0.0,
}

Point = tuple[float, float]
Jitter = Callable[[], float]


def no_jitter() -> float:
    return 0.0


def mode_speed(mode: AnimationMode) -> float:
    """Horizontal pixels per tick for *mode*."""
    return BASE_SPEED * _SPEED_FACTOR[mode]


@dataclass(frozen=True, slots=True)
class GaitParams:
    leg_speed: float = 3.0
    arm_speed: float = 3.0
    leg_amplitude: float = 30.0
    arm_amplitude: float = 20.0
    vertical_bob: float = 5.0
    jump_height: float = 0.0


def gait_params(mode: AnimationMode, time: float) -> GaitParams:
    """Gait parameters for *mode* at *time* (jump height and dance bob vary with time)."""
    if mode is AnimationMode.RUN:
        return GaitParams(
            leg_speed=5.0,
            arm_speed=5.0,
            leg_amplitude=45.0,
            arm_amplitude=35.0,
            vertical_bob=8.0,
        )
    if mode is AnimationMode.JUMP:
        return GaitParams(
            leg_amplitude=20.0,
            arm_amplitude=15.0,
            jump_height=abs(math.sin(time * 2)) * 80,
        )
    if mode is AnimationMode.DANCE:
        return GaitParams(
            leg_speed=4.0,
            arm_speed=4.0,
            leg_amplitude=15.0,
            arm_amplitude=30.0,
            vertical_bob=abs(math.sin(time * 4)) * 10,
        )
    return GaitParams()


@dataclass(frozen=True, slots=True)
class Pose:
    """Joint positions of the 2D rig, in viewport pixels."""

    head: Point
    shoulder: Point
    hip: Point
    left_knee: Point
    right_knee: Point
    left_foot: Point
    right_foot: Point
    left_elbow: Point
    right_elbow: Point
    left_hand: Point
    right_hand: Point

    def bones(self) -> list[tuple[Point, Point]]:
        """Segments to draw: neck, spine, both arm chains, both leg chains."""
        head_x, head_y = self.head
        return [
            ((head_x, head_y + 10), self.shoulder),
            (self.shoulder, self.hip),
            (self.shoulder, self.left_elbow),
            (self.left_elbow, self.left_hand),
            (self.shoulder, self.right_elbow),
            (self.right_elbow, self.right_hand),
            (self.hip, self.left_knee),
            (self.left_knee, self.left_foot),
            (self.hip, self.right_knee),
            (self.right_knee, self.right_foot),
        ]

    def joints(self) -> list[Point]:
        return [
            self.head,
            self.shoulder,
            self.left_elbow,
            self.right_elbow,
            self.left_hand,
            self.right_hand,
            self.hip,
            self.left_knee,
            self.right_knee,
            self.left_foot,
            self.right_foot,
        ]


def _leg(
    hip_x: float, hip_y: float, phase: float, gait: GaitParams, jitter: Jitter
) -> tuple[Point, Point]:
    s = SKELETON_SCALE
    lift = gait.jump_height
    knee = (
        hip_x + math.sin(phase) * gait.leg_amplitude * s + jitter(),
        hip_y + 25 * s - math.cos(phase) * 10 * s + jitter() - lift,
    )
    foot = (
        hip_x + math.sin(phase - 0.5) * gait.leg_amplitude * 1.6 * s + jitter(),
        hip_y + 55 * s + min(0.0, math.sin(phase)) * 10 * s + jitter() - lift,
    )
    return knee, foot


def _arm(
    shoulder: Point, phase: float, swing_phase: float, gait: GaitParams, jitter: Jitter
) -> tuple[Point, Point]:
    s = SKELETON_SCALE
    shoulder_x, shoulder_y = shoulder
    elbow = (
        shoulder_x + math.sin(swing_phase) * gait.arm_amplitude * s + jitter(),
        shoulder_y + 20 * s + jitter(),
    )
    hand = (
        shoulder_x + math.sin(swing_phase) * gait.arm_amplitude * 2 * s + jitter(),
        shoulder_y + 40 * s - abs(math.sin(phase)) * 10 * s + jitter(),
    )
    return elbow, hand


def compute_pose(
    time: float,
    hip_x: float,
    hip_y: float,
    mode: AnimationMode,
    jitter: Jitter = no_jitter,
) -> Pose:
    """Derive every joint position from the clock and the gait of *mode*.

    *jitter* is called once per jittered coordinate; pass :func:`no_jitter`
    outside a glitch episode.
    """
    s = SKELETON_SCALE
    gait = gait_params(mode, time)
    leg_phase = time * gait.leg_speed
    arm_phase = time * gait.arm_speed
    lift = gait.jump_height

    head = (
        hip_x + jitter() * 0.2,
        hip_y - 60 * s + math.sin(time * 6) * gait.vertical_bob + jitter() - lift,
    )
    shoulder = (hip_x, hip_y - 45 * s + jitter() - lift)

    left_knee, left_foot = _leg(hip_x, hip_y, leg_phase, gait, jitter)
    right_knee, right_foot = _leg(hip_x, hip_y, leg_phase + math.pi, gait, jitter)

    left_elbow, left_hand = _arm(shoulder, arm_phase, arm_phase + math.pi, gait, jitter)
    right_elbow, right_hand = _arm(shoulder, arm_phase, arm_phase, gait, jitter)

    return Pose(
        head=head,
        shoulder=shoulder,
        hip=(hip_x, hip_y - lift),
        left_knee=left_knee,
        right_knee=right_knee,
        left_foot=left_foot,
        right_foot=right_foot,
        left_elbow=left_elbow,
        right_elbow=right_elbow,
        left_hand=left_hand,
        right_hand=right_hand,
    )
