"""Animation state for the walking skeleton.

All state is owned by one engine instance, created at mount and dropped at
unmount. Nothing here is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

__all__ = [
    "INITIAL_MODE_COUNTDOWN",
    "INITIAL_PATTERN_COUNTDOWN",
    "AnimationMode",
    "AnimationState",
    "MovementPattern",
    "Particle",
    "Viewport",
    "initial_state",
]

INITIAL_MODE_COUNTDOWN = 300.0
INITIAL_PATTERN_COUNTDOWN = 500.0
BASELINE_RATIO = 0.6
START_X = -100.0


class AnimationMode(str, Enum):
    WALK = "walk"
    RUN = "run"
    JUMP = "jump"
    DANCE = "dance"


class MovementPattern(str, Enum):
    HORIZONTAL = "horizontal"
    WAVE = "wave"
    ZIGZAG = "zigzag"
    SPIRAL = "spiral"


@dataclass(frozen=True, slots=True)
class Viewport:
    """Drawing area size in pixels."""

    width: float
    height: float

    @property
    def baseline_y(self) -> float:
        return self.height * BASELINE_RATIO


@dataclass(slots=True)
class Particle:
    """A trail particle. Removed once ``age`` exceeds ``lifespan``."""

    x: float
    y: float
    vx: float
    vy: float
    age: float
    lifespan: float

    @property
    def expired(self) -> bool:
        return self.age > self.lifespan


@dataclass(slots=True)
class AnimationState:
    """Everything the per-frame update reads and writes.

    Attributes:
        time: Scalar clock, advanced once per tick.
        x: Walker hip x position.
        y: Walker hip y position.
        direction: ``1`` moving right, ``-1`` moving left.
        mode: Current gait.
        mode_countdown: Ticks left before a new gait is drawn.
        pattern: Current vertical movement strategy.
        pattern_countdown: Ticks left before a new pattern is drawn.
        wave_offset: Phase used by the movement patterns.
        glitch_countdown: Ticks left in the current glitch episode.
        particles: Live trail particles, unordered.
    """

    time: float
    x: float
    y: float
    direction: int
    mode: AnimationMode
    mode_countdown: float
    pattern: MovementPattern
    pattern_countdown: float
    wave_offset: float = 0.0
    glitch_countdown: int = 0
    particles: list[Particle] = field(default_factory=list)

    @property
    def glitching(self) -> bool:
        return self.glitch_countdown > 0


def initial_state(viewport: Viewport) -> AnimationState:
    """Walker enters from the left edge, walking along the baseline."""
    return AnimationState(
        time=0.0,
        x=START_X,
        y=viewport.baseline_y,
        direction=1,
        mode=AnimationMode.WALK,
        mode_countdown=INITIAL_MODE_COUNTDOWN,
        pattern=MovementPattern.HORIZONTAL,
        pattern_countdown=INITIAL_PATTERN_COUNTDOWN,
    )
