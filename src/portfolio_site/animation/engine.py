"""Per-frame update and frame rendering for the walking skeleton.

``advance`` is the simulation: it takes the current state and returns the
next one without mutating its input. ``render_frame`` turns a state into
draw commands. ``step`` does both, which is what a frame callback wants.

All randomness (mode and pattern draws, glitch episodes, particle spawns,
joint jitter, the displayed confidence) comes from the ``rng`` argument so
callers can seed it.
"""

from __future__ import annotations

import math
import random
from dataclasses import replace

from portfolio_site.animation.draw import (
    GLITCH_COLOR,
    Circle,
    Clear,
    DrawCommand,
    Label,
    Line,
    Rect,
    palette_for,
)
from portfolio_site.animation.kinematics import (
    CLOCK_STEP,
    GLITCH_JITTER,
    HORIZONTAL_MARGIN,
    SKELETON_SCALE,
    compute_pose,
    mode_speed,
    no_jitter,
)
from portfolio_site.animation.state import (
    AnimationMode,
    AnimationState,
    MovementPattern,
    Particle,
    Viewport,
    initial_state,
)

__all__ = [
    "GLITCH_DURATION",
    "GLITCH_PROBABILITY",
    "MODE_COUNTDOWN_RANGE",
    "MODE_POOL",
    "PATTERN_COUNTDOWN_RANGE",
    "PATTERN_POOL",
    "SPAWN_PROBABILITY",
    "WALKER_ID",
    "AnimationEngine",
    "advance",
    "render_frame",
    "step",
]

# Walk appears twice so it stays the most likely gait.
MODE_POOL: tuple[AnimationMode, ...] = (
    AnimationMode.WALK,
    AnimationMode.WALK,
    AnimationMode.RUN,
    AnimationMode.JUMP,
    AnimationMode.DANCE,
)
PATTERN_POOL: tuple[MovementPattern, ...] = tuple(MovementPattern)
MODE_COUNTDOWN_RANGE = (200.0, 600.0)
PATTERN_COUNTDOWN_RANGE = (400.0, 1000.0)

GLITCH_PROBABILITY = 0.003
GLITCH_DURATION = 60

SPAWN_PROBABILITY = 0.3
GRAVITY = 0.1
LIFESPAN_RANGE = (30.0, 60.0)
FOOT_OFFSET = 50.0

WAVE_AMPLITUDE = 80.0
ZIGZAG_STEP = 50.0
SPIRAL_RADIUS = 60.0
SPIRAL_SPEED = 0.1
BOB_AMPLITUDE = 10.0

WALKER_ID = "WALKER_01"
PANEL_WIDTH = 120.0
PANEL_HEIGHT = 50.0
PANEL_OFFSET = 180.0


def _pattern_y(pattern: MovementPattern, baseline: float, time: float, wave: float) -> float:
    if pattern is MovementPattern.WAVE:
        return baseline + math.sin(wave * 2) * WAVE_AMPLITUDE
    if pattern is MovementPattern.ZIGZAG:
        return baseline + (-ZIGZAG_STEP if math.floor(wave) % 2 == 0 else ZIGZAG_STEP)
    if pattern is MovementPattern.SPIRAL:
        return baseline + math.sin(time * SPIRAL_SPEED) * SPIRAL_RADIUS * math.sin(wave)
    return baseline + math.sin(time * 6) * BOB_AMPLITUDE


def _spawn_particle(x: float, y: float, rng: random.Random) -> Particle:
    return Particle(
        x=x + (rng.random() - 0.5) * 20,
        y=y + FOOT_OFFSET + (rng.random() - 0.5) * 10,
        vx=(rng.random() - 0.5) * 1,
        vy=-rng.random() * 2 - 1,
        age=1.0,
        lifespan=rng.uniform(*LIFESPAN_RANGE),
    )


def _update_particles(particles: list[Particle]) -> list[Particle]:
    survivors: list[Particle] = []
    for p in particles:
        moved = Particle(
            x=p.x + p.vx,
            y=p.y + p.vy,
            vx=p.vx,
            vy=p.vy + GRAVITY,
            age=p.age + 1,
            lifespan=p.lifespan,
        )
        if not moved.expired:
            survivors.append(moved)
    return survivors


def advance(state: AnimationState, viewport: Viewport, rng: random.Random) -> AnimationState:
    """Return the state one tick after *state*. *state* is left untouched."""
    time = state.time + CLOCK_STEP

    mode = state.mode
    mode_countdown = state.mode_countdown - 1
    if mode_countdown <= 0:
        mode = rng.choice(MODE_POOL)
        mode_countdown = rng.uniform(*MODE_COUNTDOWN_RANGE)

    pattern = state.pattern
    pattern_countdown = state.pattern_countdown - 1
    if pattern_countdown <= 0:
        pattern = rng.choice(PATTERN_POOL)
        pattern_countdown = rng.uniform(*PATTERN_COUNTDOWN_RANGE)

    direction = state.direction
    x = state.x + mode_speed(mode) * direction
    right_bound = viewport.width + HORIZONTAL_MARGIN
    left_bound = -HORIZONTAL_MARGIN
    if direction == 1 and x > right_bound:
        x, direction = right_bound, -1
    elif direction == -1 and x < left_bound:
        x, direction = left_bound, 1

    wave_offset = state.wave_offset + CLOCK_STEP
    y = _pattern_y(pattern, viewport.baseline_y, time, wave_offset)

    glitch_countdown = state.glitch_countdown
    if glitch_countdown == 0 and rng.random() < GLITCH_PROBABILITY:
        glitch_countdown = GLITCH_DURATION
    # The starting tick counts towards the episode.
    if glitch_countdown > 0:
        glitch_countdown -= 1

    particles = list(state.particles)
    if rng.random() < SPAWN_PROBABILITY:
        particles.append(_spawn_particle(x, y, rng))
    particles = _update_particles(particles)

    return replace(
        state,
        time=time,
        x=x,
        y=y,
        direction=direction,
        mode=mode,
        mode_countdown=mode_countdown,
        pattern=pattern,
        pattern_countdown=pattern_countdown,
        wave_offset=wave_offset,
        glitch_countdown=glitch_countdown,
        particles=particles,
    )


def render_frame(
    state: AnimationState, dark_mode: bool, rng: random.Random
) -> list[DrawCommand]:
    """Draw commands for *state*: particles, skeleton, head glow and status panel."""
    palette = palette_for(dark_mode)
    glitching = state.glitching
    commands: list[DrawCommand] = [Clear()]

    for p in state.particles:
        remaining = max(0.0, 1 - p.age / p.lifespan)
        commands.append(
            Circle(
                p.x,
                p.y,
                radius=2 * remaining,
                color=palette.accent,
                alpha=remaining * palette.particle_alpha,
            )
        )

    if glitching:

        def jitter() -> float:
            return (rng.random() - 0.5) * GLITCH_JITTER

    else:
        jitter = no_jitter

    pose = compute_pose(state.time, state.x, state.y, state.mode, jitter)
    bone_color = GLITCH_COLOR if glitching else palette.accent
    bone_alpha = 1.0 if glitching else palette.bone_alpha
    joint_color = GLITCH_COLOR if glitching else palette.accent

    for (x1, y1), (x2, y2) in pose.bones():
        commands.append(Line(x1, y1, x2, y2, color=bone_color, width=3, alpha=bone_alpha))

    head_x, head_y = pose.head
    commands.append(
        Circle(head_x, head_y, radius=8 * SKELETON_SCALE, color=joint_color, filled=False)
    )
    if not glitching:
        commands.append(
            Circle(
                head_x,
                head_y,
                radius=6 * SKELETON_SCALE,
                color=palette.accent,
                alpha=0.2,
                glow=True,
            )
        )

    for jx, jy in pose.joints():
        commands.append(Circle(jx, jy, radius=4, color=joint_color))

    box_x = state.x - PANEL_WIDTH / 2
    # Kept on screen when the viewport is shorter than the panel offset.
    box_y = max(0.0, state.y - PANEL_OFFSET)
    commands.append(
        Rect(
            box_x,
            box_y,
            PANEL_WIDTH,
            PANEL_HEIGHT,
            fill=palette.panel_fill,
            border=palette.panel_border,
        )
    )
    commands.append(Label(box_x + 10, box_y + 15, f"ID: {WALKER_ID}", palette.panel_title))
    commands.append(
        Label(
            box_x + 10,
            box_y + 27,
            f"{state.mode.value.upper()} | {state.pattern.value.upper()}",
            palette.panel_detail,
            size=8,
        )
    )
    confidence = rng.random() * 0.2 if glitching else 0.95 + rng.random() * 0.04
    commands.append(
        Label(
            box_x + 10,
            box_y + 41,
            f"CONF: {confidence:.2f}",
            GLITCH_COLOR if glitching else palette.confidence_ok,
            size=11,
            bold=True,
        )
    )
    if glitching:
        commands.append(
            Label(box_x + 10, box_y + PANEL_HEIGHT + 20, "⚠ TRACKING LOST", GLITCH_COLOR, size=9)
        )
    return commands


def step(
    state: AnimationState, viewport: Viewport, dark_mode: bool, rng: random.Random
) -> tuple[AnimationState, list[DrawCommand]]:
    """Advance one tick and render the resulting frame."""
    next_state = advance(state, viewport, rng)
    return next_state, render_frame(next_state, dark_mode, rng)


class AnimationEngine:
    """Owns the walker state between frames.

    The light/dark flag and the viewport are read at the start of each tick;
    changing the flag recolors the figure without touching its motion.
    """

    def __init__(
        self,
        width: float,
        height: float,
        *,
        dark_mode: bool = False,
        rng: random.Random | None = None,
    ) -> None:
        self.viewport = Viewport(width, height)
        self.dark_mode = dark_mode
        self.rng = rng or random.Random()
        self.state = initial_state(self.viewport)
        self.frames = 0

    def resize(self, width: float, height: float) -> None:
        """Adopt a new viewport and move the walker onto its baseline."""
        self.viewport = Viewport(width, height)
        x = min(self.state.x, width + HORIZONTAL_MARGIN)
        self.state = replace(self.state, x=x, y=self.viewport.baseline_y)

    def set_dark_mode(self, dark_mode: bool) -> None:
        self.dark_mode = dark_mode

    def tick(self) -> list[DrawCommand]:
        self.state, commands = step(self.state, self.viewport, self.dark_mode, self.rng)
        self.frames += 1
        return commands
