"""Decorative walking-skeleton animation.

Components:
- state: walker, mode/pattern countdowns, glitch timer and particles
- kinematics: closed-form pose synthesis
- engine: per-tick update, frame rendering, the engine owning the state
- draw: backend-neutral draw commands and palettes
- canvas: terminal rasterizer for draw commands
"""

from portfolio_site.animation.canvas import rasterize
from portfolio_site.animation.engine import AnimationEngine, advance, render_frame, step
from portfolio_site.animation.state import (
    AnimationMode,
    AnimationState,
    MovementPattern,
    Particle,
    Viewport,
    initial_state,
)

__all__ = [
    "AnimationEngine",
    "AnimationMode",
    "AnimationState",
    "MovementPattern",
    "Particle",
    "Viewport",
    "advance",
    "initial_state",
    "rasterize",
    "render_frame",
    "step",
]
