"""Draw commands and color palettes.

The engine never touches a rendering surface; it emits these commands and a
backend (the terminal canvas) turns them into pixels or glyphs.
Coordinates are viewport pixels.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "DARK_PALETTE",
    "GLITCH_COLOR",
    "LIGHT_PALETTE",
    "Circle",
    "Clear",
    "DrawCommand",
    "Label",
    "Line",
    "Palette",
    "Rect",
    "palette_for",
]

GLITCH_COLOR = "#ef4444"


@dataclass(frozen=True, slots=True)
class Clear:
    pass


@dataclass(frozen=True, slots=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    width: float = 1.0
    alpha: float = 1.0


@dataclass(frozen=True, slots=True)
class Circle:
    x: float
    y: float
    radius: float
    color: str
    filled: bool = True
    alpha: float = 1.0
    glow: bool = False


@dataclass(frozen=True, slots=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    fill: str
    border: str


@dataclass(frozen=True, slots=True)
class Label:
    x: float
    y: float
    text: str
    color: str
    size: int = 10
    bold: bool = False


DrawCommand = Clear | Line | Circle | Rect | Label


@dataclass(frozen=True, slots=True)
class Palette:
    """Theme colors. Only the palette depends on the light/dark flag."""

    accent: str
    bone_alpha: float
    particle_alpha: float
    panel_fill: str
    panel_border: str
    panel_title: str
    panel_detail: str
    confidence_ok: str


DARK_PALETTE = Palette(
    accent="#38bdf8",
    bone_alpha=0.4,
    particle_alpha=0.4,
    panel_fill="#0f172a",
    panel_border="#38bdf8",
    panel_title="#94a3b8",
    panel_detail="#64748b",
    confidence_ok="#4ade80",
)

LIGHT_PALETTE = Palette(
    accent="#fb923c",
    bone_alpha=0.4,
    particle_alpha=0.4,
    panel_fill="#fff7ed",
    panel_border="#fb923c",
    panel_title="#78716c",
    panel_detail="#a8a29e",
    confidence_ok="#15803d",
)


def palette_for(dark_mode: bool) -> Palette:
    return DARK_PALETTE if dark_mode else LIGHT_PALETTE
