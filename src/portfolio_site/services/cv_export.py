"""CV export: lays the content document out as a paginated PDF.

Two variants exist. ``short`` carries the header, the first three timeline
entries without descriptions, up to three publications and a closing note
pointing to the website. ``long`` carries the header, the about paragraph,
the full timeline with descriptions, every project and every publication.

Layout keeps a single vertical cursor (millimetres from the top of the
page). Every emission helper takes the cursor and returns the advanced one;
before each independent block (timeline entry, project, publication) the
cursor is checked against a break threshold and a fresh page is started if
needed. Section headings use a slightly lower threshold so a heading is
never left at the bottom of a page without its first entry. A block whose
own wrapped text runs past the threshold is allowed to overflow rather than
being split.

Precondition: every localized field carries both locales. Content validation
guarantees this, so it is not re-checked here.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Literal

from fpdf import FPDF

from portfolio_site.models.content import SUPPORTED_LOCALES, ContentDocument, Locale

logger = logging.getLogger(__name__)

__all__ = [
    "CV_FILENAMES",
    "CV_VARIANTS",
    "CvVariant",
    "EmittedLine",
    "PdfSurface",
    "cv_filename",
    "emit_text",
    "ensure_room",
    "export_cv",
    "generate_cv",
    "get_export_dir",
    "layout_cv",
]

CvVariant = Literal["short", "long"]
CV_VARIANTS: tuple[CvVariant, ...] = ("short", "long")
CV_FILENAMES: dict[CvVariant, str] = {
    "short": "resume_short.pdf",
    "long": "resume_extended.pdf",
}

# A4 portrait, millimetres.
LEFT_MARGIN = 15.0
DETAIL_COLUMN = 50.0
RIGHT_EDGE = 195.0
PAGE_CENTER = 105.0
TOP_MARGIN = 20.0
TEXT_WIDTH = 180.0
DESCRIPTION_WIDTH = 140.0
BREAK_THRESHOLD = 270.0
SECTION_BREAK_THRESHOLD = 260.0
FOOTER_BASELINE = 285.0

SHORT_HISTORY_LIMIT = 3
SHORT_PUBLICATION_LIMIT = 3

_PT_TO_MM = 25.4 / 72
_LINE_HEIGHT_FACTOR = 1.15
_FONT_FAMILY = "Helvetica"
_FIXED_CREATION_DATE = datetime(2000, 1, 1, tzinfo=UTC)

_SECTION_LABELS: dict[str, dict[str, str]] = {
    "en": {
        "profile": "PROFILE",
        "history": "HISTORY",
        "history_short": "EDUCATION & EXPERIENCE",
        "projects": "SELECTED PROJECTS",
        "publications": "PUBLICATIONS",
        "closing_note": "Full CV and project portfolio available at website.",
        "title": "Curriculum Vitae",
    },
    "it": {
        "profile": "PROFILO",
        "history": "PERCORSO",
        "history_short": "FORMAZIONE ED ESPERIENZA",
        "projects": "PROGETTI SELEZIONATI",
        "publications": "PUBBLICAZIONI",
        "closing_note": "CV completo e portfolio dei progetti disponibili sul sito web.",
        "title": "Curriculum Vitae",
    },
}

# Core PDF fonts only cover latin-1.
_PDF_REPLACEMENTS = {
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "–": "-",
    "—": "-",
    "…": "...",
}


def _sanitize_for_pdf(text: str) -> str:
    for src, dest in _PDF_REPLACEMENTS.items():
        text = text.replace(src, dest)
    return text.encode("latin-1", errors="replace").decode("latin-1")


@dataclass(frozen=True, slots=True)
class EmittedLine:
    """One line of text placed on the page, kept for layout inspection."""

    page: int
    x: float
    y: float
    text: str
    size: float
    style: str


class PdfSurface:
    """FPDF page surface that also records every placed line.

    The recording lets tests check positions and pagination without parsing
    PDF bytes.
    """

    def __init__(self, title: str = "", author: str = "") -> None:
        self.pdf = FPDF(orientation="P", unit="mm", format="A4")
        self.pdf.set_auto_page_break(auto=False)
        self.pdf.creation_date = _FIXED_CREATION_DATE
        if title:
            self.pdf.set_title(_sanitize_for_pdf(title))
        if author:
            self.pdf.set_author(_sanitize_for_pdf(author))
        self.pdf.add_page()
        self.lines: list[EmittedLine] = []
        self.page_breaks: list[float] = []
        self._size = 10.0
        self._style = ""
        self.set_font(self._size, self._style)

    @property
    def page(self) -> int:
        return self.pdf.page

    @property
    def page_count(self) -> int:
        return self.pdf.pages_count

    def set_font(self, size: float, style: str = "") -> None:
        self._size = size
        self._style = style
        self.pdf.set_font(_FONT_FAMILY, style, size)

    def set_gray(self, level: int) -> None:
        self.pdf.set_text_color(level)

    def line_height(self) -> float:
        return self._size * _LINE_HEIGHT_FACTOR * _PT_TO_MM

    def text_width(self, text: str) -> float:
        return self.pdf.get_string_width(_sanitize_for_pdf(text))

    def wrap(self, text: str, width: float) -> list[str]:
        """Split *text* into lines no wider than *width* in the current font."""
        lines: list[str] = []
        for paragraph in text.split("\n"):
            words = paragraph.split()
            if not words:
                lines.append("")
                continue
            current = ""
            for word in words:
                candidate = f"{current} {word}" if current else word
                if self.text_width(candidate) <= width:
                    current = candidate
                    continue
                if current:
                    lines.append(current)
                while len(word) > 1 and self.text_width(word) > width:
                    cut = len(word) - 1
                    while cut > 1 and self.text_width(word[:cut]) > width:
                        cut -= 1
                    lines.append(word[:cut])
                    word = word[cut:]
                current = word
            lines.append(current)
        return lines

    def text(self, x: float, y: float, text: str) -> None:
        """Place one line with its baseline at *y*. Empty lines only take space."""
        if not text:
            return
        self.pdf.text(x, y, _sanitize_for_pdf(text))
        self.lines.append(EmittedLine(self.page, x, y, text, self._size, self._style))

    def centered_text(self, center_x: float, y: float, text: str) -> None:
        self.text(center_x - self.text_width(text) / 2, y, text)

    def rule(self, y: float) -> float:
        """Draw a light horizontal separator and return the cursor below it."""
        self.pdf.set_draw_color(200, 200, 200)
        self.pdf.line(LEFT_MARGIN, y, RIGHT_EDGE, y)
        return y + 8

    def add_page(self, at_y: float) -> None:
        self.page_breaks.append(at_y)
        self.pdf.add_page()
        self.set_font(self._size, self._style)

    def output(self) -> bytes:
        return bytes(self.pdf.output())


def emit_text(
    surface: PdfSurface,
    text: str,
    x: float,
    y: float,
    size: float = 10,
    style: str = "",
    width: float = TEXT_WIDTH,
) -> float:
    """Wrap *text* to *width*, place it at the cursor and return the new cursor."""
    surface.set_font(size, style)
    lines = surface.wrap(text, width)
    step = surface.line_height()
    for index, line in enumerate(lines):
        surface.text(x, y + index * step, line)
    return y + len(lines) * (size * 0.35 + 1) + 2


def ensure_room(surface: PdfSurface, y: float, threshold: float = BREAK_THRESHOLD) -> float:
    """Start a new page when the cursor is past *threshold*; return the cursor."""
    if y > threshold:
        surface.add_page(y)
        return TOP_MARGIN
    return y


def _labels(locale: Locale) -> dict[str, str]:
    return _SECTION_LABELS[locale]


def _emit_header(
    surface: PdfSurface, document: ContentDocument, locale: Locale, y: float
) -> float:
    profile = document.profile
    y = emit_text(surface, profile.name.upper(), LEFT_MARGIN, y, 20, "B")
    y = emit_text(surface, profile.role.get(locale), LEFT_MARGIN, y - 2, 12, "I")
    surface.set_font(9)
    contact = " | ".join(part for part in (profile.email, profile.location) if part)
    surface.text(LEFT_MARGIN, y, contact)
    y += 10
    return surface.rule(y)


def _emit_history(
    surface: PdfSurface,
    document: ContentDocument,
    locale: Locale,
    variant: CvVariant,
    y: float,
) -> float:
    labels = _labels(locale)
    heading = labels["history_short"] if variant == "short" else labels["history"]
    y = ensure_room(surface, y, SECTION_BREAK_THRESHOLD)
    y = emit_text(surface, heading, LEFT_MARGIN, y, 12, "B")

    entries = document.history
    if variant == "short":
        entries = entries[:SHORT_HISTORY_LIMIT]

    for entry in entries:
        y = ensure_room(surface, y)
        surface.set_font(10, "B")
        surface.text(LEFT_MARGIN, y, entry.year)
        surface.text(DETAIL_COLUMN, y, entry.institution)
        y += 5

        surface.set_font(10, "I")
        surface.text(DETAIL_COLUMN, y, entry.title.get(locale))
        y += 5

        if variant == "long":
            surface.set_font(9)
            surface.set_gray(100)
            lines = surface.wrap(entry.description.get(locale), DESCRIPTION_WIDTH)
            step = surface.line_height()
            for index, line in enumerate(lines):
                surface.text(DETAIL_COLUMN, y + index * step, line)
            surface.set_gray(0)
            y += len(lines) * 4 + 4
        else:
            y += 2

    y += 5
    return ensure_room(surface, y)


def _emit_projects(
    surface: PdfSurface, document: ContentDocument, locale: Locale, y: float
) -> float:
    y = ensure_room(surface, y, SECTION_BREAK_THRESHOLD)
    y = emit_text(surface, _labels(locale)["projects"], LEFT_MARGIN, y, 12, "B")
    for project in document.projects:
        y = ensure_room(surface, y)
        surface.set_font(10, "B")
        surface.text(LEFT_MARGIN, y, project.title.get(locale))
        y += 5
        summary = project.description.get(locale)
        if project.technologies:
            summary = f"{summary} [{', '.join(project.technologies)}]"
        y = emit_text(surface, summary, LEFT_MARGIN, y, 9)
        y += 2
    return y + 5


def _emit_publications(
    surface: PdfSurface,
    document: ContentDocument,
    locale: Locale,
    variant: CvVariant,
    y: float,
) -> float:
    y = ensure_room(surface, y, SECTION_BREAK_THRESHOLD)
    y = emit_text(surface, _labels(locale)["publications"], LEFT_MARGIN, y, 12, "B")

    publications = document.publications
    if variant == "short":
        publications = publications[:SHORT_PUBLICATION_LIMIT]

    for pub in publications:
        y = ensure_room(surface, y)
        citation = f"[{pub.year}] {pub.title}. {', '.join(pub.authors)}. {pub.venue}."
        y = emit_text(surface, citation, LEFT_MARGIN, y, 9)
    return y


def _check_request(locale: str, variant: str) -> None:
    if variant not in CV_VARIANTS:
        msg = f"Unknown CV variant {variant!r}. Available: {', '.join(CV_VARIANTS)}"
        raise ValueError(msg)
    if locale not in SUPPORTED_LOCALES:
        msg = f"Unsupported locale {locale!r}. Supported: {', '.join(SUPPORTED_LOCALES)}"
        raise ValueError(msg)


def layout_cv(
    document: ContentDocument,
    locale: Locale,
    variant: CvVariant,
    surface: PdfSurface | None = None,
) -> PdfSurface:
    """Lay out the CV for *variant* in *locale* and return the filled surface.

    Raises:
        ValueError: If *variant* or *locale* is not supported.
    """
    _check_request(locale, variant)
    labels = _labels(locale)
    if surface is None:
        surface = PdfSurface(
            title=f"{labels['title']} - {document.profile.name}",
            author=document.profile.name,
        )

    y = _emit_header(surface, document, locale, TOP_MARGIN)

    if variant == "long":
        y = emit_text(surface, labels["profile"], LEFT_MARGIN, y, 12, "B")
        y = emit_text(surface, document.profile.about.get(locale), LEFT_MARGIN, y, 10)
        y += 5

    y = _emit_history(surface, document, locale, variant, y)

    if variant == "long":
        y = _emit_projects(surface, document, locale, y)

    _emit_publications(surface, document, locale, variant, y)

    if variant == "short":
        surface.set_font(8)
        surface.set_gray(150)
        surface.centered_text(PAGE_CENTER, FOOTER_BASELINE, labels["closing_note"])
        surface.set_gray(0)

    return surface


def generate_cv(document: ContentDocument, locale: Locale, variant: CvVariant) -> bytes:
    """Return the PDF bytes of the CV. Same inputs always give the same bytes."""
    return layout_cv(document, locale, variant).output()


def cv_filename(variant: CvVariant) -> str:
    """Download name for *variant* (``resume_short.pdf`` / ``resume_extended.pdf``)."""
    try:
        return CV_FILENAMES[variant]
    except KeyError:
        msg = f"Unknown CV variant {variant!r}. Available: {', '.join(CV_VARIANTS)}"
        raise ValueError(msg) from None


def get_export_dir() -> Path:
    """Return the directory exports are written to, allowing an environment override."""
    env_dir = os.getenv("PORTFOLIO_EXPORT_DIR")
    if env_dir:
        return Path(env_dir).expanduser().resolve()
    return Path.cwd()


def export_cv(
    document: ContentDocument,
    locale: Locale,
    variant: CvVariant,
    output_dir: Path | None = None,
) -> Path:
    """Generate the CV and write it under *output_dir*.

    Args:
        document: Loaded content document (not modified).
        locale: Language every localized field is rendered in.
        variant: ``short`` or ``long``.
        output_dir: Target directory; defaults to :func:`get_export_dir`.

    Returns:
        Path to the written PDF.
    """
    data = generate_cv(document, locale, variant)
    target_dir = output_dir or get_export_dir()
    target_dir.mkdir(parents=True, exist_ok=True)
    output_path = target_dir / cv_filename(variant)
    output_path.write_bytes(data)
    logger.info("Exported %s CV (%s, %d bytes) to %s", variant, locale, len(data), output_path)
    return output_path
