"""Content document schema.

The whole site (profile, career timeline, project gallery, publication list
and UI strings) is driven by one JSON document. These models validate that
document once at load time; afterwards every instance is frozen and list
fields are tuples, so the loaded document cannot be mutated.

JSON keys are camelCase (``iconName``, ``playStoreLink``); Python attributes
are snake_case.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

__all__ = [
    "DEFAULT_LOCALE",
    "SUPPORTED_LOCALES",
    "ContentDocument",
    "ContentLoadError",
    "Locale",
    "LocalizedText",
    "Profile",
    "ProjectCategory",
    "ProjectEntry",
    "PublicationEntry",
    "SocialLink",
    "TimelineEntry",
    "TimelineKind",
]

Locale = Literal["en", "it"]
SUPPORTED_LOCALES: tuple[Locale, ...] = ("en", "it")
DEFAULT_LOCALE: Locale = "en"

TimelineKind = Literal["education", "work", "award"]
ProjectCategory = Literal["vision", "biomechanics", "system", "web", "mobile"]


class ContentLoadError(Exception):
    """Raised when the content document cannot be read, parsed or validated."""


class _ContentModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class LocalizedText(_ContentModel):
    """A string supplied in every supported locale."""

    en: str
    it: str

    def get(self, locale: Locale) -> str:
        """Return the text for *locale*.

        Raises:
            ValueError: If *locale* is not a supported locale.
        """
        if locale not in SUPPORTED_LOCALES:
            msg = f"Unsupported locale {locale!r}. Supported: {', '.join(SUPPORTED_LOCALES)}"
            raise ValueError(msg)
        return getattr(self, locale)


class SocialLink(_ContentModel):
    """A social profile shown in the contact footer."""

    network: str
    username: str = ""
    url: str
    icon_name: str = ""


class Profile(_ContentModel):
    """Owner name, localized headline copy and contact details."""

    name: str
    role: LocalizedText
    tagline: LocalizedText
    about: LocalizedText
    email: str
    location: str = ""
    socials: tuple[SocialLink, ...] = ()


class TimelineEntry(_ContentModel):
    """One step of the career timeline (education, job or award)."""

    id: str
    year: str
    title: LocalizedText
    description: LocalizedText
    institution: str
    kind: TimelineKind = Field(alias="type")
    logo: str | None = None
    logos: tuple[str, ...] = ()

    @property
    def logo_refs(self) -> tuple[str, ...]:
        """Logo image references, preferring the ``logos`` list over ``logo``."""
        if self.logos:
            return self.logos
        if self.logo:
            return (self.logo,)
        return ()


class ProjectEntry(_ContentModel):
    """A project card in the gallery."""

    id: str
    title: LocalizedText
    description: LocalizedText
    category: ProjectCategory
    technologies: tuple[str, ...] = ()
    image_url: str | None = None
    link: str | None = None
    play_store_link: str | None = None
    app_store_link: str | None = None
    github_url: str | None = None


class PublicationEntry(_ContentModel):
    """A paper in the publication list. Titles are never translated."""

    id: str
    title: str
    authors: tuple[str, ...]
    venue: str
    year: int
    doi: str | None = None
    pdf_link: str | None = None
    github_url: str | None = None
    tags: tuple[str, ...] = ()

    @property
    def doi_url(self) -> str | None:
        if not self.doi:
            return None
        return f"https://doi.org/{self.doi}"

    def short_authors(self, limit: int = 3) -> str:
        """Comma-joined author list truncated to *limit* names plus ``et al.``."""
        shown = ", ".join(self.authors[:limit])
        if len(self.authors) > limit:
            return f"{shown}, et al."
        return shown


class ContentDocument(_ContentModel):
    """Top-level content bundle. List order is display order."""

    profile: Profile
    history: tuple[TimelineEntry, ...] = ()
    projects: tuple[ProjectEntry, ...] = ()
    publications: tuple[PublicationEntry, ...] = ()
    ui: dict[str, LocalizedText] = Field(default_factory=dict)

    def ui_text(self, key: str, locale: Locale) -> str:
        """Return the UI string *key* in *locale*, or the key itself if undefined."""
        text = self.ui.get(key)
        if text is None:
            return key
        return text.get(locale)
