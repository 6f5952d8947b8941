"""Data models and type definitions"""

from portfolio_site.models.content import (
    DEFAULT_LOCALE,
    SUPPORTED_LOCALES,
    ContentDocument,
    ContentLoadError,
    Locale,
    LocalizedText,
    Profile,
    ProjectEntry,
    PublicationEntry,
    SocialLink,
    TimelineEntry,
)

__all__ = [
    "DEFAULT_LOCALE",
    "SUPPORTED_LOCALES",
    "ContentDocument",
    "ContentLoadError",
    "Locale",
    "LocalizedText",
    "Profile",
    "ProjectEntry",
    "PublicationEntry",
    "SocialLink",
    "TimelineEntry",
]
