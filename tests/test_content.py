"""Tests for the content document schema."""

from __future__ import annotations

import copy
from typing import Any

import pytest
from pydantic import ValidationError

from portfolio_site.models.content import (
    ContentDocument,
    LocalizedText,
    PublicationEntry,
    TimelineEntry,
)


class TestLocalizedText:
    """Tests for LocalizedText."""

    def test_get_selects_locale(self) -> None:
        text = LocalizedText(en="Hello", it="Ciao")
        assert text.get("en") == "Hello"
        assert text.get("it") == "Ciao"

    def test_missing_locale_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LocalizedText.model_validate({"en": "Hello"})

    def test_unsupported_locale_raises(self) -> None:
        text = LocalizedText(en="Hello", it="Ciao")
        with pytest.raises(ValueError, match="Unsupported locale"):
            text.get("fr")  # type: ignore[arg-type]


class TestContentDocument:
    """Tests for ContentDocument parsing and accessors."""

    def test_camel_case_keys_are_parsed(self, sample_document: ContentDocument) -> None:
        social = sample_document.profile.socials[0]
        assert social.icon_name == "Github"
        assert sample_document.projects[0].github_url == "https://github.com/janedoe/p1"

    def test_preserves_source_order(self, sample_document: ContentDocument) -> None:
        assert [e.id for e in sample_document.history] == ["h1", "h2", "h3", "h4", "h5"]
        assert [p.id for p in sample_document.publications] == [
            "pub1",
            "pub2",
            "pub3",
            "pub4",
            "pub5",
        ]

    def test_document_is_frozen(self, sample_document: ContentDocument) -> None:
        with pytest.raises(ValidationError):
            sample_document.profile.name = "Someone else"  # type: ignore[misc]
        assert isinstance(sample_document.history, tuple)

    def test_missing_locale_in_nested_field_fails(self, sample_payload: dict[str, Any]) -> None:
        payload = copy.deepcopy(sample_payload)
        del payload["history"][2]["title"]["it"]
        with pytest.raises(ValidationError):
            ContentDocument.model_validate(payload)

    def test_unknown_project_category_fails(self, sample_payload: dict[str, Any]) -> None:
        payload = copy.deepcopy(sample_payload)
        payload["projects"][0]["category"] = "games"
        with pytest.raises(ValidationError):
            ContentDocument.model_validate(payload)

    def test_ui_text_falls_back_to_key(self, sample_document: ContentDocument) -> None:
        assert sample_document.ui_text("papers", "it") == "Pubblicazioni"
        assert sample_document.ui_text("missingKey", "en") == "missingKey"


class TestTimelineEntry:
    """Tests for timeline entry helpers."""

    def _entry(self, **extra: Any) -> TimelineEntry:
        data = {
            "id": "x",
            "year": "2020",
            "title": {"en": "T", "it": "T"},
            "description": {"en": "D", "it": "D"},
            "institution": "Inst",
            "type": "award",
            **extra,
        }
        return TimelineEntry.model_validate(data)

    def test_type_maps_to_kind(self) -> None:
        assert self._entry().kind == "award"

    def test_logo_refs_prefers_list(self) -> None:
        entry = self._entry(logo="a.png", logos=["b.png", "c.png"])
        assert entry.logo_refs == ("b.png", "c.png")

    def test_logo_refs_single_and_empty(self) -> None:
        assert self._entry(logo="a.png").logo_refs == ("a.png",)
        assert self._entry().logo_refs == ()


class TestPublicationEntry:
    """Tests for publication helpers."""

    def _pub(self, **extra: Any) -> PublicationEntry:
        data = {"id": "p", "title": "T", "authors": ["A"], "venue": "V", "year": 2020, **extra}
        return PublicationEntry.model_validate(data)

    def test_doi_url(self) -> None:
        assert self._pub(doi="10.1/abc").doi_url == "https://doi.org/10.1/abc"
        assert self._pub().doi_url is None

    def test_short_authors_truncates(self) -> None:
        pub = self._pub(authors=["A", "B", "C", "D"])
        assert pub.short_authors() == "A, B, C, et al."

    def test_short_authors_keeps_short_list(self) -> None:
        assert self._pub(authors=["A", "B"]).short_authors() == "A, B"
