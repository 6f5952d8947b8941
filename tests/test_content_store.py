"""Tests for the content store service."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from portfolio_site.models.content import ContentLoadError
from portfolio_site.services.content_store import (
    ContentStore,
    get_content_path,
    load_content,
    parse_content,
)


class TestGetContentPath:
    """Tests for get_content_path."""

    def test_default_points_at_bundled_document(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PORTFOLIO_CONTENT_PATH", raising=False)
        path = get_content_path()
        assert path.name == "data.json"
        assert path.parent.name == "content"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        target = tmp_path / "other.json"
        monkeypatch.setenv("PORTFOLIO_CONTENT_PATH", str(target))
        assert get_content_path() == target.resolve()


class TestParseContent:
    """Tests for parse_content and load_content."""

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(ContentLoadError, match="not valid JSON"):
            parse_content("{not json")

    def test_schema_mismatch_raises(self) -> None:
        with pytest.raises(ContentLoadError, match="schema"):
            parse_content('{"profile": {"name": "x"}}')

    def test_load_from_file(self, content_file: Path) -> None:
        document = load_content(content_file)
        assert document.profile.name == "Jane Doe"
        assert len(document.history) == 5

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ContentLoadError, match="Cannot read"):
            load_content(tmp_path / "nope.json")

    def test_bundled_document_is_valid(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PORTFOLIO_CONTENT_PATH", raising=False)
        document = load_content()
        assert document.history
        assert document.projects
        assert document.publications


class TestContentStore:
    """Tests for the one-shot ContentStore."""

    def test_load_success(self, content_file: Path) -> None:
        store = ContentStore(content_file)
        assert not store.is_loaded
        document = store.load()
        assert store.is_loaded
        assert document is store.document
        assert store.error is None

    def test_loads_only_once(self, content_file: Path) -> None:
        store = ContentStore(content_file)
        first = store.load()
        content_file.write_text("garbage", encoding="utf-8")
        assert store.load() is first

    def test_failure_is_logged_and_stalls(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        bad = tmp_path / "data.json"
        bad.write_text("[]", encoding="utf-8")
        store = ContentStore(bad)

        with caplog.at_level(logging.ERROR, logger="portfolio_site.services.content_store"):
            assert store.load() is None

        assert not store.is_loaded
        assert isinstance(store.error, ContentLoadError)
        assert "Failed to load content" in caplog.text

    def test_no_retry_after_failure(self, tmp_path: Path, content_file: Path) -> None:
        missing = tmp_path / "missing.json"
        store = ContentStore(missing)
        assert store.load() is None
        missing.write_text(content_file.read_text(encoding="utf-8"), encoding="utf-8")
        assert store.load() is None
        assert not store.is_loaded
