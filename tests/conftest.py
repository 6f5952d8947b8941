from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from portfolio_site.models.content import ContentDocument


def _loc(en: str, it: str) -> dict[str, str]:
    return {"en": en, "it": it}


def build_payload(
    *,
    history_count: int = 5,
    project_count: int = 2,
    publication_count: int = 5,
    description_en: str = "Description",
) -> dict[str, Any]:
    """Raw camelCase content payload, as stored in data.json."""
    return {
        "profile": {
            "name": "Jane Doe",
            "role": _loc("Vision Engineer", "Ingegnera della Visione"),
            "tagline": _loc("Seeing motion.", "Vedere il movimento."),
            "about": _loc("About me in English.", "Chi sono in italiano."),
            "email": "jane@example.com",
            "location": "Turin",
            "socials": [
                {
                    "network": "GitHub",
                    "username": "janedoe",
                    "url": "https://github.com/janedoe",
                    "iconName": "Github",
                }
            ],
        },
        "history": [
            {
                "id": f"h{i}",
                "year": str(2020 + i),
                "title": _loc(f"Title EN {i}", f"Titolo IT {i}"),
                "institution": f"Institution {i}",
                "description": _loc(f"{description_en} EN {i}", f"Descrizione IT {i}"),
                "type": "work",
            }
            for i in range(1, history_count + 1)
        ],
        "projects": [
            {
                "id": f"p{i}",
                "title": _loc(f"Project EN {i}", f"Progetto IT {i}"),
                "description": _loc(f"Project description EN {i}", f"Descrizione progetto IT {i}"),
                "technologies": ["Python", "OpenCV"],
                "category": "vision" if i % 2 else "web",
                "githubUrl": f"https://github.com/janedoe/p{i}",
            }
            for i in range(1, project_count + 1)
        ],
        "publications": [
            {
                "id": f"pub{i}",
                "title": f"Paper {i}",
                "authors": ["J. Doe", "A. Smith"],
                "venue": f"Venue {i}",
                "year": 2018 + i,
                "tags": ["vision"],
            }
            for i in range(1, publication_count + 1)
        ],
        "ui": {
            "history": _loc("Journey", "Percorso"),
            "projects": _loc("Projects", "Progetti"),
            "papers": _loc("Publications", "Pubblicazioni"),
            "all": _loc("All", "Tutti"),
            "viewProject": _loc("View project", "Vedi progetto"),
            "downloadCvShort": _loc("Download CV", "Scarica CV"),
            "downloadCvLong": _loc("Extended CV", "CV esteso"),
            "connect": _loc("Let's Connect", "Contattami"),
        },
    }


@pytest.fixture
def sample_payload() -> dict[str, Any]:
    return build_payload()


@pytest.fixture
def sample_document(sample_payload: dict[str, Any]) -> ContentDocument:
    """Five timeline entries, two projects, five publications."""
    return ContentDocument.model_validate(copy.deepcopy(sample_payload))


@pytest.fixture
def long_document() -> ContentDocument:
    """Enough content for the long CV to spill over several pages."""
    payload = build_payload(
        history_count=30,
        project_count=12,
        publication_count=20,
        description_en="A long description that wraps across the column " * 4,
    )
    return ContentDocument.model_validate(payload)


@pytest.fixture
def content_file(tmp_path: Path, sample_payload: dict[str, Any]) -> Path:
    path = tmp_path / "data.json"
    path.write_text(json.dumps(sample_payload), encoding="utf-8")
    return path
