"""Service layer: content loading and CV export."""

from portfolio_site.services.content_store import (
    ContentStore,
    get_content_path,
    load_content,
    parse_content,
)
from portfolio_site.services.cv_export import cv_filename, export_cv, generate_cv, layout_cv

__all__ = [
    "ContentStore",
    "cv_filename",
    "export_cv",
    "generate_cv",
    "get_content_path",
    "layout_cv",
    "load_content",
    "parse_content",
]
