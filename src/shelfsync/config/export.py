"""Export layout and file locations."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigurationError

DEFAULT_CATEGORIES: tuple[str, ...] = (
    "Party",
    "Cooperative",
    "Family",
    "Strategy",
    "Two-player",
    "Kids",
)
DEFAULT_FALLBACK_CATEGORY = "Other"
DEFAULT_EXPORT_PATH = Path("export/catalog.html")
DEFAULT_HEADER_PATH = Path("templates/header.html")
DEFAULT_FOOTER_PATH = Path("templates/footer.html")


@dataclass(frozen=True, slots=True)
class ExportConfig:
    """Ordered category buckets plus the files the export reads and writes."""

    categories: tuple[str, ...] = DEFAULT_CATEGORIES
    default_category: str = DEFAULT_FALLBACK_CATEGORY
    output_path: Path = DEFAULT_EXPORT_PATH
    header_path: Path | None = field(default=DEFAULT_HEADER_PATH)
    footer_path: Path | None = field(default=DEFAULT_FOOTER_PATH)


def _parse_categories(value: str) -> tuple[str, ...]:
    categories: list[str] = []
    for raw in value.split(","):
        name = raw.strip()
        if name and name not in categories:
            categories.append(name)
    if not categories:
        raise ConfigurationError("SHELFSYNC_CATEGORIES must name at least one category")
    return tuple(categories)


def get_export_config() -> ExportConfig:
    env_categories = os.getenv("SHELFSYNC_CATEGORIES")
    env_default = os.getenv("SHELFSYNC_DEFAULT_CATEGORY")
    env_output = os.getenv("SHELFSYNC_EXPORT_PATH")
    env_header = os.getenv("SHELFSYNC_HEADER_PATH")
    env_footer = os.getenv("SHELFSYNC_FOOTER_PATH")

    categories = _parse_categories(env_categories) if env_categories else DEFAULT_CATEGORIES
    default_category = (env_default or DEFAULT_FALLBACK_CATEGORY).strip()
    if default_category in categories:
        raise ConfigurationError(
            f"Default category {default_category!r} must not be one of the known categories"
        )
    return ExportConfig(
        categories=categories,
        default_category=default_category,
        output_path=Path(env_output) if env_output else DEFAULT_EXPORT_PATH,
        header_path=Path(env_header) if env_header else DEFAULT_HEADER_PATH,
        footer_path=Path(env_footer) if env_footer else DEFAULT_FOOTER_PATH,
    )
