from __future__ import annotations

"""Exception hierarchy for the tag label generator.

    TagLabelError (base)
    ├── ConfigError   (config/tags.yml missing, invalid yaml, schema violation)
    ├── NetworkError  (catalog fetch/decode failure)
    ├── CsvParseError (cutting list structurally unreadable)
    └── RenderError   (label rasterization or PDF assembly failure)

None of these are retried. NetworkError is absorbed by the catalog cache;
the others propagate to the CLI, which reports them and exits with 1.
"""

__all__ = [
    "TagLabelError",
    "ConfigError",
    "NetworkError",
    "CsvParseError",
    "RenderError",
]


class TagLabelError(Exception):
    """Base exception for all tag label errors."""
    pass


class ConfigError(TagLabelError):
    pass


class NetworkError(TagLabelError):
    """Raised when the catalog cannot be fetched or decoded."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class CsvParseError(TagLabelError):
    """Raised when the cutting list cannot be read at all."""


class RenderError(TagLabelError):
    """Raised when any label fails to rasterize or be placed on a page.

    row is the 1-based position of the failing label (-1 if unknown).
    """

    def __init__(self, message: str, row: int = -1) -> None:
        super().__init__(message)
        self.row = row
