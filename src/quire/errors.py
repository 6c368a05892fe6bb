"""Build-time error hierarchy.

Every failure raised while loading content or generating pages derives
from QuireError so the CLI can report it and exit non-zero.
"""

from __future__ import annotations

from pathlib import Path


class QuireError(Exception):
    """Base error for content loading and page generation."""


class ContentError(QuireError):
    """The content set cannot be loaded as a valid site."""


class ContentDirectoryError(ContentError):
    """The content directory does not exist or is not a directory."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Content directory not found: {path}")


class MalformedMetadataError(ContentError):
    """A document's front matter is missing a required field or has a bad value."""

    def __init__(self, path: Path | None, problems: list[str]) -> None:
        self.path = path
        self.problems = problems
        where = str(path) if path is not None else "<document>"
        super().__init__(f"Malformed front matter in {where}: " + "; ".join(problems))


class DuplicateSlugError(ContentError):
    """Two documents share the same slug."""

    def __init__(self, slug: str, first: Path | None, second: Path | None) -> None:
        self.slug = slug
        self.first = first
        self.second = second
        super().__init__(f"Duplicate slug {slug!r} in {first} and {second}")


class UnknownCategoryError(QuireError, ValueError):
    """A category key outside the supported set was requested."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Unknown category: {key!r}")


class PageBuildError(QuireError):
    """Binding or publishing one category page failed."""

    def __init__(self, category: str, cause: BaseException) -> None:
        self.category = category
        super().__init__(f"Failed to build page for category {category!r}: {cause}")


class ConfigError(QuireError):
    """A configuration value from TOML, the environment, or the CLI is invalid."""


class OutputWriteError(QuireError):
    """A build output file could not be written."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        super().__init__(f"Failed to write {path}: {cause}")
