"""Base class for category page publishers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from quire.content.models import Category, CategoryPage


class PagePublisher(ABC):
    """Turns bound category pages into build output files."""

    @abstractmethod
    def format_page(self, page: CategoryPage) -> str:
        """Render one category page payload."""

    @abstractmethod
    def page_path(self, output_dir: Path, category: Category) -> Path:
        """Compute the output file path for a category page."""

    @abstractmethod
    def format_index(self, pages: dict[Category, CategoryPage]) -> str:
        """Generate an index listing every category page."""

    @abstractmethod
    def index_path(self, output_dir: Path) -> Path:
        """Compute the output file path for the index."""
