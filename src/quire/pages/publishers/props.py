"""JSON props publisher: one payload file per category for a page renderer."""

from __future__ import annotations

import json
from pathlib import Path

from quire.content.models import Category, CategoryPage
from quire.pages.publishers.base import PagePublisher


class JsonPublisher(PagePublisher):
    """Writes ``{category, posts, title}`` props as JSON."""

    def format_page(self, page: CategoryPage) -> str:
        return json.dumps({"props": page.to_props()}, indent=2, ensure_ascii=False) + "\n"

    def page_path(self, output_dir: Path, category: Category) -> Path:
        return output_dir / "pages" / f"{category.value}.json"

    def format_index(self, pages: dict[Category, CategoryPage]) -> str:
        entries = [
            {
                "key": category.value,
                "title": page.title,
                "count": len(page.posts),
                "path": f"pages/{category.value}.json",
            }
            for category, page in pages.items()
        ]
        return json.dumps({"categories": entries}, indent=2, ensure_ascii=False) + "\n"

    def index_path(self, output_dir: Path) -> Path:
        return output_dir / "index.json"
