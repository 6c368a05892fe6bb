"""Plain markdown publisher for repositories and simple static hosts."""

from __future__ import annotations

from pathlib import Path

from quire.content.models import Category, CategoryPage
from quire.pages.publishers.base import PagePublisher


def _link_text(text: str) -> str:
    """Escape characters that would end markdown link text early."""
    return text.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")


class MarkdownPublisher(PagePublisher):
    """Formats category listings as markdown with minimal frontmatter."""

    def format_page(self, page: CategoryPage) -> str:
        lines: list[str] = ["---"]
        lines.append(f'title: "{page.title}"')
        lines.append(f'category: "{page.category}"')
        lines.append(f"count: {len(page.posts)}")
        lines.append("---")
        lines.append("")
        lines.append(f"# {page.title}")
        lines.append("")

        if not page.posts:
            lines.append("_No posts yet._")
            lines.append("")
            return "\n".join(lines)

        for post in page.posts:
            date_str = post.published.isoformat() if post.published else "draft"
            line = f"- [{_link_text(post.title)}](/posts/{post.slug}) ({date_str})"
            if post.description:
                line += f" - {post.description}"
            lines.append(line)
        lines.append("")
        return "\n".join(lines)

    def page_path(self, output_dir: Path, category: Category) -> Path:
        return output_dir / "markdown" / f"{category.value}.md"

    def format_index(self, pages: dict[Category, CategoryPage]) -> str:
        lines: list[str] = ["# Categories", ""]
        for category, page in pages.items():
            lines.append(f"- [{_link_text(page.title)}]({category.value}.md) ({len(page.posts)} posts)")
        lines.append("")
        return "\n".join(lines)

    def index_path(self, output_dir: Path) -> Path:
        return output_dir / "markdown" / "README.md"
