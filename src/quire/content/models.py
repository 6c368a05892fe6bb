"""Content domain models: pure Pydantic v2 data types.

A Post is one markdown document plus the metadata parsed from its front
matter. Categories are a closed enumeration with a single label table;
nothing here performs I/O.
"""

from __future__ import annotations

import re
from datetime import date
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from quire.errors import UnknownCategoryError

SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class Category(StrEnum):
    """Supported content categories."""

    NEXT = "next"
    REACT = "react"
    SVELTEKIT = "sveltekit"
    CSS = "css"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"


# Display label for every category. Pages use it as both heading and title.
CATEGORY_LABELS: dict[Category, str] = {
    Category.NEXT: "Next",
    Category.REACT: "React",
    Category.SVELTEKIT: "SvelteKit",
    Category.CSS: "CSS",
    Category.JAVASCRIPT: "JavaScript",
    Category.TYPESCRIPT: "TypeScript",
}


def resolve_category(category: Category | str) -> Category:
    """Coerce a category key to its enum member.

    Raises UnknownCategoryError for keys outside the supported set.
    """
    if isinstance(category, Category):
        return category
    try:
        return Category(category)
    except ValueError:
        raise UnknownCategoryError(str(category)) from None


def category_label(category: Category | str) -> str:
    """Return the human-friendly label for a category key."""
    return CATEGORY_LABELS[resolve_category(category)]


class Post(BaseModel):
    """A single article parsed from a markdown file."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    slug: str
    category: Category
    published: date | None = None
    draft: bool = False
    description: str = ""
    tags: tuple[str, ...] = ()
    content: str = ""
    source_path: Path | None = None

    @field_validator("slug")
    @classmethod
    def _check_slug(cls, value: str) -> str:
        if not SLUG_RE.match(value):
            raise ValueError(f"slug must be lowercase kebab-case, got {value!r}")
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: object) -> object:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _coerce_description(cls, value: object) -> object:
        return "" if value is None else value

    @model_validator(mode="after")
    def _require_date_unless_draft(self) -> Post:
        if self.published is None and not self.draft:
            raise ValueError("published date is required for non-draft posts")
        return self

    @property
    def category_label(self) -> str:
        return CATEGORY_LABELS[self.category]


class CategoryPage(BaseModel):
    """Render payload for one category listing page."""

    model_config = ConfigDict(frozen=True)

    category: str
    posts: tuple[Post, ...] = ()
    title: str

    def to_props(self) -> dict[str, object]:
        """Return the JSON-ready payload handed to a page renderer.

        Post bodies and source paths stay out of listing props.
        """
        return {
            "category": self.category,
            "posts": [
                p.model_dump(mode="json", exclude={"content", "source_path"})
                for p in self.posts
            ],
            "title": self.title,
        }
