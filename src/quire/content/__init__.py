"""Content domain: posts, categories and the read-only content store.

Markdown documents with YAML front matter are parsed into immutable Post
models and held by a ContentStore that answers category queries.
"""

from quire.content.frontmatter import load_post, parse_post, split_frontmatter
from quire.content.models import (
    CATEGORY_LABELS,
    Category,
    CategoryPage,
    Post,
    category_label,
    resolve_category,
)
from quire.content.store import ContentStore, get_sorted_posts

__all__ = [
    "CATEGORY_LABELS",
    "Category",
    "CategoryPage",
    "ContentStore",
    "Post",
    "category_label",
    "get_sorted_posts",
    "load_post",
    "parse_post",
    "resolve_category",
    "split_frontmatter",
]
