"""Read-only content store backed by a directory of markdown files.

Posts are loaded and validated once, at construction. The store exposes
queries only; there is no way to add, replace, or remove a post after
the store exists, so concurrent readers need no locking.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Iterator
from pathlib import Path

from quire.content.frontmatter import load_post
from quire.content.models import Category, Post, resolve_category
from quire.errors import ContentDirectoryError, DuplicateSlugError

logger = logging.getLogger(__name__)

CONTENT_GLOB = "*.md"


def get_sorted_posts(posts: Iterable[Post]) -> list[Post]:
    """Order posts most recent first.

    Equal dates fall back to ascending slug, and undated posts (drafts)
    go last, so the result is fully determined by the input set and
    sorting twice changes nothing.
    """
    by_slug = sorted(posts, key=lambda p: p.slug)
    dated = [p for p in by_slug if p.published is not None]
    undated = [p for p in by_slug if p.published is None]
    dated.sort(key=lambda p: p.published, reverse=True)
    return dated + undated


class ContentStore:
    """Immutable in-memory set of posts.

    Args:
        posts: Every post in the content set.
        include_drafts: Keep drafts in category listings (preview builds).

    Raises:
        DuplicateSlugError: If two posts share a slug.
    """

    def __init__(self, posts: Iterable[Post], *, include_drafts: bool = False) -> None:
        self._include_drafts = include_drafts
        by_slug: dict[str, Post] = {}
        for post in posts:
            existing = by_slug.get(post.slug)
            if existing is not None:
                raise DuplicateSlugError(post.slug, existing.source_path, post.source_path)
            by_slug[post.slug] = post
        self._by_slug = by_slug
        self._posts = tuple(by_slug.values())

    @classmethod
    def from_directory(cls, content_dir: Path, *, include_drafts: bool = False) -> ContentStore:
        """Load every markdown file under ``content_dir``.

        Files are read in sorted path order. The first malformed document
        aborts the load.
        """
        if not content_dir.is_dir():
            raise ContentDirectoryError(content_dir)

        paths = sorted(content_dir.rglob(CONTENT_GLOB))
        store = cls((load_post(path) for path in paths), include_drafts=include_drafts)
        logger.info(
            "Loaded %d posts from %s (%d drafts)",
            len(store),
            content_dir,
            sum(1 for p in store if p.draft),
        )
        return store

    # ── Read operations ──────────────────────────────────────────

    @property
    def posts(self) -> tuple[Post, ...]:
        return self._posts

    @property
    def include_drafts(self) -> bool:
        return self._include_drafts

    def get(self, slug: str) -> Post | None:
        """Return a post by slug, or None if not found."""
        return self._by_slug.get(slug)

    def get_posts_by_category(self, category: Category | str) -> list[Post]:
        """Return the listable posts in one category, in no particular order.

        Drafts are excluded unless the store was built with
        ``include_drafts``. An empty list is a normal result.
        """
        wanted = resolve_category(category)
        return [
            p
            for p in self._posts
            if p.category == wanted and (self._include_drafts or not p.draft)
        ]

    def get_sorted_posts(self, posts: Iterable[Post]) -> list[Post]:
        """Order posts most recent first; see :func:`get_sorted_posts`."""
        return get_sorted_posts(posts)

    def category_counts(self) -> dict[Category, int]:
        """Number of listable posts per category, zero included."""
        counts = Counter(
            p.category for p in self._posts if self._include_drafts or not p.draft
        )
        return {c: counts.get(c, 0) for c in Category}

    def __len__(self) -> int:
        return len(self._posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(self._posts)

    def __contains__(self, slug: object) -> bool:
        return slug in self._by_slug
