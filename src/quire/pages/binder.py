"""Category page binding.

One generic page template serves every category: the binder pulls the
category's listable posts from the store, sorts them, and packages them
with the category label. Binding is pure, so pages can be bound in any
order or in parallel against the same store.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from quire.content.models import Category, CategoryPage, category_label, resolve_category
from quire.content.store import ContentStore
from quire.errors import PageBuildError

logger = logging.getLogger(__name__)


def bind(store: ContentStore, category: Category | str) -> CategoryPage:
    """Build the render payload for one category page."""
    key = resolve_category(category)
    label = category_label(key)
    posts = store.get_sorted_posts(store.get_posts_by_category(key))
    logger.debug("Bound %s: %d posts", key, len(posts))
    return CategoryPage(category=label, posts=tuple(posts), title=label)


def _bind_checked(store: ContentStore, category: Category) -> CategoryPage:
    try:
        return bind(store, category)
    except Exception as exc:
        raise PageBuildError(category.value, exc) from exc


def bind_all(
    store: ContentStore,
    categories: Iterable[Category | str] | None = None,
    *,
    max_workers: int | None = None,
) -> dict[Category, CategoryPage]:
    """Bind a page for every category.

    Args:
        store: Loaded content store.
        categories: Categories to bind. Defaults to every supported category.
        max_workers: Bind on a thread pool when greater than 1.

    Returns:
        Pages keyed by category, in the order the categories were given.

    Raises:
        PageBuildError: If any page fails to bind.
    """
    keys = [resolve_category(c) for c in (categories if categories is not None else Category)]

    if max_workers is not None and max_workers > 1 and len(keys) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            pages = list(pool.map(lambda c: _bind_checked(store, c), keys))
    else:
        pages = [_bind_checked(store, c) for c in keys]

    logger.info("Bound %d category pages", len(pages))
    return dict(zip(keys, pages, strict=True))
