"""Tests for category page binding."""

from datetime import date

import pytest
from quire.content.models import Category, CategoryPage, Post
from quire.content.store import ContentStore
from quire.errors import PageBuildError, UnknownCategoryError
from quire.pages.binder import bind, bind_all


def _make_post(
    slug: str,
    category: Category = Category.NEXT,
    published: date | None = date(2024, 1, 1),
    draft: bool = False,
) -> Post:
    return Post(title=slug.title(), slug=slug, category=category, published=published, draft=draft)


@pytest.fixture
def store() -> ContentStore:
    return ContentStore(
        [
            _make_post("a", published=date(2023, 9, 8)),
            _make_post("b", published=date(2023, 1, 1), draft=True),
            _make_post("c", published=date(2024, 1, 1)),
            _make_post("flexbox", category=Category.REACT, published=date(2022, 6, 1)),
        ]
    )


class TestBind:
    def test_sorted_non_draft_posts(self, store: ContentStore):
        page = bind(store, "next")
        assert isinstance(page, CategoryPage)
        assert page.category == "Next"
        assert page.title == "Next"
        assert [p.slug for p in page.posts] == ["c", "a"]

    def test_empty_category(self, store: ContentStore):
        page = bind(store, Category.CSS)
        assert page.to_props() == {"category": "CSS", "posts": [], "title": "CSS"}

    def test_pure(self, store: ContentStore):
        assert bind(store, "next") == bind(store, "next")
        assert len(store) == 4

    def test_unknown_category(self, store: ContentStore):
        with pytest.raises(UnknownCategoryError):
            bind(store, "cobol")


class TestBindAll:
    def test_every_category_by_default(self, store: ContentStore):
        pages = bind_all(store)
        assert list(pages) == list(Category)
        assert pages[Category.REACT].title == "React"
        assert [p.slug for p in pages[Category.REACT].posts] == ["flexbox"]
        assert pages[Category.SVELTEKIT].posts == ()

    def test_subset(self, store: ContentStore):
        pages = bind_all(store, ["css", Category.NEXT])
        assert list(pages) == [Category.CSS, Category.NEXT]

    def test_parallel_matches_sequential(self, store: ContentStore):
        assert bind_all(store, max_workers=4) == bind_all(store)

    def test_failure_surfaces_as_build_error(self, store: ContentStore, monkeypatch):
        def explode(posts):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(store, "get_sorted_posts", explode)
        with pytest.raises(PageBuildError, match="disk on fire") as exc_info:
            bind_all(store, [Category.NEXT])
        assert exc_info.value.category == "next"

    def test_parallel_failure_surfaces(self, store: ContentStore, monkeypatch):
        def explode(posts):
            raise RuntimeError("boom")

        monkeypatch.setattr(store, "get_sorted_posts", explode)
        with pytest.raises(PageBuildError):
            bind_all(store, max_workers=3)

    def test_unknown_category_in_list(self, store: ContentStore):
        with pytest.raises(UnknownCategoryError):
            bind_all(store, ["next", "cobol"])
