"""Site build pipeline: content directory → category pages → output files."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field

from quire.config import QuireConfig
from quire.content import Category, CategoryPage, ContentStore
from quire.errors import OutputWriteError, PageBuildError
from quire.pages import bind_all
from quire.pages.publishers import create_publisher
from quire.shared.files import atomic_write

logger = logging.getLogger(__name__)


class BuildResult(BaseModel):
    """Summary of a finished build."""

    written: list[Path] = Field(default_factory=list)
    page_count: int = 0
    post_count: int = 0
    dry_run: bool = False


def check_content(config: QuireConfig) -> ContentStore:
    """Load and validate the content set without building pages."""
    return ContentStore.from_directory(
        config.content_dir, include_drafts=config.content.include_drafts
    )


def _render_outputs(
    config: QuireConfig, pages: dict[Category, CategoryPage]
) -> dict[Path, str]:
    """Render every output file in memory, keyed by destination path."""
    outputs: dict[Path, str] = {}
    output_dir = config.output_dir

    for output_format in config.output.formats:
        publisher = create_publisher(output_format)
        for category, page in pages.items():
            try:
                outputs[publisher.page_path(output_dir, category)] = publisher.format_page(page)
            except Exception as exc:
                raise PageBuildError(category.value, exc) from exc
        outputs[publisher.index_path(output_dir)] = publisher.format_index(pages)

    return outputs


def build_site(config: QuireConfig) -> BuildResult:
    """Generate every category page from the configured content directory.

    All pages are bound and rendered before anything is written, so a
    content or binding failure leaves the output directory untouched.
    Each file is replaced atomically; a write failure stops the build
    with OutputWriteError.

    Args:
        config: Build configuration.

    Returns:
        BuildResult listing the written files (or the files that would be
        written, for a dry run).

    Raises:
        OutputWriteError: If an output file cannot be written.
    """
    store = check_content(config)
    pages = bind_all(store, max_workers=config.build.workers)
    outputs = _render_outputs(config, pages)

    result = BuildResult(
        written=list(outputs),
        page_count=len(pages),
        post_count=sum(len(p.posts) for p in pages.values()),
        dry_run=config.build.dry_run,
    )

    if config.build.dry_run:
        logger.info("Dry run: %d files would be written", len(outputs))
        return result

    for path, content in outputs.items():
        try:
            atomic_write(path, content)
        except OSError as exc:
            raise OutputWriteError(path, exc) from exc
        logger.debug("Wrote %s", path)

    logger.info(
        "Built %d pages (%d posts) into %s", result.page_count, result.post_count, config.output_dir
    )
    return result
