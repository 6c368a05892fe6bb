"""Front matter parsing for markdown posts.

A document is a YAML header fenced by ``---`` lines followed by an opaque
markdown body. Anything that keeps the header from validating into a
Post raises MalformedMetadataError; documents are never silently dropped.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from quire.content.models import Post
from quire.errors import MalformedMetadataError

logger = logging.getLogger(__name__)

_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<header>.*?)^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


def split_frontmatter(text: str, source_path: Path | None = None) -> tuple[dict[str, Any], str]:
    """Split a document into its parsed header and its body.

    Raises:
        MalformedMetadataError: If the header is absent, unterminated,
            not valid YAML, or not a mapping.
    """
    text = text.removeprefix("\ufeff")
    match = _FRONTMATTER_RE.match(text)
    if match is None:
        raise MalformedMetadataError(source_path, ["missing or unterminated front matter block"])

    try:
        header = yaml.safe_load(match.group("header"))
    except yaml.YAMLError as exc:
        raise MalformedMetadataError(source_path, [f"invalid YAML: {exc}"]) from exc
    except ValueError as exc:
        # Timestamps such as 2024-02-30 match the YAML pattern but not the calendar.
        raise MalformedMetadataError(source_path, [f"invalid value: {exc}"]) from exc

    if header is None:
        header = {}
    if not isinstance(header, dict):
        raise MalformedMetadataError(
            source_path, [f"front matter must be a mapping, got {type(header).__name__}"]
        )

    body = text[match.end():].lstrip("\r\n")
    return header, body


def _format_errors(exc: ValidationError) -> list[str]:
    problems: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        problems.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return problems


def parse_post(text: str, source_path: Path | None = None) -> Post:
    """Parse a markdown document into a validated Post.

    When the header has no ``slug`` the file stem is used.
    """
    header, body = split_frontmatter(text, source_path)

    fields = dict(header)
    if "slug" not in fields and source_path is not None:
        fields["slug"] = source_path.stem
    # YAML timestamps arrive as datetime; listings only care about the day.
    if isinstance(fields.get("published"), datetime):
        fields["published"] = fields["published"].date()

    try:
        return Post.model_validate({**fields, "content": body, "source_path": source_path})
    except ValidationError as exc:
        raise MalformedMetadataError(source_path, _format_errors(exc)) from exc


def load_post(path: Path) -> Post:
    """Read and parse a single markdown file."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedMetadataError(path, [f"unreadable: {exc}"]) from exc
    post = parse_post(text, path)
    logger.debug("Parsed %s -> %s (%s)", path, post.slug, post.category)
    return post
