"""Page publisher factory and registry."""

from __future__ import annotations

from enum import StrEnum

from quire.pages.publishers.base import PagePublisher


class OutputFormat(StrEnum):
    """Available build output formats."""

    JSON = "json"
    MARKDOWN = "markdown"


def create_publisher(output_format: OutputFormat | str) -> PagePublisher:
    """Create a publisher for the given output format.

    Raises:
        ValueError: If the format is unknown.
    """
    try:
        output_format = OutputFormat(output_format)
    except ValueError:
        raise ValueError(f"Unknown output format: {output_format!r}") from None

    from quire.pages.publishers.markdown import MarkdownPublisher
    from quire.pages.publishers.props import JsonPublisher

    publishers: dict[OutputFormat, type[PagePublisher]] = {
        OutputFormat.JSON: JsonPublisher,
        OutputFormat.MARKDOWN: MarkdownPublisher,
    }
    return publishers[output_format]()


__all__ = ["OutputFormat", "PagePublisher", "create_publisher"]
