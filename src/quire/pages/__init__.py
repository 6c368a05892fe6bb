"""Category page generation: binding payloads and publishing them."""

from quire.pages.binder import bind, bind_all

__all__ = ["bind", "bind_all"]
