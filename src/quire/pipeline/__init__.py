"""Pipeline modules: orchestration layer for a site build.

  build: content directory -> category pages -> output files

Pipeline modules import domain logic via public APIs:
  - ``from quire.content import ...``
  - ``from quire.pages import ...``
  - ``from quire.pages.publishers import ...``
"""

from quire.pipeline.build import BuildResult, build_site, check_content

__all__ = ["BuildResult", "build_site", "check_content"]
