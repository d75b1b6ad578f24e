"""Process-wide container for CLI commands."""

from __future__ import annotations

from functools import lru_cache

from storefront.infrastructure.bootstrap import Container, build_container


@lru_cache
def container() -> Container:
    return build_container()
