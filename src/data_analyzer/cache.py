"""Local cache for resolved web font stylesheets."""

import dataclasses
import functools
import logging
import pathlib
import typing

import diskcache
import platformdirs

logger = logging.getLogger(__name__)

FONTS_NAMESPACE = "fonts"


class Cache(typing.Protocol):
    def get(self, k: str) -> str | None: ...

    def set(self, k: str, v: str, ttl: int | None) -> None: ...


class NullCache:
    """Never stores anything, so every font is fetched again."""

    def get(self, k: str) -> str | None:
        return None

    def set(self, k: str, v: str, ttl: int | None) -> None:
        pass


@dataclasses.dataclass(frozen=True)
class DiskcacheCache:
    namespace: str = FONTS_NAMESPACE
    size_limit_mb: int = 5

    @property
    def directory(self) -> pathlib.Path:
        cache_root = pathlib.Path(platformdirs.user_cache_dir("data-analyzer"))
        return cache_root / self.namespace

    @functools.cached_property
    def _cache(self) -> diskcache.Cache:
        self.directory.mkdir(parents=True, exist_ok=True)
        logger.info("Font cache at %s", self.directory)
        return diskcache.Cache(
            self.directory,
            size_limit=self.size_limit_mb * 1024 * 1024,
            eviction_policy="least-recently-used",
        )

    def get(self, k: str) -> str | None:
        value = self._cache.get(k)
        logger.info("Font cache %s: %s", "miss" if value is None else "hit", k)
        return value

    def set(self, k: str, v: str, ttl: int | None) -> None:
        # A zero TTL means the entry would be stale on arrival.
        if ttl == 0:
            return
        self._cache.set(k, v, expire=ttl)

    def size(self) -> int:
        """Return cache size in bytes."""
        return self._cache.volume()

    def prune(self) -> int:
        """Remove expired entries, returning how many were dropped."""
        return self._cache.expire()

    def clear(self) -> int:
        """Remove every entry, returning how many were dropped."""
        return self._cache.clear()
