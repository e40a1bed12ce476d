"""Disk cache for per-file lint results."""

import hashlib
import json
import logging
import os
import shutil
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def cache_key(*parts: str) -> str:
    """Hash the parts that determine a lint result into a cache key."""
    digest = hashlib.sha256()
    for part in parts:
        digest.update(part.encode("utf-8"))
        digest.update(b"\0")
    return digest.hexdigest()


class ResultCache:
    """Simple disk cache keyed by content hash.

    Structure: {cache_dir}/{key[:2]}/{key[2:4]}/{key}.json
    """

    def __init__(self, cache_dir: Path):
        self.cache_dir = cache_dir
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            # Best-effort fallback (helps in sandboxed environments).
            fallback = Path(os.getenv("GUIDELINT_CACHE_DIR_FALLBACK", "/tmp/guidelint-cache"))
            logger.debug("Cache dir %s unavailable, using %s", cache_dir, fallback)
            self.cache_dir = fallback
            self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _key_path(self, key: str) -> Path:
        return self.cache_dir / key[:2] / key[2:4] / f"{key}.json"

    def get(self, key: str) -> dict[str, Any] | None:
        """Get a cached payload.

        Returns:
            Decoded payload, or None if missing or unreadable
        """
        path = self._key_path(key)
        if not path.exists():
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.debug("Ignoring unreadable cache entry %s", path)
            return None
        return payload if isinstance(payload, dict) else None

    def put(self, key: str, payload: dict[str, Any]) -> None:
        """Store a payload; failures leave the cache unchanged."""
        path = self._key_path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload, sort_keys=True), encoding="utf-8")
        except OSError:
            logger.debug("Could not write cache entry %s", path)
            return

    def exists(self, key: str) -> bool:
        """Check if a key is in cache."""
        return self._key_path(key).exists()

    def stats(self) -> tuple[int, int]:
        """Return (file count, total bytes)."""
        count = 0
        size = 0
        for f in self.cache_dir.rglob("*.json"):
            if f.is_file():
                count += 1
                size += f.stat().st_size
        return count, size

    def clear(self) -> None:
        """Remove every cached entry."""
        if self.cache_dir.exists():
            shutil.rmtree(self.cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
