"""
Infrastructure adapter for bundler stats stored on disk.

Implements AssetManifestPort by reading the stats JSON written by the
client build. The file is read off the event loop.
"""

import asyncio
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ssr_server.domain.http.ports import AssetManifestPort

logger = logging.getLogger(__name__)


class FileAssetManifestFetcher(AssetManifestPort):
    """Reads bundler stats from a JSON file on every fetch.

    The client build may be rewritten while the server is running
    (watch mode), so nothing is cached.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    def _read(self) -> Mapping[str, Any]:
        with self._path.open(encoding="utf-8") as fh:
            return json.load(fh)

    async def fetch(self) -> Mapping[str, Any]:
        logger.debug("Reading asset manifest from %s", self._path)
        return await asyncio.to_thread(self._read)


class StaticAssetManifest(AssetManifestPort):
    """Serves an in-memory manifest, e.g. one embedded at build time."""

    def __init__(self, manifest: Mapping[str, Any]) -> None:
        self._manifest = manifest

    async def fetch(self) -> Mapping[str, Any]:
        return self._manifest
