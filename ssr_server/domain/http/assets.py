"""
Asset tags for a bundler entrypoint.

Turns bundler stats into the <link> and <script> tags needed to
hydrate a server-rendered page. Pure, no IO.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from html import escape
from typing import Any

from ssr_server.domain.http.errors import AssetManifestError


def _asset_name(asset: Any) -> str:
    # webpack 5 stats list assets as {"name": ...}, older ones as plain strings
    if isinstance(asset, Mapping):
        return str(asset["name"])
    return str(asset)


@dataclass(frozen=True)
class AssetBundle:
    """Style and script files of one entrypoint."""

    entrypoint: str
    public_path: str
    styles: tuple[str, ...]
    scripts: tuple[str, ...]

    @classmethod
    def from_manifest(
        cls,
        manifest: Mapping[str, Any],
        entrypoint: str,
        default_public_path: str = "/",
    ) -> "AssetBundle":
        """Extract the assets of `entrypoint` from bundler stats.

        Raises:
            AssetManifestError: If the entrypoint or its asset list is missing.
        """
        entrypoints = manifest.get("entrypoints")
        if not isinstance(entrypoints, Mapping):
            raise AssetManifestError(entrypoint, "manifest has no entrypoints")
        chunk = entrypoints.get(entrypoint)
        if not isinstance(chunk, Mapping) or "assets" not in chunk:
            raise AssetManifestError(entrypoint, "entrypoint is not in the manifest")

        names = [_asset_name(asset) for asset in chunk["assets"]]
        public_path = manifest.get("publicPath") or default_public_path
        if public_path == "auto":
            public_path = default_public_path

        return cls(
            entrypoint=entrypoint,
            public_path=public_path,
            styles=tuple(name for name in names if name.endswith(".css")),
            scripts=tuple(name for name in names if name.endswith(".js")),
        )

    def _url(self, name: str) -> str:
        return escape(f"{self.public_path.rstrip('/')}/{name.lstrip('/')}")

    def style_tags(self) -> str:
        return "\n".join(
            f'<link data-chunk="{escape(self.entrypoint)}" rel="stylesheet" href="{self._url(name)}">'
            for name in self.styles
        )

    def script_tags(self) -> str:
        return "\n".join(
            f'<script async data-chunk="{escape(self.entrypoint)}" src="{self._url(name)}"></script>'
            for name in self.scripts
        )
