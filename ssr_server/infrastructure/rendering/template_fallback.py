"""
Jinja2-backed root error boundary.

Implements FallbackComponent by rendering a Jinja2 template with
`error` (the serialized error) and `url` (the parsed request URL).
The template must produce a full document with a </head> tag so
that assets can be injected.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

from ssr_server.domain.http.entities import SerializedError
from ssr_server.domain.http.ports import FallbackComponent


class Jinja2TemplateFallback(FallbackComponent):
    """Error boundary rendered from a Jinja2 template."""

    def __init__(self, template: Template) -> None:
        self._template = template

    @classmethod
    def from_path(cls, path: Path) -> "Jinja2TemplateFallback":
        """Load the template file at `path`."""
        path = Path(path)
        env = Environment(
            loader=FileSystemLoader(str(path.parent)),
            autoescape=select_autoescape(["html", "htm", "jinja", "j2"]),
            enable_async=True,
        )
        return cls(env.get_template(path.name))

    @classmethod
    def from_string(cls, source: str) -> "Jinja2TemplateFallback":
        env = Environment(autoescape=True, enable_async=True)
        return cls(env.from_string(source))

    async def render(self, *, error: SerializedError, url: Mapping[str, Any]) -> str:
        return await self._template.render_async(error=error.to_dict(), url=url)
