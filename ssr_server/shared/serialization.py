"""
Serialization helpers for values embedded into server-rendered HTML.
"""

import json
from typing import Any
from urllib.parse import parse_qsl, urlsplit

_SCRIPT_UNSAFE = {
    "<": "\\u003C",
    ">": "\\u003E",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def safe_json_dumps(value: Any) -> str:
    """Serialize `value` to JSON that can be inlined into a <script> tag.

    Characters that could close the script element or break a JS string
    literal are replaced with unicode escapes.
    """
    raw = json.dumps(value, ensure_ascii=False, default=str)
    return "".join(_SCRIPT_UNSAFE.get(char, char) for char in raw)


def parse_url(url: str) -> dict[str, Any]:
    """Split a URL into the components exposed to the error page.

    Args:
        url: Absolute or path-only URL of the request.

    Returns:
        A dict with href, protocol, host, hostname, port, path,
        pathname, search, query and hash.
    """
    parts = urlsplit(url)
    pathname = parts.path or "/"
    search = f"?{parts.query}" if parts.query else ""
    return {
        "href": url,
        "protocol": f"{parts.scheme}:" if parts.scheme else "",
        "host": parts.netloc,
        "hostname": parts.hostname or "",
        "port": str(parts.port) if parts.port else "",
        "path": pathname + search,
        "pathname": pathname,
        "search": search,
        "query": dict(parse_qsl(parts.query, keep_blank_values=True)),
        "hash": f"#{parts.fragment}" if parts.fragment else "",
    }
