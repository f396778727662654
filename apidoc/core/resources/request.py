from __future__ import annotations

from typing import Any, Dict, Optional

from starlette.requests import Request


def default_request(
    *,
    method: str = "GET",
    path: str = "/",
    headers: Optional[Dict[str, str]] = None,
) -> Request:
    """A bare request for rendering resources outside of a real HTTP exchange."""
    raw_headers = [(b"accept", b"application/json")]
    raw_headers += [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()]
    scope: Dict[str, Any] = {
        "type": "http",
        "http_version": "1.1",
        "method": method.upper(),
        "scheme": "http",
        "server": ("localhost", 80),
        "client": None,
        "root_path": "",
        "path": path,
        "raw_path": path.encode("utf-8"),
        "query_string": b"",
        "headers": raw_headers,
    }
    return Request(scope)
