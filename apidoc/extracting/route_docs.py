from __future__ import annotations

import inspect
from typing import Any, List

from apidoc.core.annotations.models import AnnotationTag
from apidoc.core.annotations.parser import parse_doc_tags


def route_methods(route: Any) -> List[str]:
    return sorted(getattr(route, "methods", None) or [])


def route_uri(route: Any) -> str:
    return getattr(route, "path", None) or getattr(route, "uri", None) or ""


def get_route_tags(route: Any) -> List[AnnotationTag]:
    """Tags from the docstring of the route's endpoint function."""
    endpoint = getattr(route, "endpoint", None)
    if endpoint is None:
        return []
    return parse_doc_tags(inspect.getdoc(endpoint))
