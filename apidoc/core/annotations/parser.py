from __future__ import annotations

import inspect
import re
from typing import Dict, Iterable, List, Optional, Tuple

from .models import AnnotationTag

_TAG_LINE = re.compile(r"^@(?P<name>[A-Za-z][\w-]*)\s*(?P<rest>.*)$")


def parse_into_content_and_attributes(
    content: str,
    allowed_attributes: Iterable[str],
) -> Tuple[str, Dict[str, Optional[str]]]:
    """
    Split a directive's text into its primary value and key=value attributes.

        'myapp.models.User states=admin,verified'
            -> ('myapp.models.User', {'states': 'admin,verified'})

    Values may be bare (no whitespace or quotes) or wrapped in single or
    double quotes. Every allowed attribute is present in the result, None
    when the directive does not set it.
    """
    attributes: Dict[str, Optional[str]] = {}
    remaining = content or ""

    for attribute in allowed_attributes:
        attributes[attribute] = None
        pattern = re.compile(re.escape(attribute) + r"""=([^\s'"]+|".+?"|'.+?')\s*""")
        m = pattern.search(remaining)
        if m is None:
            continue
        remaining = remaining.replace(m.group(0), "")
        attributes[attribute] = m.group(1).strip("\"' ")

    return remaining.strip(), attributes


def parse_doc_tags(docstring: Optional[str]) -> List[AnnotationTag]:
    """
    Collect @tags from a docstring, in order.

    A tag runs from its @name line up to the next @name line (or the end of
    the docstring). Text before the first tag is the description and is
    skipped.
    """
    if not docstring:
        return []

    tags: List[AnnotationTag] = []
    current_name: Optional[str] = None
    current_lines: List[str] = []

    def _flush() -> None:
        if current_name is not None:
            tags.append(AnnotationTag(name=current_name, content="\n".join(current_lines).strip()))

    for line in inspect.cleandoc(docstring).splitlines():
        m = _TAG_LINE.match(line.strip())
        if m:
            _flush()
            current_name = m.group("name")
            current_lines = [m.group("rest")]
        elif current_name is not None:
            current_lines.append(line.strip())

    _flush()
    return tags
