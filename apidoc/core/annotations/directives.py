from __future__ import annotations

import re
from typing import Optional, Sequence, Tuple

from apidoc.core.errors import MissingModelDirective

from .models import AnnotationTag, DirectiveKind, ModelDirective, ResourceDirective
from .parser import parse_into_content_and_attributes

RESOURCE_TAGS = {k.value: k for k in DirectiveKind}
MODEL_TAG = "apiresourcemodel"

_STATUS_AND_CLASS = re.compile(r"^(\d{3})?\s?([\s\S]*)$")


def extract_resource_directive(tags: Sequence[AnnotationTag]) -> Optional[AnnotationTag]:
    # first one wins; later duplicates are ignored on purpose
    for tag in tags:
        if isinstance(tag, AnnotationTag) and tag.key in RESOURCE_TAGS:
            return tag
    return None


def extract_model_directive(tags: Sequence[AnnotationTag]) -> Optional[AnnotationTag]:
    for tag in tags:
        if isinstance(tag, AnnotationTag) and tag.key == MODEL_TAG:
            return tag
    return None


def decode_resource_directive(raw: str) -> Tuple[Optional[int], str]:
    """
    '201 myapp.resources.UserResource' -> (201, 'myapp.resources.UserResource')
    'myapp.resources.UserResource'     -> (None, 'myapp.resources.UserResource')
    '999 myapp.resources.UserResource' -> (None, 'myapp.resources.UserResource')
    """
    m = _STATUS_AND_CLASS.match(raw or "")
    # the pattern accepts any string, the match is never None
    status = int(m.group(1)) if m.group(1) else None
    if status is not None and not 100 <= status <= 599:
        # not an HTTP status; the rendered one is used instead
        status = None
    return status, m.group(2).strip()


def to_resource_directive(tag: AnnotationTag) -> ResourceDirective:
    status, resource_class = decode_resource_directive(tag.content)
    return ResourceDirective(kind=RESOURCE_TAGS[tag.key], resource_class=resource_class, status_code=status)


def decode_model_directive(
    raw: Optional[str],
    recognized_attribute_keys: Sequence[str] = ("states",),
) -> ModelDirective:
    model_type, attributes = parse_into_content_and_attributes(raw or "", recognized_attribute_keys)
    if not model_type:
        raise MissingModelDirective()

    states = tuple(s.strip() for s in (attributes.get("states") or "").split(",") if s.strip())
    return ModelDirective(model_type=model_type, states=states)


def model_directive_from_tags(tags: Sequence[AnnotationTag]) -> ModelDirective:
    tag = extract_model_directive(tags)
    if tag is None:
        raise MissingModelDirective()
    return decode_model_directive(tag.content)
