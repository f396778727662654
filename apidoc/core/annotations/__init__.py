from .models import AnnotationTag, DirectiveKind, ModelDirective, ResourceDirective
from .parser import parse_doc_tags, parse_into_content_and_attributes
from .directives import (
    decode_model_directive,
    decode_resource_directive,
    extract_model_directive,
    extract_resource_directive,
)

__all__ = [
    "AnnotationTag",
    "DirectiveKind",
    "ModelDirective",
    "ResourceDirective",
    "parse_doc_tags",
    "parse_into_content_and_attributes",
    "decode_model_directive",
    "decode_resource_directive",
    "extract_model_directive",
    "extract_resource_directive",
]
