from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class AnnotationTag:
    name: str
    content: str = ""

    @property
    def key(self) -> str:
        return self.name.strip().lower()


class DirectiveKind(str, Enum):
    ITEM = "apiresource"
    COLLECTION = "apiresourcecollection"


@dataclass(frozen=True)
class ResourceDirective:
    kind: DirectiveKind
    resource_class: str
    status_code: Optional[int] = None

    @property
    def is_collection(self) -> bool:
        return self.kind == DirectiveKind.COLLECTION


@dataclass(frozen=True)
class ModelDirective:
    model_type: str
    states: Tuple[str, ...] = ()
