from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, ClassVar, Dict, List, Optional, Type

from pydantic import BaseModel
from starlette.requests import Request
from starlette.responses import JSONResponse, Response


def _plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Mapping):
        return dict(value)
    if hasattr(value, "__dict__"):
        return {k: v for k, v in vars(value).items() if not k.startswith("_")}
    return value


class JsonResource:
    """
    Transforms one model into the JSON body of a response.

    Subclasses override to_dict(). Attribute access falls through to the
    wrapped model, so `self.name` reads `self.resource.name`.
    """

    wrap: ClassVar[Optional[str]] = "data"
    status_code: ClassVar[int] = 200

    def __init__(self, resource: Any):
        self.resource = resource

    def __getattr__(self, name: str) -> Any:
        if name == "resource" or "resource" not in self.__dict__:
            raise AttributeError(name)
        return getattr(self.__dict__["resource"], name)

    def to_dict(self, request: Request) -> Any:
        return _plain(self.resource)

    def with_(self, request: Request) -> Dict[str, Any]:
        """Extra top-level keys merged next to the wrapped data."""
        return {}

    def resolve(self, request: Request) -> Any:
        return self.to_dict(request)

    def payload(self, request: Request) -> Any:
        data = self.resolve(request)
        extra = self.with_(request)
        if self.wrap:
            return {self.wrap: data, **extra}
        if extra and isinstance(data, dict):
            return {**data, **extra}
        return data

    def to_response(self, request: Request) -> Response:
        return JSONResponse(self.payload(request), status_code=self.status_code)

    @classmethod
    def collection(cls, resource: Iterable[Any]) -> "AnonymousResourceCollection":
        return AnonymousResourceCollection(resource, collects=cls)


class ResourceCollection(JsonResource):
    """
    Transforms a sequence of models. Each item goes through `collects`
    (a JsonResource subclass) when set.
    """

    collects: ClassVar[Optional[Type[JsonResource]]] = None

    def __init__(self, resource: Iterable[Any]):
        if isinstance(resource, (str, bytes, Mapping, BaseModel)) or not isinstance(resource, Iterable):
            raise TypeError(
                f"{type(self).__name__} expects a sequence of items, got {type(resource).__name__}"
            )
        items = list(resource)
        super().__init__(items)
        item_cls = self.collects or JsonResource
        self.resources: List[JsonResource] = [
            r if isinstance(r, JsonResource) else item_cls(r) for r in items
        ]

    def __len__(self) -> int:
        return len(self.resources)

    def to_dict(self, request: Request) -> Any:
        return [r.resolve(request) for r in self.resources]


class AnonymousResourceCollection(ResourceCollection):
    def __init__(self, resource: Iterable[Any], collects: Type[JsonResource]):
        self.collects = collects
        super().__init__(resource)
