from __future__ import annotations

from typing import Any, Callable, Optional

from starlette.requests import Request

from apidoc.core.annotations.models import DirectiveKind
from apidoc.core.resources.json_resource import JsonResource, ResourceCollection
from apidoc.core.resources.request import default_request
from apidoc.core.typeref import TypeRegistry

from .models import SyntheticResponse


class ResponseSynthesizer:
    """
    Renders an example response from a resource class and resolved models.

    Collections come in two shapes and the annotation does not say which one
    a class uses, so the class is first built from a single item:
      - a ResourceCollection subclass is rebuilt from both models
      - any other JsonResource goes through its collection() classmethod
    """

    def __init__(self, types: TypeRegistry, *, request_factory: Callable[[], Request] = default_request):
        self.types = types
        self.request_factory = request_factory

    def synthesize(
        self,
        resource_class_ref: str,
        kind: DirectiveKind,
        primary: Any,
        secondary: Any = None,
        *,
        status_code: Optional[int] = None,
    ) -> SyntheticResponse:
        resource_cls = self.types.resolve_type(resource_class_ref)
        resource = self._construct(resource_cls, primary)

        if kind == DirectiveKind.COLLECTION:
            if secondary is None:
                raise ValueError("A collection response needs two model instances")
            models = [primary, secondary]
            if isinstance(resource, ResourceCollection):
                resource = resource_cls(models)
            else:
                wrap_many = getattr(resource_cls, "collection", None)
                if not callable(wrap_many):
                    raise TypeError(f"{resource_cls.__name__} has no collection() constructor")
                resource = wrap_many(models)

        if not isinstance(resource, JsonResource) and not hasattr(resource, "to_response"):
            raise TypeError(f"{resource_cls.__name__} is not a resource class")

        response = resource.to_response(self.request_factory())
        return SyntheticResponse(
            status_code=status_code or response.status_code,
            content=bytes(response.body),
        )

    @staticmethod
    def _construct(resource_cls: type, model: Any) -> Any:
        try:
            return resource_cls(model)
        except Exception:
            # collection-only classes refuse a single model
            return resource_cls([model])
