from .json_resource import AnonymousResourceCollection, JsonResource, ResourceCollection
from .request import default_request

__all__ = [
    "AnonymousResourceCollection",
    "JsonResource",
    "ResourceCollection",
    "default_request",
]
