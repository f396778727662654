from .base import Strategy
from .use_api_resource_tags import UseApiResourceTags

__all__ = ["Strategy", "UseApiResourceTags"]
