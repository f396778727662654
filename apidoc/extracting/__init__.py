from .generator import generate_examples
from .route_docs import get_route_tags

__all__ = ["generate_examples", "get_route_tags"]
