from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from apidoc.config import ExtractionConfig
from apidoc.core.annotations.models import AnnotationTag


class Strategy(ABC):
    name: str

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or ExtractionConfig()

    @abstractmethod
    def __call__(
        self,
        route: Any,
        tags: Optional[Sequence[AnnotationTag]] = None,
    ) -> Optional[List[Dict[str, Any]]]:
        """Return example responses for the route, or None when this strategy has nothing."""
