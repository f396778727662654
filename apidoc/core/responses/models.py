from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ResolutionTier(str, Enum):
    FACTORY = "factory"
    PERSISTED = "persisted"
    BARE_DEFAULT = "bare_default"


@dataclass(frozen=True)
class TierOutcome:
    tier: ResolutionTier
    instance: Any = None
    error: Optional[BaseException] = None
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return not self.skipped and self.error is None and self.instance is not None


@dataclass(frozen=True)
class ResolvedModel:
    instance: Any
    tier: ResolutionTier


@dataclass(frozen=True)
class SyntheticResponse:
    status_code: int
    content: bytes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status_code,
            "content": self.content.decode("utf-8"),
        }
