from .models import ResolutionTier, ResolvedModel, SyntheticResponse, TierOutcome
from .model_resolver import ModelResolver, first_success
from .synthesizer import ResponseSynthesizer

__all__ = [
    "ModelResolver",
    "ResolutionTier",
    "ResolvedModel",
    "ResponseSynthesizer",
    "SyntheticResponse",
    "TierOutcome",
    "first_success",
]
