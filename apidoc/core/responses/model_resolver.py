from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel

from apidoc.core.fixtures.factory import FactoryRegistry
from apidoc.core.persistence.store import is_persisted_model
from apidoc.core.typeref import TypeRegistry, normalize_type_ref

from .models import ResolutionTier, ResolvedModel, TierOutcome

log = logging.getLogger("apidoc.resolver")

Attempt = Tuple[ResolutionTier, Callable[[], TierOutcome]]


def first_success(attempts: Iterable[Attempt]) -> Tuple[Optional[TierOutcome], List[TierOutcome]]:
    """
    Run attempts in order and stop at the first successful one.

    Returns (winner or None, every outcome that was produced). Attempts after
    the winner are never called.
    """
    tried: List[TierOutcome] = []
    for tier, attempt in attempts:
        try:
            outcome = attempt()
        except Exception as e:
            outcome = TierOutcome(tier=tier, error=e)
        tried.append(outcome)
        if outcome.ok:
            return outcome, tried
    return None, tried


def bare_default(model_type: type) -> Any:
    # pydantic models get an unvalidated instance, everything else a no-arg call
    if issubclass(model_type, BaseModel):
        return model_type.model_construct()
    return model_type()


class ModelResolver:
    """
    Produces one example instance of a model type.

    Tiers, first success wins:
      1) factory    : registered factory, with states applied; not saved
      2) persisted  : first stored record (persistence-backed models only)
      3) bare default: no-arg construction; errors here propagate
    """

    def __init__(self, factories: FactoryRegistry, types: TypeRegistry, *, verbose: bool = False):
        self.factories = factories
        self.types = types
        self.verbose = verbose

    def resolve(self, type_ref: str, states: Sequence[str] = ()) -> ResolvedModel:
        name = normalize_type_ref(type_ref)
        # factories are keyed by name too, so a model only known to its factory still resolves
        if self.factories.has(name):
            model_type = self.factories.get_factory(name).model
        else:
            model_type = self.types.resolve_type(name)

        winner, tried = first_success([
            (ResolutionTier.FACTORY, lambda: self._from_factory(model_type, states)),
            (ResolutionTier.PERSISTED, lambda: self._from_store(model_type)),
        ])
        if winner is not None:
            log.debug("resolved %s via tier=%s", name, winner.tier.value)
            return ResolvedModel(instance=winner.instance, tier=winner.tier)

        for outcome in tried:
            self._report(name, outcome)

        return ResolvedModel(instance=bare_default(model_type), tier=ResolutionTier.BARE_DEFAULT)

    def _from_factory(self, model_type: type, states: Sequence[str]) -> TierOutcome:
        factory = self.factories.get_factory(model_type)
        if states:
            factory = factory.states(*states)
        return TierOutcome(tier=ResolutionTier.FACTORY, instance=factory.make())

    def _from_store(self, model_type: type) -> TierOutcome:
        if not is_persisted_model(model_type):
            return TierOutcome(tier=ResolutionTier.PERSISTED, skipped=True)
        return TierOutcome(tier=ResolutionTier.PERSISTED, instance=model_type.first())

    def _report(self, name: str, outcome: TierOutcome) -> None:
        if outcome.skipped:
            return
        if outcome.tier == ResolutionTier.FACTORY:
            msg = "Model factory failed to instantiate %s; trying to fetch from the store. (%s)"
        else:
            msg = "Failed to fetch first %s from the store; using a bare instance. (%s)"
        reason = outcome.error if outcome.error is not None else "no records"
        if self.verbose:
            log.warning(msg, name, reason)
        else:
            log.debug(msg, name, reason)
