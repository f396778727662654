import logging

import pytest

from apidoc.core.errors import UnresolvedType
from apidoc.core.fixtures.factory import FactoryRegistry
from apidoc.core.persistence.store import ModelStore, PersistedModel
from apidoc.core.responses.model_resolver import ModelResolver, first_success
from apidoc.core.responses.models import ResolutionTier, TierOutcome
from apidoc.core.typeref import TypeRegistry

from sample_app import Team


def _widget_class(*, first_result=None, first_error=None):
    calls = {"first": 0, "bare": 0, "kwargs": 0}

    class Widget(PersistedModel):
        def __init__(self, **attrs):
            if attrs:
                calls["kwargs"] += 1
            else:
                calls["bare"] += 1
            self.attrs = attrs

        @classmethod
        def first(cls):
            calls["first"] += 1
            if first_error is not None:
                raise first_error
            return first_result

    return Widget, calls


def _resolver(model, *, factory=None, verbose=False):
    types = TypeRegistry()
    types.register(model)
    factories = FactoryRegistry(seed=1)
    if factory is not None:
        factories.define(model, factory)
        factories.state(model, "shiny", {"finish": "gloss"})
    return ModelResolver(factories, types, verbose=verbose)


def test_factory_tier_short_circuits():
    Widget, calls = _widget_class(first_result=object())
    resolved = _resolver(Widget, factory={"label": "from-factory"}).resolve("Widget")

    assert resolved.tier == ResolutionTier.FACTORY
    assert resolved.instance.attrs == {"label": "from-factory"}
    assert calls == {"first": 0, "bare": 0, "kwargs": 1}


def test_factory_states_are_applied():
    Widget, _ = _widget_class()
    resolved = _resolver(Widget, factory={"label": "x"}).resolve("Widget", ["shiny"])
    assert resolved.instance.attrs == {"label": "x", "finish": "gloss"}


def test_leading_separator_is_tolerated():
    Widget, _ = _widget_class()
    resolved = _resolver(Widget, factory={"label": "x"}).resolve(".Widget")
    assert resolved.tier == ResolutionTier.FACTORY


def test_persisted_tier_used_when_factory_missing():
    record = object()
    Widget, calls = _widget_class(first_result=record)
    resolved = _resolver(Widget).resolve("Widget")

    assert resolved.tier == ResolutionTier.PERSISTED
    assert resolved.instance is record
    assert calls["first"] == 1
    assert calls["bare"] == 0


def test_persisted_tier_used_when_factory_state_unknown():
    record = object()
    Widget, calls = _widget_class(first_result=record)
    resolved = _resolver(Widget, factory={"label": "x"}).resolve("Widget", ["matte"])

    assert resolved.instance is record
    assert calls["kwargs"] == 0


def test_bare_default_when_store_is_empty():
    Widget, calls = _widget_class(first_result=None)
    resolved = _resolver(Widget).resolve("Widget")

    assert resolved.tier == ResolutionTier.BARE_DEFAULT
    assert isinstance(resolved.instance, Widget)
    assert calls == {"first": 1, "bare": 1, "kwargs": 0}


def test_bare_default_when_store_lookup_raises():
    Widget, calls = _widget_class(first_error=RuntimeError("db down"))
    resolved = _resolver(Widget).resolve("Widget")

    assert resolved.tier == ResolutionTier.BARE_DEFAULT
    assert calls["bare"] == 1


def test_real_store_first_record():
    class Gadget(PersistedModel):
        def __init__(self, name="bare"):
            self.name = name

    store = ModelStore()
    Gadget.bind_store(store)
    store.add(Gadget("stored"))

    resolved = _resolver(Gadget).resolve("Gadget")
    assert resolved.tier == ResolutionTier.PERSISTED
    assert resolved.instance.name == "stored"


def test_non_persisted_type_skips_store():
    resolved = _resolver(Team).resolve("Team")
    assert resolved.tier == ResolutionTier.BARE_DEFAULT
    assert isinstance(resolved.instance, Team)
    assert resolved.instance.name == ""


def test_bare_default_errors_propagate():
    class Picky:
        def __init__(self, required):
            self.required = required

    with pytest.raises(TypeError):
        _resolver(Picky).resolve("Picky")


def test_unknown_type_propagates():
    with pytest.raises(UnresolvedType):
        ModelResolver(FactoryRegistry(), TypeRegistry()).resolve("Nope")


def test_factory_name_resolves_without_a_registered_type():
    Widget, calls = _widget_class()
    factories = FactoryRegistry(seed=1)
    factories.define(Widget, {"label": "factory-only"})

    resolved = ModelResolver(factories, TypeRegistry()).resolve("Widget")
    assert resolved.tier == ResolutionTier.FACTORY
    assert resolved.instance.attrs == {"label": "factory-only"}
    assert calls["first"] == 0


def test_two_resolutions_are_independent():
    Widget, calls = _widget_class()
    resolver = _resolver(Widget, factory=lambda fake: {"n": fake.random_int()})
    a = resolver.resolve("Widget")
    b = resolver.resolve("Widget")
    assert a.instance is not b.instance
    assert calls["kwargs"] == 2


def test_fallbacks_are_quiet_unless_verbose(caplog):
    Widget, _ = _widget_class(first_error=RuntimeError("db down"))

    with caplog.at_level(logging.DEBUG, logger="apidoc.resolver"):
        _resolver(Widget).resolve("Widget")
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    caplog.clear()
    with caplog.at_level(logging.DEBUG, logger="apidoc.resolver"):
        _resolver(Widget, verbose=True).resolve("Widget")
    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 2
    assert "trying to fetch from the store" in warnings[0]
    assert "db down" in warnings[1]


def test_first_success_stops_at_winner():
    called = []

    def fail():
        called.append("fail")
        raise ValueError("nope")

    def win():
        called.append("win")
        return TierOutcome(tier=ResolutionTier.PERSISTED, instance="x")

    def never():
        called.append("never")
        return TierOutcome(tier=ResolutionTier.BARE_DEFAULT, instance="y")

    winner, tried = first_success([
        (ResolutionTier.FACTORY, fail),
        (ResolutionTier.PERSISTED, win),
        (ResolutionTier.BARE_DEFAULT, never),
    ])

    assert winner.instance == "x"
    assert called == ["fail", "win"]
    assert isinstance(tried[0].error, ValueError)
    assert not tried[0].ok


def test_first_success_without_winner():
    winner, tried = first_success([
        (ResolutionTier.PERSISTED, lambda: TierOutcome(tier=ResolutionTier.PERSISTED, skipped=True)),
    ])
    assert winner is None
    assert len(tried) == 1
