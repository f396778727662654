from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from faker import Faker

from apidoc.core.errors import FactoryNotFound, UnknownFactoryState
from apidoc.core.typeref import normalize_type_ref, qualified_name

# A definition or state is either a fixed mapping or a callable that builds
# one from the faker instance.
AttributeSource = Union[Mapping[str, Any], Callable[[Faker], Mapping[str, Any]]]


def _evaluate(source: AttributeSource, faker: Faker) -> Dict[str, Any]:
    if callable(source):
        return dict(source(faker))
    return dict(source)


class ThreadLocalFaker:
    """
    Hands out one Faker per thread. Faker keeps its random state on the
    instance, so sharing one across threads interleaves (and breaks) seeded
    sequences. Every thread's instance starts from the same seed.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._local = threading.local()

    def __call__(self) -> Faker:
        faker = getattr(self._local, "faker", None)
        if faker is None:
            faker = Faker()
            if self.seed is not None:
                faker.seed_instance(self.seed)
            self._local.faker = faker
        return faker


class Factory:
    """
    Builds unsaved model instances from a definition plus named states.

    Factories are immutable: states() returns a new factory.
    """

    def __init__(
        self,
        model: type,
        definition: AttributeSource,
        *,
        states: Optional[Mapping[str, AttributeSource]] = None,
        faker_source: Optional[Callable[[], Faker]] = None,
        applied: Tuple[str, ...] = (),
    ):
        self.model = model
        self._definition = definition
        self._states: Dict[str, AttributeSource] = dict(states or {})
        self._faker_source = faker_source or ThreadLocalFaker()
        self._applied = applied

    @property
    def applied_states(self) -> Tuple[str, ...]:
        return self._applied

    def states(self, *names: Union[str, Iterable[str]]) -> "Factory":
        flat: List[str] = []
        for n in names:
            if isinstance(n, str):
                flat.append(n)
            else:
                flat.extend(n)

        for n in flat:
            if n not in self._states:
                raise UnknownFactoryState(self.model.__name__, n)

        return Factory(
            self.model,
            self._definition,
            states=self._states,
            faker_source=self._faker_source,
            applied=self._applied + tuple(flat),
        )

    def raw(self, **overrides: Any) -> Dict[str, Any]:
        faker = self._faker_source()
        attrs = _evaluate(self._definition, faker)
        for name in self._applied:
            attrs.update(_evaluate(self._states[name], faker))
        attrs.update(overrides)
        return attrs

    def make(self, **overrides: Any) -> Any:
        return self.model(**self.raw(**overrides))

    def make_many(self, count: int, **overrides: Any) -> List[Any]:
        return [self.make(**overrides) for _ in range(count)]


class FactoryRegistry:
    """
    Factory definitions keyed by model class.

    Lookups accept the class itself, its bare name, or its dotted
    'module.Class' path (a leading separator is tolerated).

    Each thread draws fake values from its own Faker. Passing faker= opts
    out of that: the given instance is then shared by every thread.
    """

    def __init__(self, *, faker: Optional[Faker] = None, seed: Optional[int] = None):
        self._faker_source: Callable[[], Faker]
        if faker is not None:
            if seed is not None:
                faker.seed_instance(seed)
            self._faker_source = lambda: faker
        else:
            self._faker_source = ThreadLocalFaker(seed)
        self._factories: Dict[type, Factory] = {}
        self._names: Dict[str, type] = {}

    @property
    def faker(self) -> Faker:
        """The calling thread's Faker."""
        return self._faker_source()

    def define(self, model: type, definition: AttributeSource) -> Factory:
        existing = self._factories.get(model)
        states = existing._states if existing is not None else {}
        f = Factory(model, definition, states=states, faker_source=self._faker_source)
        self._factories[model] = f
        self._names[model.__name__] = model
        self._names[qualified_name(model)] = model
        return f

    def state(self, model: type, name: str, source: AttributeSource) -> None:
        f = self._factories.get(model)
        if f is None:
            raise FactoryNotFound(model.__name__)
        f._states[name] = source

    def has(self, key: Union[type, str]) -> bool:
        return self._lookup(key) is not None

    def get_factory(self, key: Union[type, str]) -> Factory:
        f = self._lookup(key)
        if f is None:
            raise FactoryNotFound(key if isinstance(key, str) else key.__name__)
        return f

    def _lookup(self, key: Union[type, str]) -> Optional[Factory]:
        if isinstance(key, str):
            model = self._names.get(normalize_type_ref(key))
            return self._factories.get(model) if model is not None else None
        return self._factories.get(key)
