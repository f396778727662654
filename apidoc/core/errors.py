from __future__ import annotations


class ApidocError(Exception):
    pass


class MissingModelDirective(ApidocError):
    """Resource directive present but no usable @apiResourceModel next to it."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "Couldn't detect an API resource model from your docstring. "
            "Did you remember to specify a model using @apiResourceModel?"
        )


class UnresolvedType(ApidocError, LookupError):
    def __init__(self, name: str, reason: str = ""):
        self.name = name
        msg = f"Cannot resolve type '{name}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class FactoryNotFound(ApidocError, LookupError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No factory defined for '{name}'")


class UnknownFactoryState(ApidocError, KeyError):
    def __init__(self, factory: str, state: str):
        self.factory = factory
        self.state = state
        super().__init__(f"Factory '{factory}' has no state '{state}'")

    def __str__(self) -> str:
        return str(self.args[0])


class StoreNotBound(ApidocError, RuntimeError):
    def __init__(self, model: str):
        super().__init__(f"{model} has no ModelStore bound; call bind_store() first")
