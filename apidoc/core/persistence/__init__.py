from .store import ModelStore, PersistedModel, is_persisted_model

__all__ = ["ModelStore", "PersistedModel", "is_persisted_model"]
