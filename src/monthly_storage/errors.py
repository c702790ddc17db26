from monthly_storage.models.locator import MissingScope, ScopeKind


class StorageError(Exception):
    """Base class for errors raised by the storage builder itself."""


class ConfigurationError(StorageError):
    """A scope id required by a convenience finder was never set."""

    def __init__(self, missing: MissingScope) -> None:
        super().__init__(missing.message)
        self.scope: ScopeKind = missing.scope


class ResourceNotFoundError(StorageError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message)
