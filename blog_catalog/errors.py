"""Exception types shared by the store, the services and the HTTP layer."""


class CatalogError(Exception):
    """Base class for every error raised by the blog catalog."""


class ValidationError(CatalogError, ValueError):
    """Missing, blank or malformed input. Nothing has been written."""


class NotFoundError(CatalogError, LookupError):
    """A lookup by slug or id matched nothing."""


class StorageError(CatalogError):
    """A collection file could not be read or replaced."""

    def __init__(self, location, message: str):
        super().__init__(f"{location}: {message}")
        self.location = location
