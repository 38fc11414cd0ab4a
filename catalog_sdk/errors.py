# catalog_sdk/errors.py
from typing import Optional


class CatalogError(Exception):
    """Base class for everything the catalog SDK raises."""


class ValidationError(CatalogError):
    """A draft failed local validation. Never reaches the server."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class EditorError(CatalogError):
    pass


# ---------------------------
# Remote failures
# ---------------------------
class RemoteError(CatalogError):
    """A request to the products API did not succeed."""


class TransportError(RemoteError):
    pass


class ServerError(RemoteError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
