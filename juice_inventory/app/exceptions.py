class InventoryError(Exception):
    """Base exception for the juice inventory service."""

    def __init__(self, message=None):
        self.message = message or "An error occurred in the juice inventory service"
        super().__init__(self.message)


class ConfigError(InventoryError):
    """Raised when required environment configuration is missing or invalid."""


class StoreUnavailableError(InventoryError):
    """Raised when the database does not answer the liveness probe."""


class SeedSourceError(InventoryError):
    """Raised when the seed name list cannot be read."""
