"""
Exception hierarchy for retailtransform.

Every failure that should abort a run derives from RetailTransformError so the
CLI can report it with a single handler. A product without an author is not an
error and has no exception here.
"""


class RetailTransformError(Exception):
    """Base class for all fatal pipeline errors."""
    pass


class ConfigError(RetailTransformError):
    """Raised when required settings are missing or invalid."""
    pass


class StoreError(RetailTransformError):
    """Raised when the relational store fails a read."""
    pass


class StoreConnectivityError(StoreError):
    """Raised when the store cannot be reached or the connection drops."""
    pass


class StoreQueryError(StoreError):
    """Raised for malformed queries and schema mismatches."""
    pass


class DataIntegrityError(RetailTransformError):
    """Raised when an association points at an identity that does not exist."""

    def __init__(self, product_id: int, identity_id: int):
        self.product_id = product_id
        self.identity_id = identity_id
        super().__init__(
            f"Product {product_id} is linked to character {identity_id}, "
            f"but no such character exists"
        )


class PipelineCancelled(RetailTransformError):
    """Raised when a run is cancelled between records."""
    pass
