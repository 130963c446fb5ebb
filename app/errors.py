# app/errors.py
"""
Error kinds raised by the services and the store adapter.

None of these carry transport details; app.main maps them onto HTTP
status codes.
"""


class PosError(Exception):
    """Base class for every error raised by this package."""


class NotFoundError(PosError):
    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        if entity_id is not None:
            message = f"{entity} not found: {entity_id}"
        else:
            message = f"{entity} not found"
        super().__init__(message)


class InvalidRequestError(PosError):
    """The request is well-formed but cannot be applied."""


class ConflictError(PosError):
    """A uniqueness rule would be violated."""


class StoreError(PosError):
    """The underlying store could not execute a call."""


class AggregationFailedError(PosError):
    """The order line join could not be executed against the store."""


class DecodeFailedError(PosError):
    """A joined record could not be mapped onto the expected shape."""


class OperationTimeoutError(PosError):
    """An operation exceeded its time budget."""
