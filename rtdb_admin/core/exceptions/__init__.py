from .database import (
    DatabaseError,
    DatabaseValidationError,
    InvalidPathError,
    QueryValidationError,
    TransportError,
    SerializationError,
    HTTPStatusError,
    TransactionAbortedError,
)

__all__ = [
    "DatabaseError",
    "DatabaseValidationError",
    "InvalidPathError",
    "QueryValidationError",
    "TransportError",
    "SerializationError",
    "HTTPStatusError",
    "TransactionAbortedError",
]
