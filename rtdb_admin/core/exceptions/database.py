from typing import Mapping, Optional


class DatabaseError(Exception):
    """Base exception for database operations"""
    pass


class DatabaseValidationError(DatabaseError, ValueError):
    """Argument rejected locally, before any request is sent"""
    pass


class InvalidPathError(DatabaseValidationError):
    """Path contains characters reserved by the database"""
    pass


class QueryValidationError(DatabaseValidationError):
    """Malformed combination of query parameters"""
    pass


class TransportError(DatabaseError):
    """Network failure while talking to the database"""
    pass


class SerializationError(DatabaseError):
    """JSON encoding or decoding error"""
    pass


class HTTPStatusError(DatabaseError):
    """Database answered with an unexpected status code"""

    def __init__(
        self,
        message: str,
        status: int,
        reason: Optional[str] = None,
        body: bytes = b"",
        headers: Optional[Mapping[str, str]] = None
    ):
        super().__init__(message)
        self.status = status
        self.reason = reason
        self.body = body
        self.headers = headers if headers is not None else {}


class TransactionAbortedError(DatabaseError):
    """Transaction gave up after exhausting its retry budget"""
    pass
