"""
rtdb_admin
- Asynchronous admin client for the Firebase Realtime Database REST API
"""

from .version import __version__
from .core.exceptions import (
    DatabaseError,
    DatabaseValidationError,
    InvalidPathError,
    QueryValidationError,
    TransportError,
    SerializationError,
    HTTPStatusError,
    TransactionAbortedError,
)
from .core.interfaces import CredentialProvider, TransactionNode
from .infrastructure import (
    DatabaseFactory,
    DatabaseClient,
    Reference,
    Query,
    StaticTokenProvider,
    EmulatorCredentialProvider,
    CachingCredentialProvider,
)

__all__ = [
    "__version__",
    "DatabaseError",
    "DatabaseValidationError",
    "InvalidPathError",
    "QueryValidationError",
    "TransportError",
    "SerializationError",
    "HTTPStatusError",
    "TransactionAbortedError",
    "CredentialProvider",
    "TransactionNode",
    "DatabaseFactory",
    "DatabaseClient",
    "Reference",
    "Query",
    "StaticTokenProvider",
    "EmulatorCredentialProvider",
    "CachingCredentialProvider",
]
