"""
Infrastructure Layer
- Purpose: Provide concrete implementations of external concerns and integrations
- Key Directories:
    - database
    - auth
"""
from .database import DatabaseFactory, DatabaseClient, Reference, Query
from .auth import StaticTokenProvider, EmulatorCredentialProvider, CachingCredentialProvider

__all__ = [
    "DatabaseFactory",
    "DatabaseClient",
    "Reference",
    "Query",
    "StaticTokenProvider",
    "EmulatorCredentialProvider",
    "CachingCredentialProvider",
]
