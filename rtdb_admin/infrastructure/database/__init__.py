"""
Database
- Talks to the Realtime Database over its REST protocol
- Maps paths to references, ordering selectors to queries
- Runs optimistic ETag transactions
- Builds configured clients from settings
"""

from .factory import DatabaseFactory
from .firebase import DatabaseClient, Reference, Query

__all__ = [
    "DatabaseFactory",
    "DatabaseClient",
    "Reference",
    "Query",
]
