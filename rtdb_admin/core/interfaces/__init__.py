"""
Interfaces
- Defines the contracts of the collaborators the client depends on
- Keeps credentials, transaction callbacks and metrics export swappable
- Enables dependency inversion and easier testing
"""

from .credentials import CredentialProvider
from .transaction import TransactionNode, UpdateFunction
from .monitoring import MetricsExporter

__all__ = [
    "CredentialProvider",
    "TransactionNode",
    "UpdateFunction",
    "MetricsExporter",
]
