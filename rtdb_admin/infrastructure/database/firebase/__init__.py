from .http_client import HttpClient, USER_AGENT
from .client import DatabaseClient, NO_OVERRIDE
from .reference import Reference
from .query import Query
from .transaction import RawTransactionNode, MAX_TRANSACTION_RETRIES, run_transaction

__all__ = [
    "HttpClient",
    "USER_AGENT",
    "DatabaseClient",
    "NO_OVERRIDE",
    "Reference",
    "Query",
    "RawTransactionNode",
    "MAX_TRANSACTION_RETRIES",
    "run_transaction",
]
