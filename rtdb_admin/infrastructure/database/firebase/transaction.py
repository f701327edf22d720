import inspect
from typing import TYPE_CHECKING, Any, Optional

from rtdb_admin.core.exceptions import DatabaseError, DatabaseValidationError, TransactionAbortedError
from rtdb_admin.core.interfaces import TransactionNode, UpdateFunction
from rtdb_admin.core.service import convert, decode_json
from rtdb_admin.utilities.monitoring import MonitoringFactory

if TYPE_CHECKING:
    from .reference import Reference

logger = MonitoringFactory.get_logger("transaction")

MAX_TRANSACTION_RETRIES = 25


class RawTransactionNode(TransactionNode):
    """Current value of a node, kept as the raw response body until decoded."""

    def __init__(self, raw: bytes):
        self._raw = raw

    @property
    def raw(self) -> bytes:
        return self._raw

    def unmarshal(self, model: Optional[Any] = None) -> Any:
        return convert(decode_json(self._raw), model)


async def run_transaction(ref: "Reference", update: UpdateFunction) -> Any:
    """
    Atomically replace the value at ``ref`` with ``update(current)``.

    The current value and its ETag are read once. The new value is written
    with an ``If-Match`` precondition; when another writer got there first the
    server answers 412 with the fresh value and ETag, and ``update`` is applied
    again. An exception raised by ``update`` aborts the transaction
    immediately and propagates unchanged.

    Returns:
        The value that was written.

    Raises:
        TransactionAbortedError: If the write lost the race on every attempt.
        DatabaseError: If the initial read carries no ETag.
        HTTPStatusError: If the server fails the read or a write otherwise.
    """
    if not callable(update):
        raise DatabaseValidationError("transaction update must be callable")

    response = await ref._send("GET", headers={"X-Firebase-ETag": "true"})
    response.check_status(200)
    if response.etag is None:
        raise DatabaseError(f"read of {ref.path} returned no ETag; cannot run transaction")
    node, etag = RawTransactionNode(response.body), response.etag

    attempt = 0
    while attempt < MAX_TRANSACTION_RETRIES:
        new_value = update(node)
        if inspect.isawaitable(new_value):
            new_value = await new_value
        if new_value is None:
            raise DatabaseValidationError(
                "transaction update must not return None; use delete() to remove a node"
            )

        response = await ref._send("PUT", body=new_value, headers={"If-Match": etag})
        if response.status == 200:
            MonitoringFactory.record_metric(
                "rtdb.transaction.attempts", attempt + 1, {"path": ref.path}
            )
            return new_value
        if response.status != 412 or response.etag is None:
            response.check_status(200)

        node, etag = RawTransactionNode(response.body), response.etag
        attempt += 1
        logger.info(
            f"Transaction on {ref.path} lost write race {attempt} of {MAX_TRANSACTION_RETRIES}",
            extra={"path": ref.path, "attempt": attempt}
        )

    logger.warning(f"Transaction on {ref.path} aborted after {MAX_TRANSACTION_RETRIES} attempts")
    raise TransactionAbortedError("transaction aborted after failed retries")
