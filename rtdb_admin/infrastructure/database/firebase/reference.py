from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Tuple, Union

from rtdb_admin.core.entities import DatabasePath, Response, validate_path
from rtdb_admin.core.exceptions import DatabaseValidationError
from rtdb_admin.core.interfaces import UpdateFunction
from rtdb_admin.core.service import ORDER_BY_KEY, ORDER_BY_VALUE
from .query import Query, normalize_child_order
from .transaction import run_transaction

if TYPE_CHECKING:
    from .client import DatabaseClient


class Reference:
    """
    A handle to one node of the database tree.

    References are cheap immutable values; create them with
    ``DatabaseClient.reference()``, ``child()`` or ``parent``. Every operation is
    a coroutine performing one HTTP exchange (a transaction performs several).
    Cancelling the awaiting task aborts the request in flight.
    """

    def __init__(self, client: "DatabaseClient", path: Union[str, DatabasePath] = "/"):
        self._client = client
        self._path = path if isinstance(path, DatabasePath) else DatabasePath.parse(path)

    @property
    def key(self) -> str:
        return self._path.key

    @property
    def path(self) -> str:
        return self._path.path

    @property
    def segments(self) -> Tuple[str, ...]:
        return self._path.segments

    @property
    def parent(self) -> Optional["Reference"]:
        parent = self._path.parent()
        return None if parent is None else Reference(self._client, parent)

    def child(self, path: str) -> "Reference":
        """Reference to a (possibly nested) child; slashes are normalized."""
        return Reference(self._client, self._path.child(path))

    async def _send(
        self,
        method: str,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, str]] = None
    ) -> Response:
        return await self._client.http.send(method, self.path, body=body, headers=headers, params=params)

    async def get(self, model: Optional[Any] = None, shallow: bool = False) -> Any:
        """
        Read the value at this location.

        Args:
            model: Optional type to validate the value into.
            shallow: Only report which immediate children exist.
        """
        params = {"shallow": "true"} if shallow else None
        response = await self._send("GET", params=params)
        return response.check_and_parse(200, model)

    async def get_with_etag(self, model: Optional[Any] = None) -> Tuple[Any, Optional[str]]:
        """Read the value at this location together with its current ETag."""
        response = await self._send("GET", headers={"X-Firebase-ETag": "true"})
        return response.check_and_parse(200, model), response.etag

    async def get_if_changed(
        self,
        etag: str,
        model: Optional[Any] = None
    ) -> Tuple[bool, Any, Optional[str]]:
        """
        Read the value only if its ETag no longer matches ``etag``.

        Returns:
            ``(True, value, new_etag)`` when the value changed, and
            ``(False, None, etag)`` when the server answered 304.
        """
        if not isinstance(etag, str):
            raise DatabaseValidationError("etag must be a string")

        response = await self._send("GET", headers={"If-None-Match": etag})
        if response.status == 304:
            return False, None, etag
        return True, response.check_and_parse(200, model), response.etag

    async def set(self, value: Any) -> None:
        """Overwrite the value at this location."""
        if value is None:
            raise DatabaseValidationError("value must not be None; use delete() to remove a node")
        response = await self._send("PUT", body=value, params={"print": "silent"})
        response.check_status(204)

    async def set_if_unchanged(self, etag: str, value: Any) -> bool:
        """
        Overwrite the value only if the node still has ETag ``etag``.

        Returns:
            True if the write was applied, False if the ETag was stale.
        """
        if not isinstance(etag, str):
            raise DatabaseValidationError("etag must be a string")
        if value is None:
            raise DatabaseValidationError("value must not be None")

        response = await self._send("PUT", body=value, headers={"If-Match": etag})
        if response.status == 412:
            return False
        response.check_status(200)
        return True

    async def push(self, value: Any = None) -> "Reference":
        """Create a child with a server-generated key and return a reference to it."""
        if value is None:
            value = ""
        response = await self._send("POST", body=value)
        data = response.check_and_parse(200)
        return self.child(data["name"])

    async def update(self, value: Dict[str, Any]) -> None:
        """Set the given children of this location, leaving the others untouched."""
        if not value or not isinstance(value, dict):
            raise DatabaseValidationError("value argument must be a non-empty dictionary")
        for key in value:
            if not isinstance(key, str) or not key:
                raise DatabaseValidationError(f"update keys must be non-empty strings: {key!r}")
            validate_path(key)

        response = await self._send("PATCH", body=value, params={"print": "silent"})
        response.check_status(204)

    async def delete(self) -> None:
        response = await self._send("DELETE")
        response.check_status(200)

    async def transaction(self, update: UpdateFunction) -> Any:
        """
        Atomically modify the value at this location.

        ``update`` receives a TransactionNode holding the current value and
        returns the value to write; it may be called several times when other
        clients write concurrently, so it should not have side effects. See
        ``run_transaction`` for the retry rules.
        """
        return await run_transaction(self, update)

    def order_by_child(self, path: str) -> Query:
        """Query children ordered by the value of a nested child."""
        return Query(self, normalize_child_order(path))

    def order_by_key(self) -> Query:
        return Query(self, ORDER_BY_KEY)

    def order_by_value(self) -> Query:
        return Query(self, ORDER_BY_VALUE)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Reference):
            return NotImplemented
        return self._client is other._client and self._path == other._path

    def __hash__(self) -> int:
        return hash((id(self._client), self._path))

    def __repr__(self) -> str:
        return f"Reference(path={self.path!r})"
