from typing import TYPE_CHECKING, Any, Dict, List, Optional

from rtdb_admin.core.entities import parse_path, validate_path
from rtdb_admin.core.exceptions import QueryValidationError, SerializationError
from rtdb_admin.core.service import (
    ORDER_BY_KEY,
    ORDER_BY_PRIORITY,
    ORDER_BY_VALUE,
    convert,
    encode_json,
    sort_results,
)

if TYPE_CHECKING:
    from .reference import Reference

RESERVED_ORDER_BY = (ORDER_BY_KEY, ORDER_BY_VALUE, ORDER_BY_PRIORITY)


def normalize_child_order(path: str) -> str:
    """Validate a child path used with order_by_child and return its canonical form."""
    if not isinstance(path, str) or not path:
        raise QueryValidationError("order_by_child requires a non-empty child path")
    if path in RESERVED_ORDER_BY:
        raise QueryValidationError(f"illegal child path: {path!r}")
    validate_path(path)
    segments = parse_path(path)
    if not segments:
        raise QueryValidationError(f"invalid child path: {path!r}")
    return "/".join(segments)


class Query:
    """
    A Reference plus server-side ordering and filtering parameters.

    The database sorts children by the ordering constraint, applies the limit
    and range filters, and returns the matches as an unordered JSON object.
    Use get_ordered() to read them back in order. Every modifier validates its
    argument immediately and returns a new Query; the original is unchanged.
    """

    def __init__(self, ref: "Reference", order_by: str, params: Optional[Dict[str, str]] = None):
        self._ref = ref
        self._order_by = order_by
        if params is None:
            params = {"orderBy": encode_json(order_by)}
        self._params = params

    @property
    def ref(self) -> "Reference":
        return self._ref

    @property
    def order_by(self) -> str:
        return self._order_by

    @property
    def params(self) -> Dict[str, str]:
        return dict(self._params)

    def _with(self, name: str, value: str) -> "Query":
        params = dict(self._params)
        params[name] = value
        return Query(self._ref, self._order_by, params)

    def _limit(self, name: str, other: str, limit: int) -> "Query":
        if not isinstance(limit, int) or isinstance(limit, bool):
            raise QueryValidationError(f"limit must be an integer: {limit!r}")
        if limit < 0:
            raise QueryValidationError(f"limit cannot be negative: {limit}")
        if limit == 0:
            return self
        if other in self._params:
            raise QueryValidationError(
                f"cannot set both limit parameters: {name} = {limit}, {other} = {self._params[other]}"
            )
        return self._with(name, str(limit))

    def _filter(self, name: str, value: Any) -> "Query":
        # None leaves the bound unset and clears one set earlier
        if value is None:
            params = dict(self._params)
            params.pop(name, None)
            return Query(self._ref, self._order_by, params)
        try:
            encoded = encode_json(value)
        except SerializationError as e:
            raise QueryValidationError(f"invalid {name} value: {e}") from e
        return self._with(name, encoded)

    def limit_to_first(self, limit: int) -> "Query":
        """Anchor the query to the first ``limit`` children of the window."""
        return self._limit("limitToFirst", "limitToLast", limit)

    def limit_to_last(self, limit: int) -> "Query":
        """Anchor the query to the last ``limit`` children of the window."""
        return self._limit("limitToLast", "limitToFirst", limit)

    def start_at(self, value: Any) -> "Query":
        """Only return children whose index is greater than or equal to ``value``."""
        return self._filter("startAt", value)

    def end_at(self, value: Any) -> "Query":
        """Only return children whose index is less than or equal to ``value``."""
        return self._filter("endAt", value)

    def equal_to(self, value: Any) -> "Query":
        """Only return children whose index equals ``value``."""
        return self._filter("equalTo", value)

    async def get(self, model: Optional[Any] = None) -> Any:
        """
        Execute the query and return the decoded result.

        Results keep whatever order the server used when encoding the JSON
        object, which is usually not the requested order.
        """
        response = await self._ref._send("GET", params=self._params)
        return response.check_and_parse(200, model)

    async def get_ordered(self, model: Optional[Any] = None) -> List[Any]:
        """
        Execute the query and return the matching children as a list sorted by
        the query's ordering. Ties are broken by key.
        """
        response = await self._ref._send("GET", params=self._params)
        results = response.check_and_parse(200)
        values = [entry.value for entry in sort_results(results, self._order_by)]
        if model is None:
            return values
        return [convert(value, model) for value in values]

    def __repr__(self) -> str:
        return f"Query(path={self._ref.path!r}, params={self._params!r})"
