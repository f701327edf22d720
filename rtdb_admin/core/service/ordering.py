"""
Client-side replica of the database's ordering of JSON values.

The REST API applies ``orderBy`` server-side but returns the matching children
as an unordered JSON object, so ordered reads re-sort the response locally.
Values rank by type first and by value within a type:

    null < false < true < numbers < strings < objects/arrays

Numbers compare numerically, strings by their UTF-8 bytes. Objects and arrays
all compare equal; callers break such ties (and any other tie) by key.
"""
from functools import cmp_to_key
from typing import Any, Iterable, List, Union

from rtdb_admin.core.entities.path import parse_path
from rtdb_admin.core.exceptions import SerializationError

TYPE_NULL = 0
TYPE_BOOL_FALSE = 1
TYPE_BOOL_TRUE = 2
TYPE_NUMERIC = 3
TYPE_STRING = 4
TYPE_OBJECT = 5

ORDER_BY_KEY = "$key"
ORDER_BY_VALUE = "$value"
ORDER_BY_PRIORITY = "$priority"

Key = Union[int, str]


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def value_type(value: Any) -> int:
    """Rank class of a decoded JSON value."""
    if value is None:
        return TYPE_NULL
    # bool is a subclass of int and must be checked first
    if isinstance(value, bool):
        return TYPE_BOOL_TRUE if value else TYPE_BOOL_FALSE
    if isinstance(value, (int, float)):
        return TYPE_NUMERIC
    if isinstance(value, str):
        return TYPE_STRING
    return TYPE_OBJECT


def compare_values(a: Any, b: Any) -> int:
    """Three-way comparison of two decoded JSON values."""
    type_a, type_b = value_type(a), value_type(b)
    if type_a != type_b:
        return _cmp(type_a, type_b)
    if type_a == TYPE_NUMERIC:
        return _cmp(a, b)
    if type_a == TYPE_STRING:
        return _cmp(a.encode("utf-8"), b.encode("utf-8"))
    return 0


def compare_keys(a: Key, b: Key) -> int:
    """Array indices sort before object keys; keys compare lexically."""
    a_is_index, b_is_index = isinstance(a, int), isinstance(b, int)
    if a_is_index and b_is_index:
        return _cmp(a, b)
    if a_is_index:
        return -1
    if b_is_index:
        return 1
    return _cmp(a.encode("utf-8"), b.encode("utf-8"))


def sort_values(values: Iterable[Any]) -> List[Any]:
    """Sort values by database order. The sort is stable."""
    return sorted(values, key=cmp_to_key(compare_values))


def extract_child(value: Any, path: str) -> Any:
    current = value
    for segment in parse_path(path):
        if not isinstance(current, dict):
            return None
        current = current.get(segment)
    return current


class SortEntry:
    """One child of a query result, with the index it is ordered by."""

    __slots__ = ("key", "value", "index", "index_type")

    def __init__(self, key: Key, value: Any, order_by: str):
        self.key = key
        self.value = value
        if order_by == ORDER_BY_KEY:
            self.index = key
        elif order_by == ORDER_BY_VALUE:
            self.index = value
        else:
            self.index = extract_child(value, order_by)
        self.index_type = value_type(self.index)

    def compare(self, other: "SortEntry") -> int:
        if self.index_type != other.index_type:
            return _cmp(self.index_type, other.index_type)
        if self.index_type in (TYPE_NUMERIC, TYPE_STRING):
            result = compare_values(self.index, other.index)
            if result:
                return result
        return compare_keys(self.key, other.key)

    def __lt__(self, other: "SortEntry") -> bool:
        return self.compare(other) < 0

    def __repr__(self) -> str:
        return f"SortEntry(key={self.key!r}, index={self.index!r})"


def sort_results(results: Any, order_by: str) -> List[SortEntry]:
    """
    Order the children of a query result.

    ``results`` is the decoded response body: an object (key -> child) or an
    array (index -> child). ``None`` means no children matched.
    """
    if results is None:
        return []
    if isinstance(results, dict):
        entries = [SortEntry(key, value, order_by) for key, value in results.items()]
    elif isinstance(results, list):
        entries = [SortEntry(index, value, order_by) for index, value in enumerate(results)]
    else:
        raise SerializationError(
            f"sorting not supported for result of type {type(results).__name__}"
        )
    return sorted(entries)
