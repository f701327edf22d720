from .codec import encode_json, decode_json, convert
from .ordering import (
    ORDER_BY_KEY,
    ORDER_BY_VALUE,
    ORDER_BY_PRIORITY,
    value_type,
    compare_values,
    compare_keys,
    sort_values,
    sort_results,
    SortEntry,
)

__all__ = [
    "encode_json",
    "decode_json",
    "convert",
    "ORDER_BY_KEY",
    "ORDER_BY_VALUE",
    "ORDER_BY_PRIORITY",
    "value_type",
    "compare_values",
    "compare_keys",
    "sort_values",
    "sort_results",
    "SortEntry",
]
