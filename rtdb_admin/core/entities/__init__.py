from .path import (
    RESERVED_CHARS,
    DatabasePath,
    parse_path,
    canonical_path,
    validate_path,
    join_path,
    parent_segments,
)
from .response import Response
from .token import AccessToken
from .monitoring import Metric

__all__ = [
    "RESERVED_CHARS",
    "DatabasePath",
    "parse_path",
    "canonical_path",
    "validate_path",
    "join_path",
    "parent_segments",
    "Response",
    "AccessToken",
    "Metric",
]
