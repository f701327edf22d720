from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from rtdb_admin.core.exceptions import InvalidPathError

RESERVED_CHARS = "[].#$"

Segments = Tuple[str, ...]


def parse_path(path: str) -> Segments:
    """
    Split a slash-delimited path into its non-empty segments.

    Leading, trailing and repeated slashes are ignored, so ``""`` and ``"/"``
    both parse to the root (an empty tuple).
    """
    if not isinstance(path, str):
        raise InvalidPathError(f"path must be a string: {path!r}")
    return tuple(segment for segment in path.split("/") if segment)


def canonical_path(segments: Iterable[str]) -> str:
    return "/" + "/".join(segments)


def validate_path(path: str) -> None:
    """Raise InvalidPathError if ``path`` contains a reserved character."""
    if any(char in path for char in RESERVED_CHARS):
        raise InvalidPathError(f"invalid path with illegal characters: {path!r}")


def join_path(base: str, relative: str) -> Segments:
    if not isinstance(relative, str):
        raise InvalidPathError(f"child path must be a string: {relative!r}")
    return parse_path(f"{base}/{relative}")


def parent_segments(segments: Segments) -> Optional[Segments]:
    if not segments:
        return None
    return segments[:-1]


@dataclass(frozen=True)
class DatabasePath:
    """Normalized location of a node in the database tree"""
    segments: Segments = ()

    @classmethod
    def parse(cls, raw: str) -> "DatabasePath":
        return cls(parse_path(raw))

    @property
    def key(self) -> str:
        return self.segments[-1] if self.segments else ""

    @property
    def path(self) -> str:
        return canonical_path(self.segments)

    @property
    def is_root(self) -> bool:
        return not self.segments

    def parent(self) -> Optional["DatabasePath"]:
        segments = parent_segments(self.segments)
        return None if segments is None else DatabasePath(segments)

    def child(self, relative: str) -> "DatabasePath":
        return DatabasePath(join_path(self.path, relative))

    def __str__(self) -> str:
        return self.path
