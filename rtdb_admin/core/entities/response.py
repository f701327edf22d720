from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from multidict import CIMultiDict, CIMultiDictProxy

from rtdb_admin.core.exceptions import HTTPStatusError, SerializationError
from rtdb_admin.core.service.codec import convert, decode_json


@dataclass
class Response:
    """Status, headers and raw body of one database HTTP exchange"""
    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self) -> None:
        if not isinstance(self.headers, CIMultiDictProxy):
            self.headers = CIMultiDictProxy(CIMultiDict(self.headers))

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    @property
    def etag(self) -> Optional[str]:
        return self.headers.get("ETag")

    def check_status(self, want: int) -> None:
        """Raise HTTPStatusError unless the response carries status ``want``."""
        if self.status == want:
            return

        reason = self._error_reason()
        if reason:
            message = f"http error status: {self.status}; reason: {reason}"
        else:
            message = f"http error status: {self.status}; message: {self.text}"
        raise HTTPStatusError(
            message,
            status=self.status,
            reason=reason,
            body=self.body,
            headers=self.headers
        )

    def json(self) -> Any:
        return decode_json(self.body)

    def check_and_parse(self, want: int, model: Optional[Any] = None) -> Any:
        self.check_status(want)
        return convert(self.json(), model)

    def _error_reason(self) -> Optional[str]:
        # Database errors look like {"error": "text message"}
        try:
            data = decode_json(self.body)
        except SerializationError:
            return None
        if isinstance(data, dict) and isinstance(data.get("error"), str):
            return data["error"] or None
        return None
