from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional


@dataclass(frozen=True)
class AccessToken:
    """Bearer token issued by a credential provider"""
    token: str
    expiry: Optional[datetime] = None

    def __post_init__(self) -> None:
        # Naive expiries are taken to be UTC
        if self.expiry is not None and self.expiry.tzinfo is None:
            object.__setattr__(self, "expiry", self.expiry.replace(tzinfo=timezone.utc))

    def is_expired(self, leeway: timedelta = timedelta(0)) -> bool:
        """A token without expiry never expires."""
        if self.expiry is None:
            return False
        return datetime.now(timezone.utc) + leeway >= self.expiry
