import asyncio
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Optional

from rtdb_admin.core.entities import AccessToken
from rtdb_admin.core.interfaces import CredentialProvider
from rtdb_admin.utilities.monitoring import MonitoringFactory

logger = MonitoringFactory.get_logger("credentials")

EMULATOR_TOKEN = "owner"


class StaticTokenProvider(CredentialProvider):
    """Serves one pre-issued bearer token"""

    def __init__(self, token: str, expiry: Optional[datetime] = None):
        if not token:
            raise ValueError("token must be a non-empty string")
        self.__token = AccessToken(token=token, expiry=expiry)

    async def get_access_token(self) -> AccessToken:
        return self.__token


class EmulatorCredentialProvider(CredentialProvider):
    """Credentials accepted by the local database emulator"""

    async def get_access_token(self) -> AccessToken:
        return AccessToken(token=EMULATOR_TOKEN)


class CachingCredentialProvider(CredentialProvider):
    """
    Caches the token returned by an async ``fetch`` callable and refreshes it
    once it is within ``leeway`` of its expiry.

    Concurrent callers share a single refresh.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[AccessToken]],
        leeway: timedelta = timedelta(minutes=5)
    ):
        self.__fetch = fetch
        self.__leeway = leeway
        self.__token: Optional[AccessToken] = None
        self.__lock = asyncio.Lock()

    async def get_access_token(self) -> AccessToken:
        token = self.__token
        if token is not None and not token.is_expired(self.__leeway):
            return token

        async with self.__lock:
            if self.__token is None or self.__token.is_expired(self.__leeway):
                try:
                    self.__token = await self.__fetch()
                except Exception as e:
                    logger.error(f"Failed to refresh access token: {e}")
                    raise
                logger.debug(f"Refreshed access token, expires at {self.__token.expiry}")
            return self.__token
