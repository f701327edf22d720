from abc import ABC, abstractmethod

from rtdb_admin.core.entities.token import AccessToken


class CredentialProvider(ABC):
    @abstractmethod
    async def get_access_token(self) -> AccessToken:
        """Return a bearer token for the database and its expiry"""
        pass
