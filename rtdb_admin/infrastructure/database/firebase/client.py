from typing import Any, Dict, Optional, Tuple
from urllib.parse import parse_qs, urlparse

import aiohttp

from rtdb_admin.core.exceptions import DatabaseValidationError, SerializationError
from rtdb_admin.core.interfaces import CredentialProvider
from rtdb_admin.core.service import encode_json
from rtdb_admin.infrastructure.auth import EmulatorCredentialProvider
from rtdb_admin.utilities.monitoring import MonitoringFactory
from .http_client import HttpClient
from .reference import Reference

logger = MonitoringFactory.get_logger("client")

ALLOWED_HOST_SUFFIXES = (".firebaseio.com", ".firebasedatabase.app")
NO_OVERRIDE: Dict[str, Any] = {}


def encode_auth_override(auth_override: Any) -> Optional[str]:
    """
    Encode the auth variable override sent with every request.

    An empty dict means no override and yields None. ``None`` is encoded as
    ``"null"``, which makes requests unauthenticated.
    """
    if isinstance(auth_override, dict) and not auth_override:
        return None
    if auth_override is not None and not isinstance(auth_override, dict):
        raise DatabaseValidationError(
            f"auth override must be a dict or None: {auth_override!r}"
        )
    try:
        return encode_json(auth_override)
    except SerializationError as e:
        raise DatabaseValidationError(f"invalid auth override: {e}") from e


def parse_emulator_url(url: str, emulator_host: Optional[str] = None) -> Optional[Tuple[str, str]]:
    """
    Return ``(base_url, namespace)`` when ``url`` targets the local emulator.

    An ``http://host:port/?ns=name`` URL always does. An HTTPS database URL
    does when ``emulator_host`` is set; the namespace is then the first label
    of its host.
    """
    parsed = urlparse(url)
    if parsed.scheme == "http":
        namespaces = parse_qs(parsed.query).get("ns")
        if not parsed.netloc or not namespaces or len(namespaces) != 1 or not namespaces[0]:
            raise DatabaseValidationError(
                f"invalid emulator URL {url!r}: expected http://<host>:<port>/?ns=<namespace>"
            )
        return f"http://{parsed.netloc}", namespaces[0]

    if emulator_host:
        if "//" in emulator_host:
            raise DatabaseValidationError(
                f"invalid emulator host {emulator_host!r}: expected <host>:<port>"
            )
        return f"http://{emulator_host}", parsed.netloc.split(".")[0]
    return None


def validate_database_url(url: str) -> str:
    """Check a production database URL and return its ``https://<host>`` base."""
    parsed = urlparse(url)
    if parsed.scheme != "https":
        raise DatabaseValidationError(f"invalid database URL (incorrect scheme): {url!r}")
    host = parsed.hostname or ""
    if not host.endswith(ALLOWED_HOST_SUFFIXES):
        raise DatabaseValidationError(f"invalid database URL (incorrect host): {url!r}")
    return f"https://{parsed.netloc}"


class DatabaseClient:
    """
    Entry point to one Realtime Database instance.

    Holds the validated base URL, the encoded auth override and the HTTP
    transport shared by every Reference and Query created from it.

    Usage:
        async with DatabaseClient(url, credential) as client:
            ref = client.reference("users/peter")
            await ref.set({"age": 20})
    """

    def __init__(
        self,
        url: str,
        credential: Optional[CredentialProvider] = None,
        auth_override: Any = NO_OVERRIDE,
        timeout: Optional[float] = 30.0,
        pool_size: int = 10,
        emulator_host: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        if not url or not isinstance(url, str):
            raise DatabaseValidationError(f"database URL must be a non-empty string: {url!r}")

        override = encode_auth_override(auth_override)
        emulator = parse_emulator_url(url, emulator_host)
        params: Dict[str, str] = {}
        if emulator is not None:
            base_url, namespace = emulator
            params["ns"] = namespace
            credential = EmulatorCredentialProvider()
            logger.info(f"Connecting to database emulator at {base_url} (namespace {namespace})")
        else:
            base_url = validate_database_url(url)
            if credential is None:
                raise ValueError("a credential provider is required for a production database")

        self._http = HttpClient(
            base_url,
            credential,
            auth_override=override,
            params=params,
            timeout=timeout,
            pool_size=pool_size,
            session=session
        )

    @property
    def http(self) -> HttpClient:
        return self._http

    @property
    def base_url(self) -> str:
        return self._http.base_url

    @property
    def auth_override(self) -> Optional[str]:
        return self._http.auth_override

    def reference(self, path: str = "/") -> Reference:
        """Return a Reference to ``path``; leading, trailing and repeated slashes are ignored."""
        return Reference(self, path)

    def _rebind_url(self, url: str) -> None:
        """Point the client at another base URL. Only for tests against local servers."""
        self._http.base_url = url.rstrip("/")

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> "DatabaseClient":
        await self._http.create_pool()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"DatabaseClient(base_url={self.base_url!r})"
