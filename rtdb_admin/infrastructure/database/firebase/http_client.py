import asyncio
import platform
import time
from typing import Any, Dict, Mapping, Optional

import aiohttp

from rtdb_admin.version import __version__
from rtdb_admin.core.entities import Response, validate_path
from rtdb_admin.core.exceptions import TransportError
from rtdb_admin.core.interfaces import CredentialProvider
from rtdb_admin.core.service import encode_json
from rtdb_admin.utilities.monitoring import MonitoringFactory

logger = MonitoringFactory.get_logger("http-client")

USER_AGENT = f"Firebase/HTTP/{__version__}/{platform.python_version()}/AdminPython"
AUTH_VARIABLE_OVERRIDE = "auth_variable_override"


class HttpClient:
    """
    Sends authorized JSON requests to the database REST endpoint.

    Every request carries the bearer token of the credential provider, the
    client User-Agent and, when configured, the auth variable override. The
    underlying ``aiohttp.ClientSession`` is created lazily and owned by this
    object unless one is passed in. Nothing is retried here.
    """

    def __init__(
        self,
        base_url: str,
        credential: CredentialProvider,
        auth_override: Optional[str] = None,
        params: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = 30.0,
        pool_size: int = 10,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Args:
            base_url: Scheme and host of the database, without trailing slash.
            credential: Source of bearer tokens.
            auth_override: JSON-encoded auth variable override, sent verbatim.
            params: Query parameters added to every request.
            timeout: Total timeout of one exchange in seconds.
            pool_size: Connection limit of the session created by this client.
            session: Externally managed session; it is not closed by close().
        """
        self.base_url = base_url
        self.auth_override = auth_override
        self.params: Dict[str, str] = dict(params or {})
        self.__credential = credential
        self.__timeout = aiohttp.ClientTimeout(total=timeout) if timeout else None
        self.__pool_size = pool_size
        self.__session = session
        self.__owns_session = session is None
        self.__lock = asyncio.Lock()

    @property
    def session(self) -> Optional[aiohttp.ClientSession]:
        return self.__session

    async def create_pool(self) -> aiohttp.ClientSession:
        """Create the connection pool if it doesn't exist"""
        if self.__session is None:
            async with self.__lock:
                if self.__session is None:
                    conn = aiohttp.TCPConnector(limit=self.__pool_size)
                    self.__session = aiohttp.ClientSession(
                        connector=conn,
                        timeout=self.__timeout
                    )
                    logger.debug("Created new connection pool")
        return self.__session

    async def close(self) -> None:
        """Close the connection pool"""
        if self.__session is not None and self.__owns_session:
            async with self.__lock:
                if self.__session is not None:
                    await self.__session.close()
                    self.__session = None
                    logger.debug("Closed connection pool")

    async def send(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, str]] = None
    ) -> Response:
        """
        Perform one HTTP exchange against ``<base_url><path>.json``.

        Raises:
            InvalidPathError: If the path contains reserved characters.
            SerializationError: If the body cannot be encoded as JSON.
            TransportError: If the request fails at the network level.
        """
        validate_path(path)

        request_headers = {"User-Agent": USER_AGENT}
        data = None
        if body is not None:
            data = encode_json(body)
            request_headers["Content-Type"] = "application/json"

        token = await self.__credential.get_access_token()
        request_headers["Authorization"] = f"Bearer {token.token}"
        if headers:
            request_headers.update(headers)

        query = dict(self.params)
        if self.auth_override is not None:
            query[AUTH_VARIABLE_OVERRIDE] = self.auth_override
        if params:
            query.update(params)

        url = f"{self.base_url}{path}.json"
        session = await self.create_pool()
        started = time.perf_counter()
        try:
            async with session.request(
                method,
                url,
                params=query or None,
                headers=request_headers,
                data=data
            ) as resp:
                raw = await resp.read()
                response = Response(status=resp.status, headers=resp.headers, body=raw)
        except asyncio.TimeoutError:
            logger.error(f"{method} {path} timed out")
            raise
        except aiohttp.ClientError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise TransportError(f"{method} {path} failed: {e}") from e

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            f"{method} {path} -> {response.status} in {elapsed_ms:.1f}ms",
            extra={"method": method, "path": path, "status": response.status, "elapsed_ms": elapsed_ms}
        )
        MonitoringFactory.record_metric(
            "rtdb.request.latency_ms",
            elapsed_ms,
            {"method": method, "status": str(response.status)}
        )
        return response
