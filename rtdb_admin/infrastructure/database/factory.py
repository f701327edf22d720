from typing import Optional

import aiohttp

from rtdb_admin.core.interfaces import CredentialProvider
from rtdb_admin.infrastructure.auth import EmulatorCredentialProvider, StaticTokenProvider
from rtdb_admin.utilities.config import get_database_settings
from rtdb_admin.utilities.monitoring import MonitoringFactory
from rtdb_admin.utils import DatabaseSettings
from .firebase import DatabaseClient, NO_OVERRIDE


class DatabaseFactory:
    @staticmethod
    def create_client(
        settings: Optional[DatabaseSettings] = None,
        credential: Optional[CredentialProvider] = None,
        session: Optional[aiohttp.ClientSession] = None
    ) -> DatabaseClient:
        """
        Build a DatabaseClient from settings, loading them from the environment
        when none are given. Monitoring is configured from the same settings.
        """
        if settings is None:
            settings = get_database_settings()
        MonitoringFactory.configure(level=settings.log_level, log_dir=settings.log_dir)

        emulator_host = settings.database_emulator_host
        url = settings.database_url
        if not url:
            if not emulator_host:
                raise ValueError("database URL is required")
            url = f"http://{emulator_host}/?ns=default"

        if credential is None:
            if settings.access_token:
                credential = StaticTokenProvider(settings.access_token)
            elif emulator_host or url.startswith("http://"):
                credential = EmulatorCredentialProvider()
            else:
                raise ValueError("access token or credential provider is required")

        auth_override = settings.auth_variable_override
        return DatabaseClient(
            url,
            credential=credential,
            auth_override=NO_OVERRIDE if auth_override is None else auth_override,
            timeout=settings.timeout,
            pool_size=settings.pool_size,
            emulator_host=emulator_host,
            session=session
        )
