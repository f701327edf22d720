import dotenv
from functools import lru_cache
from typing import Any, Dict

from rtdb_admin.utils.database_settings import DatabaseSettings
from .monitoring.factory import MonitoringFactory

logger = MonitoringFactory.get_logger("config")


@lru_cache()
def get_database_settings() -> DatabaseSettings:
    """Load client settings from the environment and an optional .env file"""
    env_file = dotenv.find_dotenv(filename=".env", usecwd=True)
    if env_file:
        dotenv.load_dotenv(dotenv_path=env_file)
        logger.info(f"Configuration loaded from {env_file}")
    else:
        logger.info("Configuration loaded from environment variables")

    settings = DatabaseSettings()
    logger.info(f"Database URL: {settings.database_url}")
    if settings.database_emulator_host:
        logger.info(f"Using database emulator at {settings.database_emulator_host}")
    return settings


def get_monitoring_settings() -> Dict[str, Any]:
    """Get logging-specific settings"""
    settings = get_database_settings()
    return settings.model_dump(include={"log_level", "log_dir"})
