from logging.handlers import RotatingFileHandler
import os
from typing import Optional


class CustomRotatingFileHandler(RotatingFileHandler):
    """Size-rotating file handler that creates its log directory on demand"""

    def __init__(
        self,
        filename: str,
        max_bytes: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
        encoding: Optional[str] = "utf-8"
    ):
        directory = os.path.dirname(filename)
        if directory:
            os.makedirs(directory, exist_ok=True)
        super().__init__(
            filename,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding=encoding,
            delay=True
        )
