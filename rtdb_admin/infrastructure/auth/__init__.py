from .credentials import (
    StaticTokenProvider,
    EmulatorCredentialProvider,
    CachingCredentialProvider,
)

__all__ = [
    "StaticTokenProvider",
    "EmulatorCredentialProvider",
    "CachingCredentialProvider",
]
