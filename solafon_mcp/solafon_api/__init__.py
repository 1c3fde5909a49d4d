"""HTTP client wrappers for the Solafon API."""

from .client import (
    BOT_TOKEN_HEADER,
    SolafonApiClient,
    SolafonApiError,
    SolafonUnreachableError,
    default_client,
)

__all__ = [
    "BOT_TOKEN_HEADER",
    "SolafonApiClient",
    "SolafonApiError",
    "SolafonUnreachableError",
    "default_client",
]
