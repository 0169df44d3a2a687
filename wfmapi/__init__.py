"""
WFMApi - асинхронный клиент для Warframe.Market v2 API
Документация API: https://42bytes.notion.site/WFM-Api-v2-Documentation-5d987e4aa2f74b55a80db1a09932459d
"""

from .client import WFMApi
from .config import Config
from .exceptions import (
    WFMApiError,
    ValidationError,
    MissingAuthError,
    HTTPResponseError,
    AuthorizationError,
    NotFoundError,
    RateLimitError,
    ServerError,
    NoResponseError,
    UnknownError,
)

__version__ = "1.0.0"
__all__ = [
    "WFMApi",
    "Config",
    "WFMApiError",
    "ValidationError",
    "MissingAuthError",
    "HTTPResponseError",
    "AuthorizationError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "NoResponseError",
    "UnknownError",
]
