"""
API module: REST front-end and its HTTP client.
"""

from .rest_api import RecordsRestAPI
from .client import RecordsClient, ServiceError

__all__ = [
    "RecordsRestAPI",
    "RecordsClient",
    "ServiceError",
]
