"""
vend_api package
----------------

Client for the Vend point-of-sale API 2.0.  Importing ``vend_api``
exposes the client classes, the credentials model and the error types;
the FastAPI facade lives in :mod:`vend_api.main` and the command line
entry point in :mod:`vend_api.cli`.
"""

from .clients.http_client import VendHTTPClient
from .clients.vend_client import RESOURCES, VendClient
from .core.errors import (
    VendAuthError,
    VendCancelledError,
    VendCursorError,
    VendDecodeError,
    VendError,
    VendFatalStatusError,
    VendGatewayError,
    VendNotFoundError,
    VendRetryExhaustedError,
)
from .schemas.auth import VendCredentials

__version__ = "0.1.0"

__all__ = [
    "RESOURCES",
    "VendAuthError",
    "VendCancelledError",
    "VendClient",
    "VendCredentials",
    "VendCursorError",
    "VendDecodeError",
    "VendError",
    "VendFatalStatusError",
    "VendGatewayError",
    "VendHTTPClient",
    "VendNotFoundError",
    "VendRetryExhaustedError",
]
