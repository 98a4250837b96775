"""
Core helpers package for the Vend API client.

This package contains the low-level pieces every request depends on:
settings, URL and header construction, the backoff policy, the status
classifier and the error types.  None of them perform network I/O.
"""

from .backoff import backoff_duration
from .status import ResponseClass, classify_status, response_check

__all__ = ["ResponseClass", "backoff_duration", "classify_status", "response_check"]
