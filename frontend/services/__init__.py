"""
Dashboard services.

Exports the HTTP client the dashboard uses to reach the task board API.
"""

from frontend.services.api import ApiClient, ApiError, ErrorKind, describe_error

__all__ = ["ApiClient", "ApiError", "ErrorKind", "describe_error"]
