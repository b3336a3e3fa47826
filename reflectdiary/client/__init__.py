"""HTTP client and client-side state for the diary API."""

from reflectdiary.client.api_client import ApiClient, ApiError

__all__ = ["ApiClient", "ApiError"]
