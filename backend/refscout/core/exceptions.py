"""
Custom Exceptions

Exception classes raised inside the retrieval components. Each one is
caught at a recovery point in the pipeline; callers of the workflow never
see them.
"""
from typing import Optional


class RefScoutError(Exception):
    """Base exception for all application errors."""
    pass


# === Search Provider Errors ===

class ProviderError(RefScoutError):
    """Base exception for search provider errors."""
    def __init__(self, provider_name: str, message: str):
        self.provider_name = provider_name
        self.message = message
        super().__init__(f"{provider_name}: {message}")


class ProviderConfigError(ProviderError):
    """Provider credentials are missing."""
    def __init__(self, provider_name: str, setting: str):
        super().__init__(provider_name, f"{setting} is not set")
        self.setting = setting


class ProviderHTTPError(ProviderError):
    """Provider returned a non-success HTTP status."""
    def __init__(self, provider_name: str, status_code: int, detail: Optional[str] = None):
        msg = f"HTTP {status_code}"
        if detail:
            msg += f": {detail}"
        super().__init__(provider_name, msg)
        self.status_code = status_code


class ProviderAPIError(ProviderError):
    """Provider answered 200 but reported an error code in the body."""
    def __init__(self, provider_name: str, error_code: str, reason: Optional[str] = None):
        msg = f"API error {error_code}"
        if reason:
            msg += f": {reason}"
        super().__init__(provider_name, msg)
        self.error_code = error_code
        self.reason = reason


class ProviderParseError(ProviderError):
    """Provider response did not match any known shape."""
    def __init__(self, provider_name: str, detail: Optional[str] = None):
        msg = "Failed to parse response"
        if detail:
            msg += f": {detail}"
        super().__init__(provider_name, msg)
        self.detail = detail


class SearchTimeoutError(RefScoutError):
    """Aggregated search for one query exceeded its latency bound."""
    def __init__(self, query: str, timeout_seconds: float):
        self.query = query
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Search for '{query[:50]}' timed out after {timeout_seconds}s")


# === Content Extraction Errors ===

class ExtractionError(RefScoutError):
    """Base exception for full-content extraction errors."""
    def __init__(self, url: str, message: str):
        self.url = url
        self.message = message
        super().__init__(f"{url}: {message}")


class ReaderServiceError(ExtractionError):
    """Reader service returned a non-success status."""
    def __init__(self, url: str, status_code: int):
        super().__init__(url, f"Reader service returned HTTP {status_code}")
        self.status_code = status_code


# === Selection Errors ===

class SelectionError(RefScoutError):
    """Selection oracle failed or returned unusable data."""
    pass
