class BackendApiError(Exception):
    """Any failure talking to the content backend (bad URL, transport, non-2xx)."""


class ContentNotFound(Exception):
    """The requested entity does not exist, or does not belong where the URL says."""


class UpstreamError(Exception):
    """The backend failed where it is not expected to, or broke its contract."""
