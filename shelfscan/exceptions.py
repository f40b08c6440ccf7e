"""Custom exceptions for shelfscan."""


class ShelfscanError(Exception):
    """Base class for all shelfscan exceptions."""

    pass


class ConfigError(ShelfscanError):
    """Raised when a supplier configuration is rejected at acceptance time."""

    def __init__(self, message: str, fields: list[str] | None = None):
        """Initialize configuration error.

        Args:
            message: Human readable description of the problem
            fields: Names of the offending configuration fields, if known

        """
        self.fields = fields or []
        super().__init__(message)


class FetchError(ShelfscanError):
    """Raised when a source document cannot be retrieved."""

    def __init__(self, url: str, reason: str, status_code: int | None = None):
        """Initialize fetch error.

        Args:
            url: URL that was being fetched
            reason: Short transport-level description of the failure
            status_code: HTTP status code received, if a response arrived at all

        """
        self.url = url
        self.reason = reason
        self.status_code = status_code
        status = f' (status={status_code})' if status_code is not None else ''
        super().__init__(f'Transport failure fetching {url}{status}: {reason}')


class ParseError(ShelfscanError):
    """Raised when a fetched document has no usable markup structure."""

    def __init__(self, reason: str):
        """Initialize parse error.

        Args:
            reason: Why the document could not be parsed

        """
        self.reason = reason
        super().__init__(f'Document could not be parsed: {reason}')
