"""Custom exception hierarchy for radio-browser endpoint discovery."""


class DiscoveryError(Exception):
    """Base exception for all discovery errors."""


class ConfigError(DiscoveryError):
    """Invalid or missing configuration."""


class ResolutionError(DiscoveryError):
    """The service DNS name could not be resolved to any address."""

    def __init__(self, message: str, name: str | None = None):
        super().__init__(message)
        self.name = name


class StatsClientError(DiscoveryError):
    """Error fetching server statistics from one candidate endpoint."""

    def __init__(self, message: str, status_code: int | None = None, response_body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
