"""
Application errors for clean degrade-or-fail handling.

Provider errors (unreachable source, missing credentials) are absorbed by the
aggregation layer and turned into fallback answers. InternalUsageError marks a
programming mistake (unknown operation, malformed arguments) and always reaches
the caller; the API maps it to 400.
"""


class InjuryInfoError(Exception):
    """Base class for all application errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ProviderError(InjuryInfoError):
    """Raised by a provider adapter. Carries the provider name."""

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(f"{provider}: {message}")


class ProviderUnavailableError(ProviderError):
    """Raised when a provider cannot be reached, answers with an error status, or returns unparseable data."""


class ConfigurationMissingError(ProviderError):
    """Raised when a provider adapter is constructed without a required credential."""

    def __init__(self, provider: str, setting: str) -> None:
        self.setting = setting
        super().__init__(provider, f"{setting} is required")


class InternalUsageError(InjuryInfoError):
    """Raised for an unknown operation or malformed arguments."""
