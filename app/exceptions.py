"""
Error types raised across the analysis pipeline.
"""


class CoverageServiceError(Exception):
    """Base class for all service errors."""


class ValidationError(CoverageServiceError):
    """Missing or malformed client input."""


class NotFoundError(CoverageServiceError):
    """The requested video does not exist upstream."""


class UpstreamError(CoverageServiceError):
    """Transport or HTTP failure talking to the metadata or transcript services."""


class TranscriptUnavailableError(UpstreamError):
    pass


class ProviderError(CoverageServiceError):
    """The LLM provider failed or returned a malformed response."""


class ConfigurationError(CoverageServiceError):
    """Unknown provider name or similar misconfiguration."""
