"""Error taxonomy shared by the relay and the HTTP layer."""

from __future__ import annotations


class ToneError(RuntimeError):
    """Base class for rewrite failures surfaced to callers."""

    status_code = 500


class InvalidInput(ToneError):
    """Raised when the request text is missing, empty, or not a string."""

    status_code = 400


class ServiceUnconfigured(ToneError):
    """Raised when no credential is configured for the completion service."""


class UpstreamError(ToneError):
    """Raised when the completion service call itself fails."""


class EmptyResponse(UpstreamError):
    """Raised when the completion service returns no usable text."""


class RewriteCancelled(ToneError):
    """Raised when an in-flight rewrite is cancelled by its caller."""

    status_code = 499
