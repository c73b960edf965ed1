"""Relay error kinds and their JSON rendering."""

from typing import Optional


class RelayError(Exception):
    """Base error turned into a `{"error", "details"}` JSON response."""

    status_code = 500

    def __init__(self, error: str, details: Optional[str] = None):
        super().__init__(details or error)
        self.error = error
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidRequest(RelayError):
    status_code = 400


class ServiceUnavailable(RelayError):
    status_code = 500


class UpstreamError(RelayError):
    """Upstream answered with a failure status or an unusable payload."""

    status_code = 500


class TransportError(UpstreamError):
    """The outbound call could not complete (connection error, timeout)."""
