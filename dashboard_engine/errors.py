"""
Econ Dashboard — Errors
────────────────────────
  ValidationError   bad client input, always raised before any network call
  UpstreamError     one FRED/Yahoo request failed (non-2xx, network, bad JSON)
  InternalError     anything else, surfaced as 500 with the raw message
"""

from typing import Optional


class DashboardError(Exception):
    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(DashboardError):
    status_code = 400


class UpstreamError(DashboardError):
    status_code = 502

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class InternalError(DashboardError):
    status_code = 500
