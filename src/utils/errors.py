"""
Error Types
Failures that map onto a specific HTTP status in the response envelope.
"""


class ReceptionistError(Exception):
    """Base error carrying the status code returned to the caller."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(ReceptionistError):
    """A required secret is missing from the environment."""

    status_code = 500


class UpstreamServiceError(ReceptionistError):
    """An external service reported an error."""

    status_code = 502


class WebhookError(UpstreamServiceError):
    """The booking webhook answered with a non-2xx status."""

    def __init__(self, message: str, response_status: int):
        super().__init__(message)
        self.response_status = response_status
