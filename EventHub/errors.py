"""
Domain errors for EventHub.

Services raise these; api.py turns them into the `{success, message}`
envelope with the matching HTTP status.
"""


class EventHubError(Exception):
    """Base class for every error a service raises on purpose."""
    status_code = 500
    public = True
    default_message = "Server Error"

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class NotFoundError(EventHubError):
    status_code = 404
    default_message = "Resource not found"


class ForbiddenError(EventHubError):
    status_code = 403
    default_message = "Not authorized to perform this action"


class ConflictError(EventHubError):
    status_code = 409
    default_message = "Resource already exists"


class ValidationError(EventHubError):
    status_code = 422
    default_message = "Validation failed"


class UpstreamParseError(EventHubError):
    """Completion reply could not be parsed into the expected shape."""
    status_code = 500
    public = False
    default_message = "Completion reply did not match the expected format"


class UpstreamUnavailableError(EventHubError):
    """Completion service call failed or timed out."""
    status_code = 500
    public = False
    default_message = "Completion service unavailable"
