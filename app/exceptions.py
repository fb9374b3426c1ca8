from fastapi import status


class VerdictError(Exception):
    """
    Base class for every error the summarize pipeline reports to its caller.

    Each error carries the HTTP status code it maps to and a message which is
    rendered as ``{"error": message}`` in the response body.
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(VerdictError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class InputValidationError(VerdictError):
    status_code = status.HTTP_400_BAD_REQUEST


class MissingInputError(InputValidationError):
    pass


class InvalidFormatError(InputValidationError):
    pass


class AuthenticationError(VerdictError):
    """Raised when a collaborator rejects the configured credential."""
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, collaborator: str, env_name: str):
        super().__init__(f"Invalid {collaborator} API key. Please check your {env_name}")
        self.collaborator = collaborator
        self.env_name = env_name


class NotFoundError(VerdictError):
    status_code = status.HTTP_404_NOT_FOUND


class UpstreamError(VerdictError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
