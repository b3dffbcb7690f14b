class ApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    code = None
    default_message = "Server error"

    def __init__(self, message=None, details=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.details = details

    def to_dict(self):
        body = {"error": self.message}
        if self.code:
            body["code"] = self.code
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(ApiError):
    status_code = 400
    default_message = "Invalid request"


class ConflictError(ApiError):
    status_code = 400
    default_message = "User already exists"


class InvalidStateError(ApiError):
    status_code = 400
    default_message = "Booking is not in a valid state for this action"


class AuthenticationError(ApiError):
    status_code = 401
    default_message = "No token, authorization denied"


class InvalidCredentialsError(AuthenticationError):
    default_message = "Invalid credentials"


class TokenExpiredError(AuthenticationError):
    code = "token_expired"
    default_message = "Token has expired"


class InvalidTokenError(AuthenticationError):
    code = "token_invalid"
    default_message = "Token is not valid"


class AuthorizationError(ApiError):
    status_code = 403
    default_message = "Access denied"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Not found"


class InternalError(ApiError):
    status_code = 500
    default_message = "Server error"
