# apps/core/exceptions.py


class ApiError(Exception):
    """Error that maps directly to a JSON error response."""
    status = 500
    default_message = 'Internal server error'

    def __init__(self, message=None, details=None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationFailed(ApiError):
    status = 400
    default_message = 'Invalid request'


class Unauthorized(ApiError):
    status = 401
    default_message = 'Unauthorized'


class Forbidden(ApiError):
    status = 403
    default_message = 'Forbidden'


class NotFound(ApiError):
    status = 404
    default_message = 'Not found'


class Conflict(ApiError):
    status = 409
    default_message = 'Conflict'
