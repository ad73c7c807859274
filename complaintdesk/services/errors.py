"""
Service-layer exceptions, mapped to HTTP status codes by the routes
"""


class ServiceError(Exception):
    """Base class for expected business-rule failures"""
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    status_code = 400


class AuthenticationError(ServiceError):
    status_code = 401


class PermissionDenied(ServiceError):
    status_code = 403


class NotFoundError(ServiceError):
    status_code = 404
