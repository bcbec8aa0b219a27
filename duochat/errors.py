"""Error types shared by services and routes.

Every error carries an HTTP status and a stable machine-readable code so the
routes can turn it into the ``{success: false, error, code}`` response body
without knowing which service raised it.
"""


class ApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    code = 'INTERNAL_ERROR'

    def __init__(self, message, code=None, status_code=None, details=None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_dict(self):
        body = {
            'success': False,
            'error': self.message,
            'code': self.code,
        }
        if self.details:
            body['details'] = self.details
        return body

    def __repr__(self):
        return f'<{type(self).__name__} {self.status_code} {self.code}: {self.message}>'


class ValidationError(ApiError):
    """Request failed validation. ``details`` maps field name to message."""

    status_code = 400
    code = 'INVALID_REQUEST'


class NotFoundError(ApiError):
    status_code = 404
    code = 'NOT_FOUND'


class ForbiddenError(ApiError):
    status_code = 403
    code = 'FORBIDDEN'


class PersistenceError(ApiError):
    """A database write or read failed."""

    status_code = 500
    code = 'DATABASE_ERROR'


class CacheError(ApiError):
    """Translation cache lookup or storage failed."""

    status_code = 500
    code = 'DATABASE_ERROR'


class TranslationAPIError(ApiError):
    """The translation provider rejected or failed a request.

    Codes: INVALID_INPUT, RATE_LIMIT, SERVICE_UNAVAILABLE, NETWORK_ERROR,
    INVALID_RESPONSE. The status code is passed through to the caller as is.
    """

    status_code = 500
    code = 'SERVICE_UNAVAILABLE'
