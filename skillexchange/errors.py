"""API error taxonomy and the application-wide error handlers.

Every error leaves the API in the same envelope the routes use for success:

    {"success": false, "message": "...", "errors": [...]}
"""

import logging

from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500
    default_message = 'Something went wrong'

    def __init__(self, message=None, errors=None, status_code=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.errors = errors or []
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        body = {'success': False, 'message': self.message}
        if self.errors:
            body['errors'] = self.errors
        return body


class ValidationError(APIError):
    """Malformed or out-of-range input. Raised before any query runs."""

    status_code = 400
    default_message = 'Validation errors'

    @classmethod
    def for_field(cls, field, message, value=None):
        error = {'field': field, 'message': message}
        if value is not None:
            error['value'] = value
        return cls(message, errors=[error])


class ConflictError(APIError):
    status_code = 400
    default_message = 'Resource already exists'


class AuthError(APIError):
    status_code = 401
    default_message = 'Not authorized'


class NotFoundError(APIError):
    status_code = 404
    default_message = 'Not found'


class InternalError(APIError):
    status_code = 500


def _is_production():
    return current_app.config.get('ENV_NAME') == 'production'


def register_error_handlers(app):
    """Funnel every error raised by a view through a single JSON renderer."""

    @app.errorhandler(APIError)
    def handle_api_error(error):
        if error.status_code >= 500:
            logger.error(f'{type(error).__name__}: {error.message}')
            _rollback()
            if _is_production():
                return jsonify({'success': False, 'message': InternalError.default_message}), error.status_code
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({
            'success': False,
            'message': error.description or error.name,
        }), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        logger.error(f'Unhandled error: {error}', exc_info=True)
        _rollback()
        message = InternalError.default_message if _is_production() else str(error)
        return jsonify({'success': False, 'message': message}), 500


def _rollback():
    from skillexchange import db
    db.session.rollback()
