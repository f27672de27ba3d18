"""Shared authentication utilities.

This module provides the JWT helpers and the decorator that gates the
profile endpoints, so every route authenticates the same way.
"""

from datetime import datetime, timedelta
from functools import wraps
from flask import request, current_app
import jwt

from skillexchange.errors import AuthError


def _get_secret_key():
    """Get JWT secret from Flask app config (single source of truth)."""
    return current_app.config['JWT_SECRET_KEY']


def generate_token(user):
    """Issue a signed HS256 token for a user."""
    payload = {
        'user_id': user.id,
        'email': user.email,
        'exp': datetime.utcnow() + timedelta(seconds=current_app.config['JWT_ACCESS_TOKEN_EXPIRES'])
    }
    return jwt.encode(payload, _get_secret_key(), algorithm='HS256')


def decode_token(auth_header):
    """Return the user_id carried by an Authorization header.

    Raises:
        AuthError: header missing, token expired or invalid
    """
    if not auth_header:
        raise AuthError('Token is missing')

    # Support both "Bearer <token>" and raw token formats
    token = auth_header.split(' ')[1] if ' ' in auth_header else auth_header

    try:
        payload = jwt.decode(token, _get_secret_key(), algorithms=['HS256'])
        return payload['user_id']
    except jwt.ExpiredSignatureError:
        raise AuthError('Token has expired')
    except (jwt.InvalidTokenError, KeyError):
        raise AuthError('Token is invalid')


def token_required(f):
    """
    Decorator to require valid JWT token.

    Extracts user_id from JWT token and passes it as the first argument
    to the decorated function.

    Usage:
        @bp.route('/protected')
        @token_required
        def protected_route(current_user_id):
            # current_user_id is extracted from JWT
            return success_response({'user_id': current_user_id})
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        current_user_id = decode_token(request.headers.get('Authorization'))
        return f(current_user_id, *args, **kwargs)
    return decorated
