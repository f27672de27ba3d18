"""Password reset routes: forgot-password and reset-password."""

import logging
from datetime import datetime

from flask import request, current_app

from skillexchange import db, limiter
from skillexchange.errors import AuthError, ValidationError
from skillexchange.models import User, PasswordResetToken
from skillexchange.routes.auth import auth_bp, json_body
from skillexchange.services.email import email_service
from skillexchange.utils import generate_token, success_response
from skillexchange.utils.validators import validate_email

logger = logging.getLogger(__name__)

RESET_TOKEN_HEADER = 'X-Reset-Token'


@auth_bp.route('/forgot-password', methods=['POST'])
@limiter.limit("3 per minute")
def forgot_password():
    """Issue a reset token and send it to the account's email."""
    data = json_body()

    email = data.get('email')
    if not validate_email(email):
        raise ValidationError.for_field('email', 'Please provide a valid email')

    user = User.query.filter_by(email=email.strip().lower()).first()

    if user and user.is_active:
        reset_token = PasswordResetToken.issue(
            user, expires_in_minutes=current_app.config['PASSWORD_RESET_EXPIRES_MINUTES']
        )
        db.session.commit()
        email_service.send_password_reset_email(
            to_email=user.email,
            name=user.name,
            reset_token=reset_token
        )
        logger.info(f"Password reset token issued for user_id: {user.id}")

    # Same answer for unknown emails so accounts cannot be enumerated
    return success_response(
        message='If an account with that email exists, a password reset link has been sent'
    )


@auth_bp.route('/reset-password', methods=['POST'])
@limiter.limit("5 per minute")
def reset_password():
    """Set a new password using the token from the reset email."""
    token = request.headers.get(RESET_TOKEN_HEADER)
    if not token:
        raise ValidationError.for_field(
            'token', f'Reset token is required in {RESET_TOKEN_HEADER} header'
        )

    data = json_body()
    password = data.get('password')
    if not isinstance(password, str) or len(password) < 6 or len(password) > 128:
        raise ValidationError.for_field('password', 'Password must be between 6 and 128 characters')

    reset_token = PasswordResetToken.find_valid(token)
    if not reset_token:
        raise ValidationError.for_field('token', 'Token is invalid or has expired')

    user = reset_token.user
    if not user.is_active:
        raise AuthError('Account is deactivated')

    user.set_password(password)
    reset_token.used = True
    user.updated_at = datetime.utcnow()
    db.session.commit()

    logger.info(f"Password reset for user_id: {user.id}")

    return success_response({'token': generate_token(user)}, message='Password reset successful')
