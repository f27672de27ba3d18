"""Password reset tokens for the forgot-password flow."""

import hashlib
import secrets
from datetime import datetime, timedelta
from skillexchange import db


def hash_reset_token(token):
    return hashlib.sha256(token.encode('utf-8')).hexdigest()


class PasswordResetToken(db.Model):
    """A single-use reset token. Only the SHA-256 digest is stored."""

    __tablename__ = 'password_reset_tokens'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    token_hash = db.Column(db.String(64), unique=True, nullable=False, index=True)
    expires_at = db.Column(db.DateTime, nullable=False)
    used = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    user = db.relationship(
        'User',
        backref=db.backref('reset_tokens', lazy=True, cascade='all, delete-orphan')
    )

    @classmethod
    def issue(cls, user, expires_in_minutes=10):
        """
        Create a reset token for a user and return the raw value.
        Earlier unused tokens of the same user stop working.
        """
        cls.query.filter_by(user_id=user.id, used=False).update({'used': True})

        token = secrets.token_hex(32)
        db.session.add(cls(
            user_id=user.id,
            token_hash=hash_reset_token(token),
            expires_at=datetime.utcnow() + timedelta(minutes=expires_in_minutes)
        ))
        return token

    @classmethod
    def find_valid(cls, token):
        """Return the unused, unexpired record for a raw token, or None."""
        if not token:
            return None
        return cls.query.filter(
            cls.token_hash == hash_reset_token(token),
            cls.used.is_(False),
            cls.expires_at > datetime.utcnow()
        ).first()

    def __repr__(self):
        return f'<PasswordResetToken user_id={self.user_id} expires_at={self.expires_at}>'
