"""Outgoing account email.

Delivery is not wired to a mail provider: messages are written to the log so
a deployment can pick them up or replace this service.
"""

import logging

from flask import current_app

logger = logging.getLogger(__name__)


class EmailService:
    """Builds account emails and hands them to the log."""

    def send_email(self, to_email, subject, text_content):
        logger.info(f"Email to {to_email}: {subject}\n{text_content}")
        return True

    def send_password_reset_email(self, to_email, name, reset_token):
        """Send the reset link. The link carries the raw token."""
        minutes = current_app.config['PASSWORD_RESET_EXPIRES_MINUTES']
        reset_url = f"{current_app.config['FRONTEND_URL']}/reset-password/{reset_token}"
        text_content = (
            f"Hi {name},\n\n"
            f"Use this link to choose a new password: {reset_url}\n"
            f"The link expires in {minutes} minutes. "
            f"If you did not ask for a reset, ignore this email."
        )
        return self.send_email(to_email, 'Password reset', text_content)


email_service = EmailService()
