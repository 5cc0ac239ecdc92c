"""
Outgoing account emails. Plain text only; the link points at the web client.
"""
import logging

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


def _link(path: str, **params) -> str:
    query = "&".join(f"{k}={v}" for k, v in params.items())
    return f"{settings.FRONTEND_BASE_URL}/{path}?{query}"


def send_confirmation_email(user, token) -> None:
    link = _link("account/confirm-email", user_id=user.pk, token=token.token)
    body = (
        f"Hello {user.full_name},\n\n"
        "Please confirm your MyLeasing account by opening this link:\n"
        f"{link}\n"
    )
    send_mail("MyLeasing - Email confirmation", body, settings.DEFAULT_FROM_EMAIL, [user.email])
    logger.info("Confirmation email sent to user %s", user.pk)


def send_password_reset_email(user, token) -> None:
    link = _link("account/reset-password", token=token.token)
    body = (
        f"Hello {user.full_name},\n\n"
        "To reset your MyLeasing password open this link:\n"
        f"{link}\n\n"
        f"The link expires in {settings.ACCOUNT_TOKEN_TTL_MINUTES} minutes.\n"
    )
    send_mail("MyLeasing - Password reset", body, settings.DEFAULT_FROM_EMAIL, [user.email])
    logger.info("Password reset email sent to user %s", user.pk)
