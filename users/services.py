"""
Account workflows shared by the mobile and web endpoints and by the
owner/lessee/manager profile services.
"""
import logging

from django.conf import settings
from django.db import transaction

from common.exceptions import BusinessRuleError, DuplicateEmailError, NotFoundError
from common.mail import send_confirmation_email, send_password_reset_email
from lessees.models import Lessee
from managers.models import Manager
from owners.models import Owner

from .models import AccountToken, User, ROLE_ID_LESSEE

logger = logging.getLogger(__name__)

PROFILE_MODELS = {
    User.OWNER: Owner,
    User.LESSEE: Lessee,
    User.MANAGER: Manager,
}


def role_for(role_id) -> str:
    return User.LESSEE if role_id == ROLE_ID_LESSEE else User.OWNER


def get_user_by_email(email: str) -> User:
    try:
        return User.objects.get(email__iexact=(email or "").strip())
    except User.DoesNotExist:
        raise NotFoundError("User not found.")


@transaction.atomic
def register_user(data: dict, role: str, send_confirmation: bool = True):
    """
    Create the identity record plus the matching profile row.
    `data` is the validated AddUserRequest. Returns the profile.
    """
    email = data["email"].strip().lower()
    if User.objects.filter(email__iexact=email).exists():
        raise DuplicateEmailError()

    user = User.objects.create_user(
        email=email,
        password=data["password"],
        first_name=data["first_name"],
        last_name=data["last_name"],
        document=data["document"],
        address=data.get("address", ""),
        phone_number=data.get("phone", ""),
        role=role,
    )
    profile = PROFILE_MODELS[role].objects.create(user=user)
    logger.info("Registered %s user %s (profile %s)", role, user.pk, profile.pk)

    if send_confirmation:
        token = AccountToken.issue(user, AccountToken.CONFIRM_EMAIL, settings.ACCOUNT_TOKEN_TTL_MINUTES)
        send_confirmation_email(user, token)
    return profile


def update_user(user: User, data: dict) -> User:
    """Copy the EditUserRequest fields onto the user. Email changes are checked for clashes."""
    email = (data.get("email") or user.email).strip().lower()
    if email != user.email and User.objects.filter(email__iexact=email).exclude(pk=user.pk).exists():
        raise DuplicateEmailError()

    user.email = email
    user.first_name = data.get("first_name", user.first_name)
    user.last_name = data.get("last_name", user.last_name)
    user.document = data.get("document", user.document)
    user.address = data.get("address", user.address)
    user.phone_number = data.get("phone", user.phone_number)
    user.save()
    logger.info("Updated user %s", user.pk)
    return user


@transaction.atomic
def delete_profile(profile) -> None:
    """Profiles own their user row; removing one removes both."""
    user = profile.user
    profile.delete()
    user.delete()
    logger.info("Deleted %s profile and user %s", type(profile).__name__.lower(), user.pk)


def recover_password(email: str) -> AccountToken:
    try:
        user = User.objects.get(email__iexact=(email or "").strip())
    except User.DoesNotExist:
        raise BusinessRuleError("This email is not assigned to any user.")

    token = AccountToken.issue(user, AccountToken.RESET_PASSWORD, settings.ACCOUNT_TOKEN_TTL_MINUTES)
    send_password_reset_email(user, token)
    return token


def _consume(purpose: str, raw_token: str, user_id=None) -> AccountToken:
    qs = AccountToken.objects.select_related("user").filter(purpose=purpose, token=raw_token, used=False)
    if user_id is not None:
        qs = qs.filter(user_id=user_id)
    token = qs.first()
    if token is None:
        raise BusinessRuleError("Invalid token.")
    if token.is_expired():
        raise BusinessRuleError("Token expired.")
    if not token.mark_used():
        raise BusinessRuleError("Invalid token.")
    return token


@transaction.atomic
def reset_password(raw_token: str, new_password: str) -> User:
    token = _consume(AccountToken.RESET_PASSWORD, raw_token)
    user = token.user
    user.set_password(new_password)
    user.save(update_fields=["password"])
    logger.info("Password reset for user %s", user.pk)
    return user


@transaction.atomic
def confirm_email(user_id: int, raw_token: str) -> User:
    token = _consume(AccountToken.CONFIRM_EMAIL, raw_token, user_id=user_id)
    user = token.user
    user.email_confirmed = True
    user.save(update_fields=["email_confirmed"])
    logger.info("Email confirmed for user %s", user.pk)
    return user


def change_password(email: str, old_password: str, new_password: str) -> User:
    user = get_user_by_email(email)
    if not user.check_password(old_password):
        raise BusinessRuleError("The current password is incorrect.")
    user.set_password(new_password)
    user.save(update_fields=["password"])
    logger.info("Password changed for user %s", user.pk)
    return user
