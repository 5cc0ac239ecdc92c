import secrets
from datetime import timedelta

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone


# Role ids sent by the mobile and web registration forms
ROLE_ID_OWNER = 1
ROLE_ID_LESSEE = 2


class UserManager(BaseUserManager):
    """
    Email is the login identifier.
    Includes create_user/create_superuser to keep Django's createsuperuser flow working.
    """

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Users must have an email")
        email = self.normalize_email(email).strip().lower()
        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("email_confirmed", True)
        extra_fields.setdefault("role", User.MANAGER)
        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    MANAGER = "MANAGER"
    OWNER = "OWNER"
    LESSEE = "LESSEE"

    ROLE_CHOICES = [
        (MANAGER, "Manager"),
        (OWNER, "Owner"),
        (LESSEE, "Lessee"),
    ]

    # Auth + identity
    email = models.EmailField(max_length=100, unique=True, db_index=True)
    first_name = models.CharField(max_length=50)
    last_name = models.CharField(max_length=50)
    document = models.CharField(max_length=20)
    address = models.CharField(max_length=100, blank=True, default="")
    phone_number = models.CharField(max_length=50, blank=True, default="")

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=LESSEE)

    # Login is refused until the emailed link is followed
    email_confirmed = models.BooleanField(default=False)

    # Django flags
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS: list[str] = ["first_name", "last_name", "document"]

    objects = UserManager()

    class Meta:
        ordering = ["first_name", "last_name"]
        indexes = [
            models.Index(fields=["role"], name="idx_user_role"),
            models.Index(fields=["document"], name="idx_user_document"),
            models.Index(fields=["created_at"], name="idx_user_created_at"),
        ]

    def __str__(self):
        return f"{self.full_name} ({self.email})"

    # Normalize email for consistency
    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def full_name_with_document(self) -> str:
        return f"{self.first_name} {self.last_name} - {self.document}"

    @property
    def role_id(self) -> int | None:
        return {self.OWNER: ROLE_ID_OWNER, self.LESSEE: ROLE_ID_LESSEE}.get(self.role)


class AccountToken(models.Model):
    """
    One-time token for the email confirmation and password reset links.
    - Issue with AccountToken.issue(user, purpose) which returns a new token row.
    - Valid while not used and not expired.
    """
    CONFIRM_EMAIL = "confirm_email"
    RESET_PASSWORD = "reset_password"
    PURPOSE_CHOICES = [
        (CONFIRM_EMAIL, "Confirm email"),
        (RESET_PASSWORD, "Reset password"),
    ]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="account_tokens")
    purpose = models.CharField(max_length=20, choices=PURPOSE_CHOICES)
    token = models.CharField(max_length=128, unique=True, db_index=True)
    expires_at = models.DateTimeField()
    used = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=["expires_at"], name="idx_acctoken_expires_at"),
            models.Index(fields=["purpose", "used"], name="idx_acctoken_purpose_used"),
        ]

    def __str__(self):
        return f"AccountToken(user={self.user_id}, purpose={self.purpose}, used={self.used})"

    @classmethod
    def issue(cls, user, purpose: str, ttl_minutes: int = 60) -> "AccountToken":
        return cls.objects.create(
            user=user,
            purpose=purpose,
            token=secrets.token_urlsafe(32),
            expires_at=timezone.now() + timedelta(minutes=ttl_minutes),
        )

    def is_expired(self) -> bool:
        return timezone.now() >= self.expires_at

    def mark_used(self) -> bool:
        """Flip `used` in one UPDATE; False when another request already consumed it."""
        claimed = type(self).objects.filter(pk=self.pk, used=False).update(used=True)
        self.used = True
        return bool(claimed)
