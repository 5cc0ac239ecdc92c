# users/serializers.py
import logging
from datetime import datetime, timezone as dt_timezone

from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework_simplejwt.tokens import AccessToken
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed, ValidationError
from .models import User, ROLE_ID_OWNER, ROLE_ID_LESSEE

logger = logging.getLogger(__name__)


class UserResponseSerializer(serializers.ModelSerializer):
    phone = serializers.CharField(source="phone_number", read_only=True)
    full_name = serializers.ReadOnlyField()
    full_name_with_document = serializers.ReadOnlyField()

    class Meta:
        model = User
        fields = [
            "id",
            "document",
            "first_name",
            "last_name",
            "address",
            "email",
            "phone",
            "full_name",
            "full_name_with_document",
        ]
        read_only_fields = fields


# Owner / Lessee / Manager rows share this shape: {id, user}
class ProfileSummarySerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    user = UserResponseSerializer(read_only=True)


# ---------- Request DTOs ----------

class EditUserRequestSerializer(serializers.Serializer):
    id = serializers.IntegerField(required=False)
    email = serializers.EmailField(max_length=100)
    document = serializers.CharField(max_length=20)
    first_name = serializers.CharField(max_length=50)
    last_name = serializers.CharField(max_length=50)
    address = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")


class AddUserRequestSerializer(EditUserRequestSerializer):
    password = serializers.CharField(min_length=6, max_length=20, write_only=True)
    role_id = serializers.ChoiceField(
        choices=[(ROLE_ID_OWNER, "Owner"), (ROLE_ID_LESSEE, "Lessee")],
        required=False,
        default=ROLE_ID_OWNER,
    )


class EmailRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()


class ChangePasswordRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    old_password = serializers.CharField(min_length=6, max_length=20)
    new_password = serializers.CharField(min_length=6, max_length=20)

    def validate(self, attrs):
        if attrs["old_password"] == attrs["new_password"]:
            raise ValidationError({"new_password": "The new password must be different from the current one."})
        return attrs


class ResetPasswordRequestSerializer(serializers.Serializer):
    token = serializers.CharField()
    password = serializers.CharField(min_length=6, max_length=20)


class ConfirmEmailRequestSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
    token = serializers.CharField()


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Login with {email, password}. Older mobile builds post {username, password},
    so both keys are read. Accounts whose email was never confirmed are refused.
    """
    username_field = "email"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["email"] = serializers.CharField(required=False, allow_blank=True, write_only=True)
        self.fields["username"] = serializers.CharField(required=False, allow_blank=True, write_only=True)

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        for claim in ("role", "role_id", "email"):
            token[claim] = getattr(user, claim)
        return token

    def validate(self, attrs):
        login = (attrs.get("email") or attrs.get("username") or "").strip().lower()
        if not login:
            raise ValidationError({"email": "This field is required."})

        data = super().validate({"email": login, "password": attrs["password"]})

        if not self.user.email_confirmed:
            logger.warning("Login refused for user %s: email not confirmed", self.user.pk)
            raise AuthenticationFailed("The email has not been confirmed.", code="email_not_confirmed")

        expires = datetime.fromtimestamp(AccessToken(data["access"])["exp"], tz=dt_timezone.utc)
        data.update(
            token=data["access"],
            expiration=expires.isoformat(),
            user_id=self.user.pk,
            role=self.user.role,
            role_id=self.user.role_id,
            is_success=True,
        )
        return data
