from __future__ import annotations

import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import BusinessRuleError, NotFoundError
from common.responses import envelope, ok, web_action

from . import services
from .models import User, ROLE_ID_OWNER, ROLE_ID_LESSEE
from .scoping import can_act_for, is_manager
from .serializers import (
    AddUserRequestSerializer,
    ChangePasswordRequestSerializer,
    ConfirmEmailRequestSerializer,
    EditUserRequestSerializer,
    EmailRequestSerializer,
    ResetPasswordRequestSerializer,
    UserResponseSerializer,
)

logger = logging.getLogger(__name__)

REGISTERED_MESSAGE = "A confirmation email was sent. Please confirm your account and log into the App."
PASSWORD_CHANGED_MESSAGE = "The password was changed successfully!"
RECOVER_MESSAGE = "An email with instructions to change the password was sent."
OWN_ACCOUNT_MESSAGE = "You can only change your own account."


def _ensure_can_act_for(request, user: User) -> None:
    if not can_act_for(request.user, user):
        raise PermissionDenied(OWN_ACCOUNT_MESSAGE)


class AccountView(APIView):
    """
    POST /api/account/  register (public)
    PUT  /api/account/  update the profile found by email (bearer)
    """

    def get_permissions(self):
        if self.request.method == "POST":
            return [AllowAny()]
        return [IsAuthenticated()]

    def post(self, request):
        ser = AddUserRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        services.register_user(ser.validated_data, services.role_for(ser.validated_data["role_id"]))
        return Response(envelope(True, REGISTERED_MESSAGE))

    def put(self, request):
        ser = EditUserRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        user = services.get_user_by_email(ser.validated_data["email"])
        _ensure_can_act_for(request, user)
        user = services.update_user(user, ser.validated_data)
        return Response(UserResponseSerializer(user).data)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def me(request):
    return Response(UserResponseSerializer(request.user).data)


@api_view(["GET"])
@permission_classes([AllowAny])
def roles_list(request):
    # Registration combo: [{"id": 1, "name": "Owner"}, {"id": 2, "name": "Lessee"}]
    return Response([
        {"id": ROLE_ID_OWNER, "name": "Owner"},
        {"id": ROLE_ID_LESSEE, "name": "Lessee"},
    ])


@api_view(["POST"])
@permission_classes([AllowAny])
def recover_password(request):
    ser = EmailRequestSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    services.recover_password(ser.validated_data["email"])
    return Response(envelope(True, RECOVER_MESSAGE))


@api_view(["POST"])
@permission_classes([AllowAny])
def reset_password(request):
    ser = ResetPasswordRequestSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    services.reset_password(ser.validated_data["token"], ser.validated_data["password"])
    return Response(envelope(True, "Password reset successful."))


@api_view(["POST"])
@permission_classes([AllowAny])
def confirm_email(request):
    ser = ConfirmEmailRequestSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    services.confirm_email(ser.validated_data["user_id"], ser.validated_data["token"])
    return Response(envelope(True, "Email confirmed. You can now log in."))


@api_view(["POST"])
@permission_classes([IsAuthenticated])
def change_password(request):
    ser = ChangePasswordRequestSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    data = ser.validated_data
    _ensure_can_act_for(request, services.get_user_by_email(data["email"]))
    services.change_password(data["email"], data["old_password"], data["new_password"])
    return Response(envelope(True, PASSWORD_CHANGED_MESSAGE))


# ---------- Web (SPA) variants: always HTTP 200, outcome in the envelope ----------

@api_view(["POST"])
@permission_classes([AllowAny])
@web_action
def register_web(request):
    ser = AddUserRequestSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    profile = services.register_user(ser.validated_data, services.role_for(ser.validated_data["role_id"]))
    return ok(UserResponseSerializer(profile.user).data, REGISTERED_MESSAGE)


@api_view(["POST"])
@permission_classes([IsAuthenticated])
@web_action
def change_user_web(request):
    ser = EditUserRequestSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    data = ser.validated_data

    if data.get("id"):
        user = User.objects.filter(pk=data["id"]).first()
    else:
        user = User.objects.filter(email__iexact=data["email"]).first()
    if user is None:
        raise NotFoundError("User not found.")
    if not can_act_for(request.user, user):
        raise BusinessRuleError(OWN_ACCOUNT_MESSAGE)

    user = services.update_user(user, data)
    return ok(UserResponseSerializer(user).data, "User updated.")


@api_view(["POST"])
@permission_classes([AllowAny])
@web_action
def recover_password_web(request):
    ser = EmailRequestSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    services.recover_password(ser.validated_data["email"])
    return ok(message=RECOVER_MESSAGE)


@api_view(["POST"])
@permission_classes([IsAuthenticated])
@web_action
def change_password_web(request):
    ser = ChangePasswordRequestSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    data = ser.validated_data
    if not is_manager(request.user) and request.user.email != data["email"].lower():
        raise BusinessRuleError(OWN_ACCOUNT_MESSAGE)
    services.change_password(data["email"], data["old_password"], data["new_password"])
    return ok(message=PASSWORD_CHANGED_MESSAGE)
