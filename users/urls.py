# users/urls.py
from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from users.serializers import CustomTokenObtainPairSerializer
from . import views


class CustomTokenObtainPairView(TokenObtainPairView):
    serializer_class = CustomTokenObtainPairSerializer


urlpatterns = [
    path("", views.AccountView.as_view(), name="account"),
    path("me/", views.me, name="account_me"),
    path("roles/", views.roles_list, name="account_roles"),

    # Tokens
    path("token/", CustomTokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),

    # Password / email flows
    path("recover-password/", views.recover_password, name="recover_password"),
    path("reset-password/", views.reset_password, name="reset_password"),
    path("confirm-email/", views.confirm_email, name="confirm_email"),
    path("change-password/", views.change_password, name="change_password"),

    # Web client variants
    path("register-web/", views.register_web, name="register_web"),
    path("change-user-web/", views.change_user_web, name="change_user_web"),
    path("recover-password-web/", views.recover_password_web, name="recover_password_web"),
    path("change-password-web/", views.change_password_web, name="change_password_web"),
]
