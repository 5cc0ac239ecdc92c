from django.contrib import admin
from .models import AccountToken, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("id", "email", "first_name", "last_name", "document", "role", "email_confirmed", "is_active")
    list_filter = ("role", "email_confirmed", "is_active", "is_staff")
    search_fields = ("email", "first_name", "last_name", "document")
    ordering = ("first_name", "last_name")

    # passwords are changed through the account endpoints
    readonly_fields = ("password", "last_login", "created_at")
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Profile", {"fields": ("first_name", "last_name", "document", "address", "phone_number", "role")}),
        ("Status", {"fields": ("email_confirmed", "is_active", "is_staff", "is_superuser", "last_login", "created_at")}),
    )


@admin.register(AccountToken)
class AccountTokenAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "purpose", "expires_at", "used", "created_at")
    list_select_related = ("user",)
    list_filter = ("purpose", "used")
    search_fields = ("user__email",)
    ordering = ("-created_at",)
