from django.contrib import admin
from .models import Owner


@admin.register(Owner)
class OwnerAdmin(admin.ModelAdmin):
    list_display = ("id", "user")
    list_select_related = ("user",)
    search_fields = ("user__first_name", "user__last_name", "user__email", "user__document")
    raw_id_fields = ("user",)
