from django.contrib import admin
from .models import Contract


@admin.register(Contract)
class ContractAdmin(admin.ModelAdmin):
    list_display = ("id", "property", "owner", "lessee", "price", "start_date", "end_date", "is_active")
    list_select_related = ("property", "owner__user", "lessee__user")
    list_filter = ("is_active",)
    search_fields = (
        "remarks",
        "property__address",
        "lessee__user__first_name",
        "lessee__user__last_name",
        "lessee__user__document",
    )
    date_hierarchy = "start_date"
    ordering = ("-start_date",)
