from django.contrib import admin
from .models import Property, PropertyImage, PropertyType


class PropertyImageInline(admin.TabularInline):
    model = PropertyImage
    extra = 0
    fields = ("image", "uploaded_on")
    readonly_fields = ("uploaded_on",)


@admin.register(PropertyType)
class PropertyTypeAdmin(admin.ModelAdmin):
    list_display = ("id", "name")
    search_fields = ("name",)
    ordering = ("name",)


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "neighborhood",
        "address",
        "property_type",
        "owner",
        "price",
        "square_meters",
        "rooms",
        "stratum",
        "has_parking_lot",
        "is_available",
    )
    list_select_related = ("property_type", "owner__user")
    list_filter = ("property_type", "is_available", "has_parking_lot", "stratum")
    search_fields = (
        "neighborhood",
        "address",
        "remarks",
        "owner__user__first_name",
        "owner__user__last_name",
        "owner__user__document",
    )
    ordering = ("-id",)

    inlines = (PropertyImageInline,)


@admin.register(PropertyImage)
class PropertyImageAdmin(admin.ModelAdmin):
    list_display = ("id", "property", "image", "uploaded_on")
    list_select_related = ("property",)
    search_fields = ("property__neighborhood", "property__address")
    ordering = ("-uploaded_on",)
