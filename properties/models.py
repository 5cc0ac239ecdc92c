import builtins

from django.conf import settings
from django.db import models

from owners.models import Owner


class PropertyType(models.Model):
    name = models.CharField(max_length=50, unique=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class Property(models.Model):
    # ---- Core ----
    owner = models.ForeignKey(
        Owner, on_delete=models.PROTECT, related_name="properties"
    )
    property_type = models.ForeignKey(
        PropertyType, on_delete=models.PROTECT, related_name="properties"
    )

    # ---- Location ----
    neighborhood = models.CharField(max_length=50)
    address = models.CharField(max_length=50)
    latitude = models.FloatField(default=0)
    longitude = models.FloatField(default=0)

    # ---- Configuration ----
    price = models.DecimalField(max_digits=18, decimal_places=2)
    square_meters = models.PositiveIntegerField()
    rooms = models.PositiveIntegerField()
    stratum = models.PositiveIntegerField()
    has_parking_lot = models.BooleanField(default=False)
    is_available = models.BooleanField(default=True)
    remarks = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-id"]
        verbose_name_plural = "properties"
        indexes = [
            models.Index(fields=["is_available"], name="idx_property_available"),
        ]

    def __str__(self):
        return f"{self.neighborhood} - {self.address}"

    @property
    def first_image(self) -> str:
        # Uses the prefetched list when present
        images = list(self.property_images.all())
        if not images:
            return settings.PROPERTY_NO_IMAGE_URL
        return images[0].image_url


class PropertyImage(models.Model):
    property = models.ForeignKey(
        Property, on_delete=models.CASCADE, related_name="property_images"
    )
    image = models.FileField(upload_to="properties/")
    uploaded_on = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"Image {self.pk} - Property: {self.property_id}"

    # `property` is the FK inside this class body
    @builtins.property
    def image_url(self) -> str:
        return self.image.url if self.image else ""
