import builtins

from django.db import models
from django.utils import timezone

from lessees.models import Lessee
from owners.models import Owner
from properties.models import Property


class Contract(models.Model):
    owner = models.ForeignKey(Owner, on_delete=models.PROTECT, related_name="contracts")
    lessee = models.ForeignKey(Lessee, on_delete=models.PROTECT, related_name="contracts")
    property = models.ForeignKey(Property, on_delete=models.PROTECT, related_name="contracts")

    price = models.DecimalField(max_digits=18, decimal_places=2)
    remarks = models.TextField(blank=True, default="")
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    is_active = models.BooleanField(default=True)

    created_on = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-start_date", "-id"]
        indexes = [
            models.Index(fields=["is_active"], name="idx_contract_active"),
        ]

    def __str__(self):
        return f"Contract {self.pk} - {self.property} ({self.start_date:%Y-%m-%d} to {self.end_date:%Y-%m-%d})"

    # Rendered in settings.TIME_ZONE. `property` is the FK inside this class body.
    @builtins.property
    def start_date_local(self):
        return timezone.localtime(self.start_date)

    @builtins.property
    def end_date_local(self):
        return timezone.localtime(self.end_date)
