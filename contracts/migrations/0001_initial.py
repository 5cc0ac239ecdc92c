import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("owners", "0001_initial"),
        ("lessees", "0001_initial"),
        ("properties", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Contract",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("price", models.DecimalField(decimal_places=2, max_digits=18)),
                ("remarks", models.TextField(blank=True, default="")),
                ("start_date", models.DateTimeField()),
                ("end_date", models.DateTimeField()),
                ("is_active", models.BooleanField(default=True)),
                ("created_on", models.DateTimeField(auto_now_add=True)),
                ("lessee", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="contracts", to="lessees.lessee")),
                ("owner", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="contracts", to="owners.owner")),
                ("property", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="contracts", to="properties.property")),
            ],
            options={
                "ordering": ["-start_date", "-id"],
                "indexes": [models.Index(fields=["is_active"], name="idx_contract_active")],
            },
        ),
    ]
