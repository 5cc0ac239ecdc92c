import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("owners", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PropertyType",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=50, unique=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Property",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("neighborhood", models.CharField(max_length=50)),
                ("address", models.CharField(max_length=50)),
                ("latitude", models.FloatField(default=0)),
                ("longitude", models.FloatField(default=0)),
                ("price", models.DecimalField(decimal_places=2, max_digits=18)),
                ("square_meters", models.PositiveIntegerField()),
                ("rooms", models.PositiveIntegerField()),
                ("stratum", models.PositiveIntegerField()),
                ("has_parking_lot", models.BooleanField(default=False)),
                ("is_available", models.BooleanField(default=True)),
                ("remarks", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("owner", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="properties", to="owners.owner")),
                ("property_type", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="properties", to="properties.propertytype")),
            ],
            options={
                "ordering": ["-id"],
                "verbose_name_plural": "properties",
                "indexes": [models.Index(fields=["is_available"], name="idx_property_available")],
            },
        ),
        migrations.CreateModel(
            name="PropertyImage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("image", models.FileField(upload_to="properties/")),
                ("uploaded_on", models.DateTimeField(auto_now_add=True)),
                ("property", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="property_images", to="properties.property")),
            ],
            options={
                "ordering": ["id"],
            },
        ),
    ]
