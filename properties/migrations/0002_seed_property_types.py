from django.db import migrations

DEFAULT_TYPES = ("Apartment", "House", "Business")


def seed_types(apps, schema_editor):
    PropertyType = apps.get_model("properties", "PropertyType")
    for name in DEFAULT_TYPES:
        PropertyType.objects.get_or_create(name=name)


def unseed_types(apps, schema_editor):
    PropertyType = apps.get_model("properties", "PropertyType")
    PropertyType.objects.filter(name__in=DEFAULT_TYPES, properties__isnull=True).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("properties", "0001_initial"),
    ]
    operations = [
        migrations.RunPython(seed_types, unseed_types),
    ]
