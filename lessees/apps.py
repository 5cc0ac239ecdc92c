from django.apps import AppConfig


class LesseesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "lessees"
