# users/scoping.py
from django.db.models import QuerySet

from .models import User


def is_manager(user) -> bool:
    return bool(getattr(user, "is_superuser", False) or getattr(user, "role", None) == User.MANAGER)


def owner_scope_qs(user, qs: QuerySet, owner_field: str = "owner", lessee_field: str | None = None) -> QuerySet:
    """
    Restrict a queryset to rows the user takes part in.
    Managers are exempt. Owners see rows under `owner_field`; lessees see rows
    under `lessee_field` when one is given, otherwise nothing.
    Fields can be paths, e.g. "property__owner".
    """
    if is_manager(user):
        return qs
    role = getattr(user, "role", None)
    if role == User.OWNER:
        return qs.filter(**{f"{owner_field}__user": user})
    if role == User.LESSEE and lessee_field:
        return qs.filter(**{f"{lessee_field}__user": user})
    return qs.none()


def can_act_for(user, target_user) -> bool:
    """Managers may act on anyone; everybody else only on themselves."""
    return is_manager(user) or getattr(user, "pk", None) == getattr(target_user, "pk", None)
