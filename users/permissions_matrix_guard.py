# users/permissions_matrix_guard.py
from rest_framework.permissions import BasePermission

"""
Role guard driven by users.permissions_matrix.PERMS.

  PermOwners = RoleActionPermission.for_module("owners")

  class OwnerViewSet(viewsets.ModelViewSet):
      permission_classes = [IsAuthenticated, PermOwners]
      # extra @action routes name their matrix op here
      action_ops = {"list_web": "list", "add_property_web": "manage_properties"}

  # or pin the op on a single route
  @action(..., permission_classes=[IsAuthenticated, PermOwners.action("by_email")])
"""

# ViewSet action → matrix op
VIEWSET_OPS = {
    "list": "list",
    "retrieve": "list",
    "create": "create",
    "update": "update",
    "partial_update": "update",
    "destroy": "delete",
}

# Plain APIViews and unnamed actions fall back to the HTTP verb
METHOD_OPS = {
    "GET": "list",
    "HEAD": "list",
    "OPTIONS": "list",
    "POST": "create",
    "PUT": "update",
    "PATCH": "update",
    "DELETE": "delete",
}

# Ops missing from the matrix are manager-only
DEFAULT_ROLE = "MANAGER"


class _RoleActionPermission(BasePermission):
    module: str = ""
    op: str | None = None
    message = "Your role is not allowed to perform this action."

    def resolve_op(self, request, view) -> str | None:
        if self.op:
            return self.op
        view_action = getattr(view, "action", None)
        if view_action:
            op = (getattr(view, "action_ops", None) or {}).get(view_action) or VIEWSET_OPS.get(view_action)
            if op:
                return op
        return METHOD_OPS.get(request.method.upper())

    def allowed_roles(self, op: str) -> set[str]:
        # late import so the matrix can be edited without touching the views
        from .permissions_matrix import PERMS

        roles = PERMS.get(self.module, {}).get(op)
        if roles is None:
            return {DEFAULT_ROLE}
        return set(roles)

    def has_permission(self, request, view):
        user = getattr(request, "user", None)
        if not user or not getattr(user, "is_authenticated", False):
            return False
        if getattr(user, "is_superuser", False):
            return True

        role = getattr(user, "role", None)
        op = self.resolve_op(request, view)
        if not role or not op:
            return False
        return role in self.allowed_roles(op)

    @classmethod
    def action(cls, op: str):
        """Same module, fixed op: PermOwners.action("by_email")."""
        if not cls.module:
            raise RuntimeError("action() needs a class built by RoleActionPermission.for_module().")
        return RoleActionPermission.for_module(cls.module, op=op)


class RoleActionPermission:
    """Builds a permission class bound to one matrix module (and optionally one op)."""

    @classmethod
    def for_module(cls, module: str, op: str | None = None):
        name = f"Perm_{module}_{op or 'auto'}"
        attrs = {
            "module": module,
            "op": op,
            "__doc__": f"Role guard for module='{module}', op='{op or 'auto'}'.",
        }
        return type(name, (_RoleActionPermission,), attrs)
