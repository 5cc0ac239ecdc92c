# users/permissions_matrix.py
# Role matrix per API module.
# Mapping rules:
# - "list"   => list / retrieve / read-only web actions
# - "create" / "update" / "delete" => write operations
# - any other key is a named custom op used by @action endpoints
# Superusers bypass the matrix entirely (see permissions_matrix_guard).

MANAGER = "MANAGER"
OWNER = "OWNER"
LESSEE = "LESSEE"

ALL_ROLES = [MANAGER, OWNER, LESSEE]

PERMS = {
    # --- People ---
    "owners": {
        "list":   [MANAGER],
        "create": [MANAGER],
        "update": [MANAGER],
        "delete": [MANAGER],
        # mobile home screen: owner or lessee looks itself up by email
        "by_email": ALL_ROLES,
        "available_properties": ALL_ROLES,
        # web owner screens manage properties/images/contracts through the owner
        "manage_properties": [MANAGER],
        "manage_contracts": [MANAGER],
    },

    "lessees": {
        "list":   [MANAGER],
        "create": [MANAGER],
        "update": [MANAGER],
        "delete": [MANAGER],
        "manage_contracts": [MANAGER],
    },

    "managers": {
        "list":   [MANAGER],
        "create": [MANAGER],
        "update": [MANAGER],
        "delete": [MANAGER],
    },

    # --- Inventory ---
    "properties": {
        # queryset scoping decides which rows each role sees
        "list":   ALL_ROLES,
        "create": [MANAGER, OWNER],
        "update": [MANAGER, OWNER],
        "delete": [MANAGER, OWNER],
        "images": [MANAGER, OWNER],
    },

    "property_types": {
        "list":   ALL_ROLES,
        "create": [MANAGER],
        "update": [MANAGER],
        "delete": [MANAGER],
    },

    # --- Leasing ---
    "contracts": {
        "list":   ALL_ROLES,
        "create": [MANAGER],
        "update": [MANAGER],
        "delete": [MANAGER],
    },
}
