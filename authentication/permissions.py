from rest_framework import permissions
from rest_framework.exceptions import PermissionDenied

# Role constants
ADMIN = 'admin'
MANAGER = 'manager'
STAFF = 'staff'
KITCHEN_STAFF = 'kitchen_staff'

ALL_ROLES = (ADMIN, MANAGER, STAFF, KITCHEN_STAFF)
MANAGEMENT = (ADMIN, MANAGER)
FRONT_OF_HOUSE = (ADMIN, MANAGER, STAFF)


def authorize(principal, allowed_roles):
    """
    Raise PermissionDenied unless the principal holds one of the allowed roles
    """
    role = getattr(principal, 'role', None)
    if role not in allowed_roles:
        raise PermissionDenied(f"Role '{role}' is not allowed to perform this action")
    return principal


class HasRole(permissions.BasePermission):
    """
    Permission to only allow users whose role is in allowed_roles
    """
    allowed_roles = ALL_ROLES

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        authorize(request.user, self.allowed_roles)
        return True


def allow_roles(*roles):
    """
    Build a HasRole permission class for the given roles
    """
    return type(f"Allow{''.join(role.title().replace('_', '') for role in roles)}", (HasRole,), {
        'allowed_roles': tuple(roles),
    })


IsAdmin = allow_roles(ADMIN)
IsManagement = allow_roles(*MANAGEMENT)
IsFrontOfHouse = allow_roles(*FRONT_OF_HOUSE)
IsAnyRole = allow_roles(*ALL_ROLES)
