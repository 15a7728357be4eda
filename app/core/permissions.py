"""
Permission system for role-based access control (RBAC).

Defines roles, resources, actions, and the permission matrix.
Non-admin roles are additionally restricted to the records assigned to them
(see `app.services.records.owned_by`).
"""

from enum import Enum
from typing import Dict, Set, Tuple


class UserRole(str, Enum):
    """Account roles"""
    ADMIN = "ADMIN"    # Full control, sees every record
    USER = "USER"      # Staff account, sees its own assignments
    CLIENT = "CLIENT"  # Self-registered client account


DEFAULT_ROLE = UserRole.CLIENT


class Resource(str, Enum):
    """Resources that can be accessed"""
    CLIENT = "client"
    PROJECT = "project"
    BILL = "bill"
    PAYMENT = "payment"
    RATE = "rate"
    PRINT_RATE = "print_rate"
    SETTINGS = "settings"
    USER = "user"
    OVERVIEW = "overview"
    LOG = "log"


class Action(str, Enum):
    """Actions that can be performed on resources"""
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    MANAGE = "manage"


_ALL_ACTIONS = set(Action)

# Record ownership is enforced separately, this only decides what a role may attempt
_ASSIGNABLE_PERMISSIONS: Set[Tuple[Resource, Action]] = {
    (Resource.CLIENT, Action.READ),
    (Resource.CLIENT, Action.CREATE),
    (Resource.PROJECT, Action.READ),
    (Resource.PROJECT, Action.CREATE),
    (Resource.BILL, Action.READ),
    (Resource.BILL, Action.CREATE),
    (Resource.PAYMENT, Action.READ),
    (Resource.PAYMENT, Action.CREATE),
    (Resource.RATE, Action.READ),
    (Resource.PRINT_RATE, Action.READ),
    (Resource.SETTINGS, Action.READ),
}

ROLE_PERMISSIONS: Dict[UserRole, Set[Tuple[Resource, Action]]] = {
    UserRole.ADMIN: {(resource, action) for resource in Resource for action in _ALL_ACTIONS},
    UserRole.USER: set(_ASSIGNABLE_PERMISSIONS),
    UserRole.CLIENT: set(_ASSIGNABLE_PERMISSIONS),
}


def has_permission(role: UserRole, resource: Resource, action: Action) -> bool:
    """
    Check if a role has permission to perform an action on a resource.

    Args:
        role: Account role (ADMIN, USER, CLIENT)
        resource: Resource being accessed
        action: Action being performed

    Returns:
        True if permission is granted, False otherwise
    """
    return (resource, action) in ROLE_PERMISSIONS.get(role, set())


def get_role_permissions(role: UserRole) -> Set[Tuple[Resource, Action]]:
    return ROLE_PERMISSIONS.get(role, set())


def sees_all_records(role: UserRole) -> bool:
    """Admins read every record; everyone else only their own assignments."""
    return role == UserRole.ADMIN
