from enum import Enum


class UserRole(str, Enum):
    """Roles a user can hold; checked by route-level authorization."""

    ADMIN = "admin"
    TECHNICIAN = "technician"
    USER = "user"
