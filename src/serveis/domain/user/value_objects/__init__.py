from serveis.domain.user.value_objects.email import Email, normalize_email
from serveis.domain.user.value_objects.user_profile import UserProfile
from serveis.domain.user.value_objects.user_role import UserRole

__all__ = [
    "Email",
    "UserProfile",
    "UserRole",
    "normalize_email",
]
