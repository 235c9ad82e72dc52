"""User profile value object."""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class UserProfile:
    """Descriptive fields of a user, none of which take part in auth."""

    name: str
    surname: Optional[str] = None
    second_surname: Optional[str] = None
    pseudonym: Optional[str] = None
    professional_number: Optional[str] = None
    department: Optional[str] = None

    def __post_init__(self) -> None:
        stripped = self.name.strip() if self.name else ""
        if not stripped:
            msg = "Name cannot be empty"
            raise ValueError(msg)
        object.__setattr__(self, "name", stripped)

    @property
    def display_name(self) -> str:
        if self.pseudonym:
            return self.pseudonym
        parts = [self.name, self.surname, self.second_surname]
        return " ".join(part for part in parts if part)

    def with_updates(self, **changes: Optional[str]) -> "UserProfile":
        # Only provided (non-None) values are updated; others are preserved.
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
