"""Employer domain."""

from serveis.domain.employer.aggregates import EDITABLE_FIELDS, Employer
from serveis.domain.employer.repositories import EmployerRepository

__all__ = [
    "EDITABLE_FIELDS",
    "Employer",
    "EmployerRepository",
]
