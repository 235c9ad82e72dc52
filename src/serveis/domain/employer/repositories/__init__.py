from serveis.domain.employer.repositories.employer_repository import (
    EmployerRepository,
)

__all__ = ["EmployerRepository"]
