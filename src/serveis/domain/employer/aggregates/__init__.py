from serveis.domain.employer.aggregates.employer import EDITABLE_FIELDS, Employer

__all__ = ["EDITABLE_FIELDS", "Employer"]
