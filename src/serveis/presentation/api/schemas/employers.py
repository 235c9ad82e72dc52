"""Employer schemas for request/response models."""

from datetime import date, datetime
from typing import Optional

from pydantic import EmailStr, Field

from serveis.domain.employer import Employer
from serveis.presentation.api.schemas.common import CamelModel


class EmployerCreateRequest(CamelModel):
    """Request schema for creating an employer.

    ``startDate`` defaults to today.
    """

    name: str = Field(..., min_length=2, max_length=255)
    tax_id: Optional[str] = Field(default=None, max_length=20)
    address: Optional[str] = Field(default=None, max_length=500)
    phone: Optional[str] = Field(default=None, max_length=20)
    email: Optional[EmailStr] = Field(default=None, max_length=255)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None


class EmployerUpdateRequest(CamelModel):
    """Request schema for a partial employer update.

    Only the fields present in the body are changed; an explicit null
    clears an optional field.
    """

    name: Optional[str] = Field(default=None, max_length=255)
    tax_id: Optional[str] = Field(default=None, max_length=20)
    address: Optional[str] = Field(default=None, max_length=500)
    phone: Optional[str] = Field(default=None, max_length=20)
    email: Optional[EmailStr] = Field(default=None, max_length=255)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None


class EmployerEndRequest(CamelModel):
    end_date: Optional[date] = Field(default=None, description="Defaults to today")


class EmployerResponse(CamelModel):
    id: int
    name: str
    tax_id: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    notes: Optional[str] = None
    is_current: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, employer: Employer) -> "EmployerResponse":
        return cls(
            id=employer.id,
            name=employer.name,
            tax_id=employer.tax_id,
            address=employer.address,
            phone=employer.phone,
            email=employer.email,
            start_date=employer.start_date,
            end_date=employer.end_date,
            notes=employer.notes,
            is_current=employer.is_current,
            created_at=employer.created_at,
            updated_at=employer.updated_at,
        )


class EmployerListResponse(CamelModel):
    employers: list[EmployerResponse]
    total: int
