"""Employer aggregate.

An employer is a company a user works or has worked for. Records are
scoped to their owner and soft-deleted.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from serveis.domain.shared.exceptions import ErrorCode, ValidationError
from serveis.domain.shared.time import today_utc, utc_now

EDITABLE_FIELDS = (
    "name",
    "tax_id",
    "address",
    "phone",
    "email",
    "start_date",
    "end_date",
    "notes",
)


def _check_name(name: Optional[str]) -> str:
    stripped = name.strip() if name else ""
    if not stripped:
        raise ValidationError(
            "Employer name is required",
            code=ErrorCode.NAME_REQUIRED,
            errors=[{"field": "name", "message": "Employer name is required"}],
        )
    return stripped


def _check_dates(start_date: date, end_date: Optional[date]) -> None:
    if end_date is not None and end_date < start_date:
        raise ValidationError(
            "End date cannot be earlier than start date",
            code=ErrorCode.INVALID_DATE_RANGE,
            errors=[
                {
                    "field": "endDate",
                    "message": "End date cannot be earlier than start date",
                },
            ],
        )


@dataclass
class Employer:
    user_id: int
    name: str
    start_date: date = field(default_factory=today_utc)
    tax_id: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None
    active: bool = True
    id: Optional[int] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def create(  # NOQA: PLR0913
        cls,
        user_id: int,
        name: Optional[str],
        start_date: Optional[date] = None,
        tax_id: Optional[str] = None,
        address: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        end_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> "Employer":
        """Build a new employer, enforcing name and date-range rules.

        Raises
        ------
        ValidationError
            If the name is blank or ``end_date`` precedes ``start_date``.
        """
        start = start_date or today_utc()
        _check_dates(start, end_date)
        return cls(
            user_id=user_id,
            name=_check_name(name),
            start_date=start,
            tax_id=tax_id,
            address=address,
            phone=phone,
            email=email,
            end_date=end_date,
            notes=notes,
        )

    @property
    def is_current(self) -> bool:
        return self.end_date is None

    def apply_changes(self, changes: dict[str, Any]) -> None:
        """Apply a partial update; only keys present in ``changes`` are touched.

        A ``None`` start date keeps the stored one, since the column is
        required. Rules are checked against the merged values before
        anything is written.
        """
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            msg = f"Unknown employer fields: {sorted(unknown)}"
            raise ValueError(msg)

        merged = {name: getattr(self, name) for name in EDITABLE_FIELDS}
        merged.update(changes)
        if merged["start_date"] is None:
            merged["start_date"] = self.start_date

        if "name" in changes:
            merged["name"] = _check_name(merged["name"])
        _check_dates(merged["start_date"], merged["end_date"])

        for name, value in merged.items():
            setattr(self, name, value)
        self.updated_at = utc_now()

    def end(self, end_date: Optional[date] = None) -> None:
        """Record that the user stopped working here."""
        if self.end_date is not None:
            raise ValidationError(
                "This employer already has an end date",
                code=ErrorCode.EMPLOYMENT_ALREADY_ENDED,
            )
        final = end_date or today_utc()
        _check_dates(self.start_date, final)
        self.end_date = final
        self.updated_at = utc_now()
