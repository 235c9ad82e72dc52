"""Unit tests for the Employer aggregate."""

from datetime import date, timedelta

import pytest

from serveis.domain.employer import Employer
from serveis.domain.shared.exceptions import ErrorCode, ValidationError
from serveis.domain.shared.time import today_utc

START = date(2024, 1, 1)


class TestEmployerCreate:
    """Tests for Employer.create."""

    def test_defaults(self):
        """Start date defaults to today; new employers are current."""
        employer = Employer.create(user_id=1, name="  Acme  ")

        assert employer.name == "Acme"
        assert employer.start_date == today_utc()
        assert employer.end_date is None
        assert employer.is_current
        assert employer.active

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Employer.create(user_id=1, name="  ")

        assert exc_info.value.code == ErrorCode.NAME_REQUIRED
        assert exc_info.value.errors[0]["field"] == "name"

    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Employer.create(
                user_id=1,
                name="Acme",
                start_date=START,
                end_date=START - timedelta(days=1),
            )

        assert exc_info.value.code == ErrorCode.INVALID_DATE_RANGE

    def test_same_day_range_allowed(self):
        employer = Employer.create(
            user_id=1,
            name="Acme",
            start_date=START,
            end_date=START,
        )
        assert not employer.is_current


class TestEmployerApplyChanges:
    """Tests for partial updates."""

    def setup_method(self):
        """Set up test fixtures."""
        self.employer = Employer.create(
            user_id=1,
            name="Acme",
            start_date=START,
            phone="555",
        )

    def test_only_given_fields_change(self):
        self.employer.apply_changes({"notes": "hello"})

        assert self.employer.notes == "hello"
        assert self.employer.phone == "555"
        assert self.employer.name == "Acme"

    def test_explicit_none_clears_optional_field(self):
        self.employer.apply_changes({"phone": None})
        assert self.employer.phone is None

    def test_none_start_date_keeps_stored_value(self):
        self.employer.apply_changes({"start_date": None})
        assert self.employer.start_date == START

    def test_dates_checked_against_merged_values(self):
        """Moving the start after the stored end date is rejected."""
        self.employer.apply_changes({"end_date": date(2024, 6, 1)})

        with pytest.raises(ValidationError):
            self.employer.apply_changes({"start_date": date(2024, 7, 1)})

        assert self.employer.start_date == START

    def test_blank_name_rejected_without_partial_write(self):
        with pytest.raises(ValidationError):
            self.employer.apply_changes({"name": "", "notes": "ignored"})

        assert self.employer.notes is None

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError, match="Unknown employer fields"):
            self.employer.apply_changes({"user_id": 2})


class TestEmployerEnd:
    """Tests for ending the working relationship."""

    def test_end_defaults_to_today(self):
        employer = Employer.create(user_id=1, name="Acme", start_date=START)

        employer.end()

        assert employer.end_date == today_utc()
        assert not employer.is_current

    def test_end_twice_rejected(self):
        employer = Employer.create(user_id=1, name="Acme", start_date=START)
        employer.end(date(2024, 3, 1))

        with pytest.raises(ValidationError) as exc_info:
            employer.end(date(2024, 4, 1))

        assert exc_info.value.code == ErrorCode.EMPLOYMENT_ALREADY_ENDED

    def test_end_before_start_rejected(self):
        employer = Employer.create(user_id=1, name="Acme", start_date=START)

        with pytest.raises(ValidationError):
            employer.end(date(2023, 12, 31))

        assert employer.is_current
