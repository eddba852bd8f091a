from __future__ import annotations

from datetime import datetime

import pytest

from onemanage.common.datetime_utils import parse_due_date
from onemanage.common.validators import optional_int, require_email, require_non_empty
from onemanage.core.exceptions import ValidationError


def test_require_non_empty_strips():
    assert require_non_empty("  Eng ", "required") == "Eng"


@pytest.mark.parametrize("value", [None, "", "   ", 12])
def test_require_non_empty_rejects(value):
    with pytest.raises(ValidationError, match="required"):
        require_non_empty(value, "required")


@pytest.mark.parametrize("value", ["a@b.co", "first.last@sub.example.org"])
def test_require_email_accepts(value):
    assert require_email(value) == value


@pytest.mark.parametrize("value", ["a@b", "a b@c.io", "@c.io", "a@@c.io"])
def test_require_email_rejects(value):
    with pytest.raises(ValidationError):
        require_email(value)


def test_optional_int():
    assert optional_int("", "Salary") is None
    assert optional_int("12.9", "Salary") == 12
    with pytest.raises(ValidationError, match="Salary must be a number"):
        optional_int(False, "Salary")


@pytest.mark.parametrize("value", ["1e400", "inf", "-inf", float("inf")])
def test_optional_int_rejects_non_finite(value):
    with pytest.raises(ValidationError, match="Salary must be a number"):
        optional_int(value, "Salary")


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2026-03-01", datetime(2026, 3, 1)),
        ("2026-03-01T10:30:00Z", datetime(2026, 3, 1, 10, 30)),
        ("2026-03-01T12:30:00+02:00", datetime(2026, 3, 1, 10, 30)),
    ],
)
def test_parse_due_date_normalizes_to_naive_utc(value, expected):
    assert parse_due_date(value) == expected


def test_parse_due_date_rejects_garbage():
    with pytest.raises(ValidationError, match="Invalid due date"):
        parse_due_date("tomorrow-ish")
