"""
Validation predicate and age coercion
"""

import pytest

from user_records.services.validation import coerce_age, validate_user


class TestValidateUser:
    """Accept/reject decisions for incoming payloads"""

    def test_accepts_complete_payload(self):
        assert validate_user({"fullname": "Ana", "study_level": "MSc", "age": 24})

    def test_accepts_numeric_string_age(self):
        assert validate_user({"fullname": "Ana", "study_level": "MSc", "age": "24"})

    def test_accepts_fractional_age(self):
        assert validate_user({"fullname": "Ana", "study_level": "MSc", "age": 24.5})
        assert validate_user({"fullname": "Ana", "study_level": "MSc", "age": "24.5"})

    def test_accepts_age_zero(self):
        assert validate_user({"fullname": "Baby", "study_level": "None", "age": 0})

    def test_ignores_extra_fields(self):
        assert validate_user({"fullname": "Ana", "study_level": "MSc", "age": 24, "uuid": "client-supplied"})

    @pytest.mark.parametrize("payload", [
        None,
        [],
        "Ana",
        {},
        {"study_level": "MSc", "age": 24},
        {"fullname": "", "study_level": "MSc", "age": 24},
        {"fullname": 42, "study_level": "MSc", "age": 24},
        {"fullname": "Ana", "age": 24},
        {"fullname": "Ana", "study_level": "", "age": 24},
        {"fullname": "Ana", "study_level": ["MSc"], "age": 24},
        {"fullname": "Ana", "study_level": "MSc"},
        {"fullname": "Ana", "study_level": "MSc", "age": None},
        {"fullname": "Ana", "study_level": "MSc", "age": "abc"},
        {"fullname": "Ana", "study_level": "MSc", "age": ""},
        {"fullname": "Ana", "study_level": "MSc", "age": float("nan")},
    ])
    def test_rejects_invalid_payload(self, payload):
        assert not validate_user(payload)


class TestCoerceAge:
    """Conversion of accepted ages into the stored integer"""

    @pytest.mark.parametrize("value,expected", [
        (24, 24),
        (0, 0),
        (-3, -3),
        (24.0, 24),
        ("24", 24),
        (" 31 ", 31),
        ("2.4e1", 24),
        (24.5, 25),
        ("24.5", 25),
        (24.4, 24),
        (-2.5, -3),
        ("1e3", 1000),
    ])
    def test_converts_numeric_values(self, value, expected):
        assert coerce_age(value) == expected

    @pytest.mark.parametrize("value", [
        None,
        True,
        False,
        float("nan"),
        float("inf"),
        "NaN",
        "Infinity",
        "1_000",
        "24 years",
        "1e400",
        {"years": 24},
    ])
    def test_rejects_non_finite_or_non_numeric(self, value):
        assert coerce_age(value) is None
