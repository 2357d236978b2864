"""Core modules for identity number validation and attribute derivation."""

from idcard_inspector.core.formatting import DayFormat, MonthFormat, YearFormat
from idcard_inspector.core.identity import (
    Gender,
    IdentityNumber,
    IdentityProfile,
    ValidatedIdentityNumber,
    calculate_age,
    parse_identity_number,
    resolve_region,
)
from idcard_inspector.core.masking import mask_code
from idcard_inspector.core.validator import (
    IdFormat,
    ValidationFailure,
    compute_check_code,
    validate_identity_number,
)
from idcard_inspector.core.zodiac import ZODIAC_SIGNS, ZodiacSign, zodiac_sign_for

__all__ = [
    "DayFormat",
    "Gender",
    "IdFormat",
    "IdentityNumber",
    "IdentityProfile",
    "MonthFormat",
    "ValidatedIdentityNumber",
    "ValidationFailure",
    "YearFormat",
    "ZODIAC_SIGNS",
    "ZodiacSign",
    "calculate_age",
    "compute_check_code",
    "mask_code",
    "parse_identity_number",
    "resolve_region",
    "validate_identity_number",
    "zodiac_sign_for",
]
