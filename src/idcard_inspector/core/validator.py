"""
Identity number validation.

Two formats are in circulation:

- 18 characters: RRRRRRYYYYMMDDSSSC (6 region + 8 birth date + 3 sequence +
  1 check character). The check character is ISO 7064:1983 MOD 11-2 over the
  first 17 digits.
- 15 characters: RRRRRRYYMMDDSSS (legacy, issued before 1999). The year has
  no century (always 19xx) and there is no check character at all, so only
  structure can be verified: a known region prefix and a real calendar date.
  A valid 15-digit number is therefore a much weaker guarantee than a valid
  18-digit one.

Validation never raises; every malformed input simply yields False.
"""

import re
from datetime import date
from enum import Enum
from typing import Optional

from idcard_inspector.config.region_loader import get_default_region_table
from idcard_inspector.regions import ProvinceCodeRegistry


# Weights for checksum calculation (ISO 7064:1983 MOD 11-2)
WEIGHTS = [7, 9, 10, 5, 8, 4, 2, 1, 6, 3, 7, 9, 10, 5, 8, 4, 2]

# Checksum mapping, indexed by weighted sum mod 11
CHECKSUM_MAP = "10X98765432"

LEGACY_CENTURY = "19"

_DIGITS = re.compile(r"[0-9]+")
_CHECK_CHAR = re.compile(r"[0-9X]")


class IdFormat(int, Enum):
    """Supported identity number lengths."""

    LEGACY = 15
    CURRENT = 18


class ValidationFailure(str, Enum):
    """Reason a number failed validation, used for diagnostics only."""

    LENGTH = "length"
    NON_DIGIT = "non_digit"
    CHECKSUM = "checksum"
    BIRTH_DATE = "birth_date"
    REGION = "region"


def compute_check_code(body: str) -> str:
    """Compute the check character for a 17-digit body.

    Args:
        body: The first 17 characters of an 18-digit identity number.

    Returns:
        The check character, a digit or 'X'.

    Raises:
        ValueError: If ``body`` is not exactly 17 ASCII digits.

    Example:
        >>> compute_check_code("11010519491231002")
        'X'
    """
    if len(body) != 17 or not _DIGITS.fullmatch(body):
        raise ValueError(f"Checksum body must be 17 digits, got {len(body)} characters")

    total = sum(int(body[i]) * WEIGHTS[i] for i in range(17))
    return CHECKSUM_MAP[total % 11]


def birth_date_parts(code: str) -> tuple[str, str, str]:
    """Extract the (year, month, day) substrings embedded in ``code``.

    The legacy format gets the implicit "19" century prefix.
    """
    if len(code) == IdFormat.CURRENT:
        return code[6:10], code[10:12], code[12:14]
    return LEGACY_CENTURY + code[6:8], code[8:10], code[10:12]


def parse_birth_date(code: str) -> Optional[date]:
    """Build the embedded birth date, or None if it is not a real calendar date."""
    year, month, day = birth_date_parts(code)
    if not _DIGITS.fullmatch(year + month + day):
        return None
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def check_current(code: str) -> Optional[ValidationFailure]:
    """Check an 18-character number, returning the failure reason or None."""
    body, check_char = code[:17], code[17]

    if not _DIGITS.fullmatch(body) or not _CHECK_CHAR.fullmatch(check_char):
        return ValidationFailure.NON_DIGIT
    if compute_check_code(body) != check_char:
        return ValidationFailure.CHECKSUM
    if parse_birth_date(code) is None:
        return ValidationFailure.BIRTH_DATE
    return None


def check_legacy(code: str, registry: ProvinceCodeRegistry) -> Optional[ValidationFailure]:
    """Check a 15-character number, returning the failure reason or None."""
    if not _DIGITS.fullmatch(code):
        return ValidationFailure.NON_DIGIT
    if not registry.is_known(code[:6]):
        return ValidationFailure.REGION
    if parse_birth_date(code) is None:
        return ValidationFailure.BIRTH_DATE
    return None


def check_identity_number(code: str, registry: ProvinceCodeRegistry) -> Optional[ValidationFailure]:
    """Dispatch on length and return why ``code`` is invalid, or None if valid.

    Args:
        code: Normalized (trimmed, upper-cased) identity number.
        registry: Known administrative codes, consulted for 15-digit numbers.
    """
    if len(code) == IdFormat.CURRENT:
        return check_current(code)
    if len(code) == IdFormat.LEGACY:
        return check_legacy(code, registry)
    return ValidationFailure.LENGTH


def validate_identity_number(
    code: str,
    registry: Optional[ProvinceCodeRegistry] = None,
) -> bool:
    """Standalone validation function for identity numbers.

    Args:
        code: The identity number. Surrounding whitespace and a lower-case
            'x' are accepted.
        registry: Known administrative codes for the 15-digit path. Defaults
            to the configured region table.

    Returns:
        True if the number is valid, False otherwise.

    Example:
        >>> validate_identity_number("11010519491231002X")
        True
        >>> validate_identity_number("110105194912310021")
        False
    """
    if not isinstance(code, str):
        return False

    if registry is None:
        registry = get_default_region_table()

    return check_identity_number(code.strip().upper(), registry) is None
