"""
idcard-inspector: Chinese resident identity number parsing

Validates 15- and 18-character identity numbers and derives birth date, age,
gender, zodiac sign, issuing region and a masked display form.
"""

__version__ = "1.0.0"

from idcard_inspector.core.identity import (
    Gender,
    IdentityNumber,
    IdentityProfile,
    ValidatedIdentityNumber,
    parse_identity_number,
)
from idcard_inspector.core.validator import validate_identity_number
from idcard_inspector.exceptions import (
    IdCardError,
    InvalidFormatError,
    InvalidIdentityNumberError,
    RegionLookupError,
)
from idcard_inspector.regions import CodeSetRegistry, GB2260RegionTable, MappingRegionTable

__all__ = [
    "CodeSetRegistry",
    "GB2260RegionTable",
    "Gender",
    "IdCardError",
    "IdentityNumber",
    "IdentityProfile",
    "InvalidFormatError",
    "InvalidIdentityNumberError",
    "MappingRegionTable",
    "RegionLookupError",
    "ValidatedIdentityNumber",
    "parse_identity_number",
    "validate_identity_number",
]
