"""
Identity number entity and attribute derivation.

A raw string is wrapped into an IdentityNumber. Every attribute accessor
validates the number first (once; the result is cached) and raises
InvalidIdentityNumberError if it is invalid. Derivation itself only ever runs
on a ValidatedIdentityNumber, which parse_identity_number hands out after a
successful validation.

Example:
    >>> number = IdentityNumber("11010519491231002x")
    >>> number.birth_date()
    datetime.date(1949, 12, 31)
    >>> number.gender()
    <Gender.FEMALE: 'female'>
    >>> number.constellation()
    '摩羯座'
"""

import threading
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from idcard_inspector.config.region_loader import get_default_region_table
from idcard_inspector.core.formatting import (
    DayFormat,
    MonthFormat,
    YearFormat,
    format_day,
    format_month,
    format_year,
)
from idcard_inspector.core.masking import (
    DEFAULT_REPLACEMENT,
    DEFAULT_VISIBLE_LEFT,
    DEFAULT_VISIBLE_RIGHT,
    mask_code,
)
from idcard_inspector.core.validator import (
    LEGACY_CENTURY,
    IdFormat,
    check_identity_number,
    compute_check_code,
    parse_birth_date,
)
from idcard_inspector.core.zodiac import ZodiacSign, zodiac_sign_for
from idcard_inspector.exceptions import InvalidIdentityNumberError, RegionLookupError
from idcard_inspector.logging.setup import get_logger
from idcard_inspector.regions import ProvinceCodeRegistry, RegionTable, region_keys

logger = get_logger(__name__)


class Gender(str, Enum):
    """Gender encoded by the parity of the sequence number."""

    MALE = "male"
    FEMALE = "female"

    @property
    def code(self) -> int:
        """Ordinal code: 1 for male, 2 for female."""
        return 1 if self is Gender.MALE else 2

    @property
    def label(self) -> str:
        return "男" if self is Gender.MALE else "女"


def calculate_age(birth_date: date, reference_date: Optional[date] = None) -> int:
    """Age in whole years at ``reference_date``.

    The age increments exactly on the birthday. Someone born on February 29
    turns a year older on March 1 in common years.

    Args:
        birth_date: Date of birth.
        reference_date: Date to measure at. Defaults to today.

    Returns:
        Completed years; negative if ``reference_date`` precedes the birth year.

    Example:
        >>> calculate_age(date(1949, 12, 31), date(2020, 12, 30))
        70
        >>> calculate_age(date(1949, 12, 31), date(2020, 12, 31))
        71
    """
    if reference_date is None:
        reference_date = date.today()

    age = reference_date.year - birth_date.year
    if (reference_date.month, reference_date.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def resolve_region(code: str, regions: RegionTable, separator: str = " ") -> str:
    """Resolve province, prefecture and district names and join them.

    Raises:
        RegionLookupError: If any of the three codes is missing from ``regions``.
    """
    names = []
    for key in region_keys(code):
        name = regions.lookup(key)
        if name is None:
            raise RegionLookupError(key)
        names.append(name)
    return separator.join(names)


@dataclass(frozen=True)
class ValidatedIdentityNumber:
    """An identity number that passed validation.

    Obtain instances through parse_identity_number; the birth date is computed
    eagerly so the value is fully immutable.
    """

    code: str
    birth_date: date = field(init=False, compare=False)

    def __post_init__(self) -> None:
        birth_date = parse_birth_date(self.code)
        if birth_date is None:
            raise RuntimeError("ValidatedIdentityNumber built from a code with no valid birth date")
        object.__setattr__(self, "birth_date", birth_date)

    @property
    def length(self) -> int:
        return len(self.code)

    @property
    def is_legacy(self) -> bool:
        return self.length == IdFormat.LEGACY

    @property
    def gender(self) -> Gender:
        digit = self.code[14] if self.is_legacy else self.code[16]
        return Gender.FEMALE if int(digit) % 2 == 0 else Gender.MALE

    @property
    def zodiac_sign(self) -> ZodiacSign:
        return zodiac_sign_for(self.birth_date)

    def age(self, reference_date: Optional[date] = None) -> int:
        return calculate_age(self.birth_date, reference_date)

    def to_18(self) -> str:
        """The 18-digit form of this number."""
        if not self.is_legacy:
            return self.code
        body = self.code[:6] + LEGACY_CENTURY + self.code[6:]
        return body + compute_check_code(body)


def parse_identity_number(
    raw: str,
    registry: Optional[ProvinceCodeRegistry] = None,
) -> ValidatedIdentityNumber:
    """Validate ``raw`` and return it as a ValidatedIdentityNumber.

    Args:
        raw: The identity number; trimmed and upper-cased before validation.
        registry: Known administrative codes for the 15-digit path. Defaults
            to the configured region table.

    Returns:
        ValidatedIdentityNumber.

    Raises:
        TypeError: If ``raw`` is not a string.
        InvalidIdentityNumberError: If the number fails validation.
    """
    if not isinstance(raw, str):
        raise TypeError(f"Identity number must be a string, got {type(raw).__name__}")

    code = raw.strip().upper()
    if registry is None:
        registry = get_default_region_table()

    failure = check_identity_number(code, registry)
    if failure is not None:
        logger.debug(
            f"Identity number {mask_code(code)} failed validation: {failure.value}",
            extra={"event": "validation_failed", "reason": failure.value},
        )
        raise InvalidIdentityNumberError()

    return ValidatedIdentityNumber(code)


@dataclass(frozen=True)
class IdentityProfile:
    """Every attribute derived from a valid identity number."""

    code: str
    length: int
    birth_date: date
    age: int
    gender: Gender
    gender_code: int
    constellation: str
    region: Optional[str]
    masked: str


class IdentityNumber:
    """A resident identity number and the attributes derived from it.

    Args:
        raw: The identity number as entered. Surrounding whitespace is removed
            and the string is upper-cased.
        area: Locale/area hint, stored for callers but not used by derivation.
        regions: Region table used by region(). Defaults to the configured
            region table.
        registry: Known administrative codes for the 15-digit path. Defaults
            to ``regions`` when it can answer membership, else the configured
            region table.

    Raises:
        TypeError: If ``raw`` is not a string.
    """

    def __init__(
        self,
        raw: str,
        area: str = "zh",
        *,
        regions: Optional[RegionTable] = None,
        registry: Optional[ProvinceCodeRegistry] = None,
    ) -> None:
        if not isinstance(raw, str):
            raise TypeError(f"Identity number must be a string, got {type(raw).__name__}")

        self.code = raw.strip().upper()
        self.area = area
        self._regions = regions
        self._registry = registry
        self._validated_number: Optional[ValidatedIdentityNumber] = None
        self._lock = threading.Lock()

    @property
    def length(self) -> int:
        return len(self.code)

    @property
    def regions(self) -> RegionTable:
        return self._regions if self._regions is not None else get_default_region_table()

    @property
    def registry(self) -> ProvinceCodeRegistry:
        if self._registry is not None:
            return self._registry
        if isinstance(self._regions, ProvinceCodeRegistry):
            return self._regions
        return get_default_region_table()

    def validate(self) -> bool:
        """Check the number. Never raises."""
        if self._validated_number is not None:
            return True
        return check_identity_number(self.code, self.registry) is None

    def validated(self) -> ValidatedIdentityNumber:
        """Return the validated view, validating on first use.

        Raises:
            InvalidIdentityNumberError: If the number is invalid.
        """
        validated = self._validated_number
        if validated is None:
            with self._lock:
                if self._validated_number is None:
                    self._validated_number = parse_identity_number(self.code, self.registry)
                validated = self._validated_number
        return validated

    def birth_date(self) -> date:
        return self.validated().birth_date

    def birth_year(self, fmt: str = YearFormat.FULL) -> str:
        """Year of birth.

        Args:
            fmt: One of the YearFormat tokens: Y, y, L, o.

        Raises:
            InvalidIdentityNumberError: If the number is invalid.
            InvalidFormatError: If ``fmt`` is not allowed.
        """
        return format_year(self.birth_date(), fmt)

    def birth_month(self, fmt: str = MonthFormat.PADDED) -> str:
        """Month of birth.

        Args:
            fmt: One of the MonthFormat tokens: n, m, M, F, t.
        """
        return format_month(self.birth_date(), fmt)

    def birth_day(self, fmt: str = DayFormat.PADDED) -> str:
        """Day of birth.

        Args:
            fmt: One of the DayFormat tokens: j, d, S, N, w, D, l, z.
        """
        return format_day(self.birth_date(), fmt)

    def age(self, reference_date: Optional[date] = None) -> int:
        """Age in whole years at ``reference_date`` (default: today)."""
        return self.validated().age(reference_date)

    def gender(self) -> Gender:
        return self.validated().gender

    def gender_code(self) -> int:
        """1 for male, 2 for female."""
        return self.validated().gender.code

    def zodiac_sign(self) -> ZodiacSign:
        return self.validated().zodiac_sign

    def constellation(self) -> str:
        """Chinese name of the zodiac sign, e.g. '摩羯座'."""
        return self.validated().zodiac_sign.name

    def region(self, separator: str = " ") -> str:
        """Province, prefecture and district names joined by ``separator``.

        Raises:
            InvalidIdentityNumberError: If the number is invalid.
            RegionLookupError: If the region table lacks one of the codes.
        """
        return resolve_region(self.validated().code, self.regions, separator)

    def masked_format(
        self,
        replacement: str = DEFAULT_REPLACEMENT,
        visible_left: int = DEFAULT_VISIBLE_LEFT,
        visible_right: int = DEFAULT_VISIBLE_RIGHT,
    ) -> str:
        """Masked display form, e.g. '1101***********02X'."""
        return mask_code(self.validated().code, replacement, visible_left, visible_right)

    def to_18(self) -> str:
        """Convert a legacy 15-digit number to 18 digits; 18-digit numbers are returned as is."""
        return self.validated().to_18()

    def profile(self, reference_date: Optional[date] = None) -> IdentityProfile:
        """Collect every derived attribute.

        Args:
            reference_date: Date the age is measured at. Defaults to today.

        Returns:
            IdentityProfile. Its ``region`` is None when the region table has
            no entry for one of the province, prefecture or district codes;
            call region() to get the RegionLookupError naming the missing code.

        Raises:
            InvalidIdentityNumberError: If the number is invalid.
        """
        validated = self.validated()
        try:
            region = resolve_region(validated.code, self.regions)
        except RegionLookupError as e:
            logger.debug(
                f"No region name for {e.code}",
                extra={"event": "region_not_found", "region_code": e.code},
            )
            region = None

        return IdentityProfile(
            code=validated.code,
            length=validated.length,
            birth_date=validated.birth_date,
            age=validated.age(reference_date),
            gender=validated.gender,
            gender_code=validated.gender.code,
            constellation=validated.zodiac_sign.name,
            region=region,
            masked=mask_code(validated.code),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IdentityNumber):
            return NotImplemented
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)

    def __repr__(self) -> str:
        return f"IdentityNumber({mask_code(self.code)!r})"
