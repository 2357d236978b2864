"""
Western zodiac (星座) lookup.

Twelve fixed ranges partition the calendar year. Boundaries are inclusive on
both ends; only Capricorn wraps from December into January. February 29 falls
inside Pisces, so the partition holds in leap years too.
"""

from dataclasses import dataclass
from datetime import date


MonthDay = tuple[int, int]


@dataclass(frozen=True)
class ZodiacSign:
    """A zodiac sign and its inclusive (month, day) boundaries."""

    name: str
    english_name: str
    start: MonthDay
    end: MonthDay

    @property
    def wraps_year(self) -> bool:
        return self.start > self.end

    def contains(self, month: int, day: int) -> bool:
        """Check whether a month/day falls inside this sign."""
        md = (month, day)
        if self.wraps_year:
            return md >= self.start or md <= self.end
        return self.start <= md <= self.end


ZODIAC_SIGNS: tuple[ZodiacSign, ...] = (
    ZodiacSign("白羊座", "Aries", (3, 21), (4, 19)),
    ZodiacSign("金牛座", "Taurus", (4, 20), (5, 20)),
    ZodiacSign("双子座", "Gemini", (5, 21), (6, 21)),
    ZodiacSign("巨蟹座", "Cancer", (6, 22), (7, 22)),
    ZodiacSign("狮子座", "Leo", (7, 23), (8, 22)),
    ZodiacSign("处女座", "Virgo", (8, 23), (9, 22)),
    ZodiacSign("天秤座", "Libra", (9, 23), (10, 23)),
    ZodiacSign("天蝎座", "Scorpio", (10, 24), (11, 22)),
    ZodiacSign("射手座", "Sagittarius", (11, 23), (12, 21)),
    ZodiacSign("摩羯座", "Capricorn", (12, 22), (1, 19)),
    ZodiacSign("水瓶座", "Aquarius", (1, 20), (2, 18)),
    ZodiacSign("双鱼座", "Pisces", (2, 19), (3, 20)),
)


def zodiac_sign_for(birth_date: date) -> ZodiacSign:
    """Return the zodiac sign of ``birth_date``.

    Raises:
        RuntimeError: If no sign matches, which means ZODIAC_SIGNS has a gap.

    Example:
        >>> zodiac_sign_for(date(1949, 12, 31)).name
        '摩羯座'
    """
    for sign in ZODIAC_SIGNS:
        if sign.contains(birth_date.month, birth_date.day):
            return sign
    raise RuntimeError(f"No zodiac sign covers {birth_date:%m-%d}")
