"""
Region code collaborators.

The first six characters of an identity number are a GB/T 2260 administrative
division code: two digits for the province, two for the prefecture and two
for the district. Names for these codes are supplied as data through a
RegionTable; the legacy 15-digit format additionally checks its prefix
against a ProvinceCodeRegistry. GB2260RegionTable serves both roles from the
GB2260 distribution.
"""

import re
from collections.abc import Iterable, Iterator, Mapping
from typing import Optional, Protocol, runtime_checkable

import gb2260


REGION_CODE_PATTERN = re.compile(r"[0-9]{6}")


@runtime_checkable
class RegionTable(Protocol):
    """Read-only mapping from a 6-digit region code to its name."""

    def lookup(self, code: str) -> Optional[str]:
        """Return the name for ``code`` or None if the table does not know it."""


@runtime_checkable
class ProvinceCodeRegistry(Protocol):
    """Membership test over known historical 6-digit administrative codes."""

    def is_known(self, code: str) -> bool:
        """Return True if ``code`` is a known administrative code."""


class MappingRegionTable:
    """RegionTable backed by an in-memory dict.

    Every code the table names is also considered known, so an instance can
    serve as the ProvinceCodeRegistry for the 15-digit path.

    Example:
        >>> table = MappingRegionTable({"110000": "北京市"})
        >>> table.lookup("110000")
        '北京市'
        >>> table.is_known("999999")
        False
    """

    def __init__(self, names: Mapping[str, str]) -> None:
        for code, name in names.items():
            if not REGION_CODE_PATTERN.fullmatch(code):
                raise ValueError(f"Region code must be 6 digits, got {code!r}")
            if not name:
                raise ValueError(f"Region name for {code} cannot be empty")
        self._names = dict(names)

    def lookup(self, code: str) -> Optional[str]:
        return self._names.get(code)

    def is_known(self, code: str) -> bool:
        return code in self._names

    def __contains__(self, code: object) -> bool:
        return code in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __repr__(self) -> str:
        return f"MappingRegionTable({len(self._names)} codes)"


class GB2260RegionTable:
    """RegionTable and ProvinceCodeRegistry backed by the GB2260 distribution.

    Every revision shipped with the library is searched, newest first, so
    codes retired by later revisions (legacy 15-digit numbers carry many of
    them) still resolve to the name they had when last in use.

    Example:
        >>> table = GB2260RegionTable()
        >>> table.lookup("370202")
        '市南区'
        >>> table.is_known("110103")  # 崇文区, merged into 东城区 in 2010
        True
    """

    def lookup(self, code: str) -> Optional[str]:
        if not isinstance(code, str) or not REGION_CODE_PATTERN.fullmatch(code):
            return None
        division = gb2260.search(code)
        return None if division is None else division.name

    def is_known(self, code: str) -> bool:
        return self.lookup(code) is not None

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.is_known(code)

    def __repr__(self) -> str:
        return "GB2260RegionTable()"


class CodeSetRegistry:
    """ProvinceCodeRegistry backed by a fixed set of codes."""

    def __init__(self, codes: Iterable[str]) -> None:
        self._codes = frozenset(codes)

    def is_known(self, code: str) -> bool:
        return code in self._codes

    def __len__(self) -> int:
        return len(self._codes)


def region_keys(code: str) -> tuple[str, str, str]:
    """Derive the province, prefecture and district keys of an identity number.

    Args:
        code: An identity number (or any string starting with a 6-digit
            region code).

    Returns:
        Tuple of (province, prefecture, district) 6-digit codes.

    Example:
        >>> region_keys("11010519491231002X")
        ('110000', '110100', '110105')
    """
    district = code[:6]
    return district[:2] + "0000", district[:4] + "00", district
