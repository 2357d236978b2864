"""Pytest fixtures and configuration."""

import pytest

from idcard_inspector.config.region_loader import reset_default_region_table
from idcard_inspector.regions import MappingRegionTable


@pytest.fixture
def region_table():
    """Minimal region table covering the test numbers."""
    return MappingRegionTable(
        {
            "110000": "北京市",
            "110100": "市辖区",
            "110101": "东城区",
            "110105": "朝阳区",
            "440000": "广东省",
            "440300": "深圳市",
            "440305": "南山区",
            # 310100 and 310104 deliberately missing
            "310000": "上海市",
        }
    )


@pytest.fixture(autouse=True)
def fresh_default_region_table(monkeypatch):
    """Ignore any configured region file and rebuild the default table per test."""
    monkeypatch.delenv("IDCARD_INSPECTOR_REGION_FILE", raising=False)
    reset_default_region_table()
    yield
    reset_default_region_table()


@pytest.fixture
def valid_id_numbers():
    """Valid 18-digit numbers with their birth dates."""
    # Check characters computed with weights 7,9,10,5,8,4,2,1,6,3,7,9,10,5,8,4,2
    return {
        "11010519491231002X": (1949, 12, 31),  # Beijing Chaoyang, X checksum
        "110101199003077715": (1990, 3, 7),  # Beijing Dongcheng
        "440305200002291232": (2000, 2, 29),  # Shenzhen Nanshan, leap day
        "310104198001010017": (1980, 1, 1),  # Shanghai Xuhui
    }


@pytest.fixture
def invalid_id_numbers():
    """Invalid numbers, each failing for a different reason."""
    return [
        "",  # Empty
        "11010519491231",  # Too short
        "11010519491231002X1",  # Too long
        "110105194912310021",  # Wrong checksum
        "110101199013071237",  # Checksum fine, month 13
        "1101051949123100AX",  # Letters in the body
        "11010519491231002Y",  # Invalid check character
    ]
