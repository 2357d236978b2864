"""Unit tests for region table loading and the region collaborators."""

import pytest
import yaml

from idcard_inspector.config.region_loader import (
    get_default_region_table,
    load_region_table_from_yaml,
    load_region_table_from_yaml_safe,
    reset_default_region_table,
)
from idcard_inspector.regions import (
    CodeSetRegistry,
    GB2260RegionTable,
    MappingRegionTable,
    ProvinceCodeRegistry,
    RegionTable,
    region_keys,
)


@pytest.fixture
def region_file(tmp_path):
    path = tmp_path / "regions.yaml"
    path.write_text(
        'regions:\n  "440000": 广东省\n  "440300": 深圳市\n  "440305": 南山区\n',
        encoding="utf-8",
    )
    return path


class TestMappingRegionTable:
    """Tests for MappingRegionTable."""

    def test_lookup(self, region_table):
        """Test that known codes resolve and unknown codes return None."""
        assert region_table.lookup("110105") == "朝阳区"
        assert region_table.lookup("999999") is None

    def test_membership(self, region_table):
        """Test membership through both `in` and is_known."""
        assert "110000" in region_table
        assert region_table.is_known("440305")
        assert not region_table.is_known("130102")

    def test_satisfies_both_protocols(self, region_table):
        """Test that a mapping table can serve as a registry too."""
        assert isinstance(region_table, RegionTable)
        assert isinstance(region_table, ProvinceCodeRegistry)

    def test_rejects_bad_code(self):
        """Test that keys must be 6 digits."""
        with pytest.raises(ValueError, match="6 digits"):
            MappingRegionTable({"1100": "北京市"})

    def test_rejects_empty_name(self):
        """Test that empty names are rejected."""
        with pytest.raises(ValueError, match="cannot be empty"):
            MappingRegionTable({"110000": ""})


class TestGB2260RegionTable:
    """Tests for the GB2260-backed table."""

    def test_lookup(self):
        """Test lookup of province, prefecture and district codes."""
        table = GB2260RegionTable()
        assert table.lookup("370000") == "山东省"
        assert table.lookup("370200") == "青岛市"
        assert table.lookup("370202") == "市南区"

    def test_unknown_code(self):
        """Test that a code absent from every revision returns None."""
        table = GB2260RegionTable()
        assert table.lookup("999999") is None
        assert not table.is_known("999999")
        assert "999999" not in table

    def test_malformed_code(self):
        """Test that codes that are not 6 digits are never looked up."""
        table = GB2260RegionTable()
        assert table.lookup("11A000") is None
        assert table.lookup("1100") is None
        assert not table.is_known("")

    def test_retired_code(self):
        """Test that a code dropped by a later revision still resolves."""
        table = GB2260RegionTable()
        assert table.is_known("110103")
        assert table.lookup("110103") == "崇文区"

    def test_satisfies_both_protocols(self):
        """Test that the GB2260 table serves as table and registry."""
        table = GB2260RegionTable()
        assert isinstance(table, RegionTable)
        assert isinstance(table, ProvinceCodeRegistry)


class TestCodeSetRegistry:
    """Tests for CodeSetRegistry."""

    def test_is_known(self):
        """Test membership of a fixed code set."""
        registry = CodeSetRegistry(["110105"])
        assert registry.is_known("110105")
        assert not registry.is_known("110000")
        assert isinstance(registry, ProvinceCodeRegistry)


class TestRegionKeys:
    """Tests for region key derivation."""

    def test_keys(self):
        """Test keys of an 18-digit number."""
        assert region_keys("11010519491231002X") == ("110000", "110100", "110105")

    def test_legacy(self):
        """Test keys of a 15-digit number."""
        assert region_keys("440305651002345") == ("440000", "440300", "440305")


class TestLoadRegionTable:
    """Tests for load_region_table_from_yaml."""

    def test_load(self, region_file):
        """Test loading a valid file."""
        table = load_region_table_from_yaml(region_file)
        assert len(table) == 3
        assert table.lookup("440305") == "南山区"

    def test_load_from_string_path(self, region_file):
        """Test that a str path is accepted."""
        assert load_region_table_from_yaml(str(region_file)).lookup("440000") == "广东省"

    def test_unquoted_codes_are_padded(self, tmp_path):
        """Test that integer keys are zero-padded to 6 digits."""
        path = tmp_path / "regions.yaml"
        path.write_text("regions:\n  110000: 北京市\n  10000: 测试\n", encoding="utf-8")
        table = load_region_table_from_yaml(path)
        assert table.lookup("110000") == "北京市"
        assert table.lookup("010000") == "测试"

    def test_empty_file(self, tmp_path):
        """Test that an empty file gives an empty table."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert len(load_region_table_from_yaml(path)) == 0

    def test_missing_file(self, tmp_path):
        """Test error for a missing file."""
        with pytest.raises(FileNotFoundError):
            load_region_table_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_top_level(self, tmp_path):
        """Test error when the document is not a mapping."""
        path = tmp_path / "list.yaml"
        path.write_text("- 110000\n", encoding="utf-8")
        with pytest.raises(ValueError, match="expected dict"):
            load_region_table_from_yaml(path)

    def test_invalid_regions_structure(self, tmp_path):
        """Test error when regions is not a mapping."""
        path = tmp_path / "bad.yaml"
        path.write_text("regions:\n  - 110000\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid regions structure"):
            load_region_table_from_yaml(path)

    def test_invalid_code(self, tmp_path):
        """Test error for a non-numeric code."""
        path = tmp_path / "bad.yaml"
        path.write_text('regions:\n  "11A000": 北京市\n', encoding="utf-8")
        with pytest.raises(ValueError, match="6 digits"):
            load_region_table_from_yaml(path)

    def test_empty_name(self, tmp_path):
        """Test error for an empty region name."""
        path = tmp_path / "bad.yaml"
        path.write_text('regions:\n  "110000": ""\n', encoding="utf-8")
        with pytest.raises(ValueError, match="non-empty name"):
            load_region_table_from_yaml(path)

    def test_duplicate_after_padding(self, tmp_path):
        """Test that a quoted and an unquoted key for one code collide."""
        path = tmp_path / "dup.yaml"
        path.write_text('regions:\n  "010000": a\n  10000: b\n', encoding="utf-8")
        with pytest.raises(ValueError, match="Duplicate"):
            load_region_table_from_yaml(path)

    def test_malformed_yaml(self, tmp_path):
        """Test that YAML syntax errors propagate."""
        path = tmp_path / "broken.yaml"
        path.write_text("regions: [unclosed\n", encoding="utf-8")
        with pytest.raises(yaml.YAMLError):
            load_region_table_from_yaml(path)


class TestLoadRegionTableSafe:
    """Tests for load_region_table_from_yaml_safe."""

    def test_success(self, region_file):
        """Test the success path returns no error."""
        table, error = load_region_table_from_yaml_safe(region_file)
        assert error is None
        assert table.lookup("440300") == "深圳市"

    def test_missing_file(self, tmp_path):
        """Test the error message for a missing file."""
        table, error = load_region_table_from_yaml_safe(tmp_path / "missing.yaml")
        assert table is None
        assert "not found" in error

    def test_invalid_content(self, tmp_path):
        """Test the error message for invalid structure."""
        path = tmp_path / "bad.yaml"
        path.write_text("- 1\n", encoding="utf-8")
        table, error = load_region_table_from_yaml_safe(path)
        assert table is None
        assert error.startswith("Configuration error")

    def test_malformed_yaml(self, tmp_path):
        """Test the error message for malformed YAML."""
        path = tmp_path / "broken.yaml"
        path.write_text("regions: [unclosed\n", encoding="utf-8")
        table, error = load_region_table_from_yaml_safe(path)
        assert table is None
        assert error.startswith("YAML parsing error")


class TestDefaultRegionTable:
    """Tests for the process-wide default table."""

    def test_gb2260_by_default(self):
        """Test that the default table covers the full GB2260 data."""
        table = get_default_region_table()
        assert isinstance(table, GB2260RegionTable)
        assert table.lookup("110105") == "朝阳区"
        assert table.lookup("650000") == "新疆维吾尔自治区"
        assert table.lookup("370202") == "市南区"

    def test_cached(self):
        """Test that the default table is built once."""
        assert get_default_region_table() is get_default_region_table()

    def test_configured_file(self, monkeypatch, region_file):
        """Test that a configured YAML file replaces the GB2260 data."""
        monkeypatch.setenv("IDCARD_INSPECTOR_REGION_FILE", str(region_file))
        reset_default_region_table()
        table = get_default_region_table()
        assert len(table) == 3
        assert table.lookup("110105") is None

    def test_bad_configured_file_falls_back(self, monkeypatch, tmp_path, caplog):
        """Test fallback to GB2260 data when the configured file is unusable."""
        monkeypatch.setenv("IDCARD_INSPECTOR_REGION_FILE", str(tmp_path / "missing.yaml"))
        reset_default_region_table()
        with caplog.at_level("WARNING"):
            table = get_default_region_table()
        assert isinstance(table, GB2260RegionTable)
        assert table.lookup("110105") == "朝阳区"
        assert "Falling back to GB2260 region data" in caplog.text
