"""YAML loader for region code tables.

Region names are data, not code. By default they come from the GB2260
distribution; this module reads a replacement table from a YAML file so that
deployments can pin their own revision without modifying the package.

Example YAML configuration:

    regions:
      "110000": 北京市
      "110100": 市辖区
      "110101": 东城区
"""

import os
import threading
from pathlib import Path
from typing import Optional

import yaml

from idcard_inspector.logging.setup import get_logger
from idcard_inspector.regions import REGION_CODE_PATTERN, GB2260RegionTable, MappingRegionTable

logger = get_logger(__name__)

REGION_FILE_ENV = "IDCARD_INSPECTOR_REGION_FILE"


def _normalize_code(raw: object, index: int) -> str:
    # Unquoted YAML keys arrive as ints and lose their leading zeros
    if isinstance(raw, bool):
        raise ValueError(f"Region entry {index} has a non-numeric code: {raw!r}")
    if isinstance(raw, int):
        code = f"{raw:06d}"
    elif isinstance(raw, str):
        code = raw.strip()
    else:
        raise ValueError(f"Region entry {index} has an invalid code type: {type(raw).__name__}")

    if not REGION_CODE_PATTERN.fullmatch(code):
        raise ValueError(f"Region entry {index} code must be 6 digits, got {raw!r}")
    return code


def load_region_table_from_yaml(path: Path | str) -> MappingRegionTable:
    """Load a region table from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        MappingRegionTable holding every code in the file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the YAML structure is invalid.
        yaml.YAMLError: If the YAML is malformed.

    Example:
        >>> table = load_region_table_from_yaml("config/regions.yaml")
        >>> table.lookup("110101")
        '东城区'
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Region file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return MappingRegionTable({})

    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML structure: expected dict, got {type(data).__name__}")

    regions_data = data.get("regions", {})

    if not isinstance(regions_data, dict):
        raise ValueError(
            f"Invalid regions structure: expected dict, got {type(regions_data).__name__}"
        )

    names: dict[str, str] = {}
    for i, (raw_code, name) in enumerate(regions_data.items()):
        code = _normalize_code(raw_code, i)
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Region {code} must have a non-empty name")
        if code in names:
            raise ValueError(f"Duplicate region code: {code}")
        names[code] = name.strip()

    logger.info(
        "Loaded region table",
        extra={"event": "region_table_loaded", "path": str(path), "codes": len(names)},
    )
    return MappingRegionTable(names)


def load_region_table_from_yaml_safe(
    path: Path | str,
) -> tuple[Optional[MappingRegionTable], Optional[str]]:
    """Load a region table, returning an error message instead of raising.

    Args:
        path: Path to the YAML file.

    Returns:
        Tuple of (table, error_message). If successful, error_message is None.
        If failed, table is None.
    """
    try:
        return load_region_table_from_yaml(path), None
    except FileNotFoundError as e:
        return None, str(e)
    except ValueError as e:
        return None, f"Configuration error: {e}"
    except yaml.YAMLError as e:
        return None, f"YAML parsing error: {e}"


_default_table: Optional[MappingRegionTable | GB2260RegionTable] = None
_default_lock = threading.Lock()


def get_default_region_table() -> MappingRegionTable | GB2260RegionTable:
    """Get the process-wide default region table.

    Loads the file named by ``IDCARD_INSPECTOR_REGION_FILE`` if set. Without
    that variable, or when the file cannot be loaded, the complete GB/T 2260
    data of the GB2260 distribution (all revisions) is used. The table is
    created once and shared read-only.

    Returns:
        MappingRegionTable for a configured file, else GB2260RegionTable.
    """
    global _default_table

    if _default_table is not None:
        return _default_table

    with _default_lock:
        if _default_table is None:
            configured = os.getenv(REGION_FILE_ENV)
            table = None
            if configured:
                table, error = load_region_table_from_yaml_safe(configured)
                if error:
                    logger.warning(
                        f"Falling back to GB2260 region data: {error}",
                        extra={"event": "region_table_fallback", "path": configured},
                    )
            if table is None:
                table = GB2260RegionTable()
            _default_table = table

    return _default_table


def reset_default_region_table() -> None:
    """Drop the cached default table so the next call reloads it."""
    global _default_table

    with _default_lock:
        _default_table = None
