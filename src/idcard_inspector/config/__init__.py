"""Configuration module for idcard-inspector."""

from idcard_inspector.config.region_loader import (
    get_default_region_table,
    load_region_table_from_yaml,
    load_region_table_from_yaml_safe,
)

__all__ = [
    "get_default_region_table",
    "load_region_table_from_yaml",
    "load_region_table_from_yaml_safe",
]
