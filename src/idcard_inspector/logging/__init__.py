"""Logging configuration module for idcard-inspector."""

from idcard_inspector.logging.setup import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
