"""Logging configuration for the CorrespondingReference plugin script."""

from __future__ import annotations

import logging
import sys

from pythonjsonlogger import json as jsonlogger

from shared.log import ROOT_LOGGER_NAME, TRACE


def configure_logging(log_level: str, json_output: bool = False) -> None:
    """Configure the plugin logger with a stderr handler.

    Plain output: "LEVEL name message". Structured output:
    {"ts": "...", "level": "...", "name": "...", "msg": "..."}

    Args:
        log_level: Logging level string (e.g., "info", "debug", "trace").
        json_output: Emit one JSON object per record instead of plain text.
    """
    if log_level.lower() == "trace":
        level = TRACE
    else:
        level = getattr(logging, log_level.upper(), logging.INFO)

    if json_output:
        formatter = jsonlogger.JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={
                "asctime": "ts",
                "levelname": "level",
                "message": "msg",
            },
        )
    else:
        formatter = logging.Formatter("%(levelname)s %(name)s %(message)s")

    # stdout is reserved for the plugin JSON response
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    plugin_logger = logging.getLogger(ROOT_LOGGER_NAME)
    # Clear any existing handlers to avoid duplicate output
    plugin_logger.handlers.clear()
    plugin_logger.addHandler(handler)
    plugin_logger.setLevel(level)
    plugin_logger.propagate = False
