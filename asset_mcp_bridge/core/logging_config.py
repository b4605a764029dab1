"""
Logging Configuration Module.

Centralized logging for the Asset MCP Bridge. Every request carries a bearer
token that is forwarded upstream, so besides choosing levels and formats this
module installs a filter that masks tokens in every record that reaches a
handler.

Features:
- Console logging, plus a file under LOG_FILE_DIR when ENABLE_FILE_LOGGING is set
- Simple, detailed, or JSON-shaped line formats
- Per-module levels (protocol client verbose, HTTP libraries quiet)
- Bearer token and access_token redaction
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional


def _get_logging_config() -> Dict[str, Any]:
    """Read logging options from the settings model.

    Settings are imported lazily because the config module itself logs; when
    they cannot be loaded the raw environment is used instead.
    """
    try:
        from asset_mcp_bridge.server.core.config import settings

        return {
            "log_level": settings.log_level.upper(),
            "log_format": settings.log_format,
            "log_file_dir": settings.log_file_dir,
            "enable_file_logging": settings.enable_file_logging,
        }
    except Exception:
        return {
            "log_level": os.getenv("ASSET_MCP_BRIDGE_LOG_LEVEL", "INFO").upper(),
            "log_format": os.getenv("LOG_FORMAT", "detailed"),
            "log_file_dir": os.getenv("LOG_FILE_DIR", "logs"),
            "enable_file_logging": os.getenv("ENABLE_FILE_LOGGING", "false").lower() in ("true", "1", "yes"),
        }


_config = _get_logging_config()
LOG_LEVEL = _config["log_level"]
LOG_FORMAT = _config["log_format"]
LOG_FILE_DIR = _config["log_file_dir"]
ENABLE_FILE_LOGGING = _config["enable_file_logging"]
LOG_FILE_NAME = "asset_mcp_bridge.log"

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
    '"module": "%(filename)s", "function": "%(funcName)s", "line": %(lineno)d, '
    '"message": "%(message)s"}'
)

_FORMATS = {"simple": SIMPLE_FORMAT, "detailed": DETAILED_FORMAT, "json": JSON_FORMAT}

MODULE_LOG_LEVELS = {
    "asset_mcp_bridge.mcp_client": "DEBUG",
    "asset_mcp_bridge.mcp_client.transport": "INFO",
    "asset_mcp_bridge.workflows": "DEBUG",
    "asset_mcp_bridge.oauth": "DEBUG",
    "asset_mcp_bridge.server": "INFO",
    "asset_mcp_bridge.server.api": "DEBUG",
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "asyncio": "WARNING",
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
}

_SECRET_PATTERNS = (
    re.compile(r"(Bearer\s+)([A-Za-z0-9._~+/=_-]{9,})"),
    re.compile(r"""(["']?access_token["']?\s*[:=]\s*["']?)([A-Za-z0-9._~+/=_-]{9,})"""),
    re.compile(r"([?&]token=)([A-Za-z0-9._~+/=_-]{9,})"),
)


def redact_secrets(text: str) -> str:
    """Keep the first 8 characters of anything that looks like a token."""
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(lambda m: f"{m.group(1)}{m.group(2)[:8]}...", text)
    return text


class SecretRedactingFilter(logging.Filter):
    """Rewrite the rendered message of each record with tokens masked."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_secrets(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: bool = True,
) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Override default log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Override default format (simple, detailed, json)
        enable_file: Allow the file handler (ENABLE_FILE_LOGGING must also be on)
    """
    level = (log_level or LOG_LEVEL).upper()
    fmt = log_format or LOG_FORMAT
    formatter = logging.Formatter(_FORMATS.get(fmt, DETAILED_FORMAT), datefmt="%Y-%m-%d %H:%M:%S")
    redactor = SecretRedactingFilter()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # handlers do the filtering
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers: list[logging.Handler] = []
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    handlers.append(console_handler)

    file_logging = enable_file and ENABLE_FILE_LOGGING
    if file_logging:
        log_dir = Path(LOG_FILE_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / LOG_FILE_NAME)
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(redactor)
        root_logger.addHandler(handler)

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.info(f"Logging configured: level={level}, format={fmt}, file_logging={file_logging}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The module name (typically __name__)
    """
    return logging.getLogger(name)
