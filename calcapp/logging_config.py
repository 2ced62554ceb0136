"""
Logging setup for the calcapp CLI, shell and RPC server.

The level comes from ``--log-level`` when given, otherwise from
``CALC_LOG_LEVEL`` (``SystemSettings.log_level``). HTTP and completion client
libraries log every request at INFO; they are held at WARNING so currency
lookups and backend calls do not flood the shell.
"""
import logging
from typing import Optional

from .config import SystemSettings

LOG_FORMAT = "[%(asctime)s] calcapp %(name)s %(levelname)s: %(message)s"

QUIET_LOGGERS = ("httpx", "httpcore", "openai", "anthropic")


def resolve_level(level: Optional[str] = None, system: Optional[SystemSettings] = None) -> int:
    name = level or (system.log_level if system is not None else None) or "INFO"
    resolved = logging.getLevelName(name.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Optional[str] = None, system: Optional[SystemSettings] = None) -> int:
    """Configure the root logger and return the level it was set to"""
    lvl = resolve_level(level, system)
    logging.basicConfig(level=lvl, format=LOG_FORMAT)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(lvl, logging.WARNING))
    return lvl
