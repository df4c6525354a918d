from __future__ import annotations

import logging
import os
from typing import Any, MutableMapping, Optional, Tuple

from .config_loader import ConverterConfig

LOG_LEVEL_ENV = "FORMS_CONTACTS_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s: %(message)s"


class RowLogAdapter(logging.LoggerAdapter):
    """Prefix messages with the input line they concern: ``Line #7: ...``."""

    def __init__(self, logger: logging.Logger, line_number: int):
        super().__init__(logger, {"line_number": line_number})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"Line #{self.extra['line_number']}: {msg}", kwargs


def _resolve_level(level_name: str) -> int:
    normalized = (level_name or "WARNING").upper()
    if normalized.isdigit():
        return int(normalized)
    level = getattr(logging, normalized, None)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(config: ConverterConfig, level_override: Optional[str] = None) -> None:
    """
    Set the root level from, in order: ``FORMS_CONTACTS_LOG_LEVEL``, the
    ``--log-level`` flag, ``logging.level`` in the YAML config, ``WARNING``.

    Skipped-row warnings are part of the normal console output, so the default
    level lets them through. Unknown level names fall back to ``WARNING``.
    """
    effective_level_name = (
        os.getenv(LOG_LEVEL_ENV) or level_override or config.logging.level or "WARNING"
    )
    level_value = _resolve_level(effective_level_name)

    root_logger = logging.getLogger()
    if root_logger.handlers:
        root_logger.setLevel(level_value)
    else:
        logging.basicConfig(level=level_value, format=LOG_FORMAT)
