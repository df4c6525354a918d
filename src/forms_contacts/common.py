from __future__ import annotations

import logging
import os
from typing import Any, Optional

from .config_loader import ConverterConfig, load_converter_config
from .csv_codec import format_csv_field, format_csv_line, parse_csv_line
from .mapping import ContactRowMapper, map_row, split_group_last_name
from .models import (
    GOOGLE_CONTACTS_COLUMNS,
    GOOGLE_CONTACTS_HEADER,
    OUTPUT_COLUMN_COUNT,
    ContactImportRow,
    ConversionStats,
    GroupSurname,
    InputRow,
    SkipReason,
)

logger = logging.getLogger(__name__)

UTF8_BOM = b"\xef\xbb\xbf"

__all__ = [
    "ContactImportRow",
    "ContactRowMapper",
    "ConversionStats",
    "ConverterConfig",
    "GOOGLE_CONTACTS_COLUMNS",
    "GOOGLE_CONTACTS_HEADER",
    "GroupSurname",
    "InputRow",
    "OUTPUT_COLUMN_COUNT",
    "SkipReason",
    "UTF8_BOM",
    "format_csv_field",
    "format_csv_line",
    "load_config",
    "load_converter_config",
    "map_row",
    "parse_csv_line",
    "split_group_last_name",
    "warn_missing",
]


def load_config(args: Any) -> ConverterConfig:
    return load_converter_config(args)


def warn_missing(path: Optional[str], label: str) -> bool:
    if not path or not os.path.exists(path):
        logger.warning("%s path missing: %s", label, path)
        return True
    return False
