import argparse
import csv
import json
import logging
from io import StringIO
from typing import Any, Dict, List, Optional

import pandas as pd

from .common import UTF8_BOM, load_config, warn_missing
from .logging_utils import configure_logging
from .models import GOOGLE_CONTACTS_COLUMNS, GOOGLE_CONTACTS_HEADER, OUTPUT_COLUMN_COUNT

logger = logging.getLogger(__name__)

FILL_RATE_COLUMNS = {
    "first_name": "First Name",
    "last_name": "Last Name",
    "labels": "Labels",
    "email_1": "E-mail 1 - Value",
    "email_2": "E-mail 2 - Value",
    "phone_1": "Phone 1 - Value",
}


def pct(n, d):
    return round((n / d * 100.0), 2) if d else 0.0


def find_malformed_rows(text: str) -> List[int]:
    """
    Record numbers (1-based, header is record 1) whose field count is not 23.

    Records are read quote-aware, so a quoted field holding a newline stays in
    its own record.
    """
    malformed: List[int] = []
    reader = csv.reader(StringIO(text, newline=""))
    for record_number, record in enumerate(reader, start=1):
        if record_number == 1 or not record:
            continue
        if len(record) != OUTPUT_COLUMN_COUNT:
            malformed.append(record_number)
    return malformed


def fill_rates(df: pd.DataFrame) -> Dict[str, float]:
    total = len(df)
    rates: Dict[str, float] = {}
    for key, column in FILL_RATE_COLUMNS.items():
        filled = int((df[column].astype(str).str.strip() != "").sum()) if total else 0
        rates[f"{key}_pct"] = pct(filled, total)
    return rates


def validate_contacts_file(path: str) -> Dict[str, Any]:
    with open(path, "rb") as handle:
        raw = handle.read()

    has_bom = raw.startswith(UTF8_BOM)
    text = raw.decode("utf-8-sig", errors="replace")
    header_line = text.split("\n", 1)[0]
    header_ok = header_line == GOOGLE_CONTACTS_HEADER
    malformed = find_malformed_rows(text)

    report: Dict[str, Any] = {
        "path": path,
        "has_bom": has_bom,
        "header_ok": header_ok,
        "malformed_rows": malformed,
        "rows_total": 0,
    }
    if not header_ok:
        logger.warning("Unexpected header in %s: %s", path, header_line[:200])
    if malformed:
        logger.warning(
            "%d row(s) in %s do not have %d fields", len(malformed), path, OUTPUT_COLUMN_COUNT
        )

    if header_ok and not malformed:
        df = pd.read_csv(StringIO(text), dtype=str, keep_default_na=False)
        report["rows_total"] = len(df)
        report["columns_ok"] = list(df.columns) == GOOGLE_CONTACTS_COLUMNS
        report.update(fill_rates(df))
    else:
        report["columns_ok"] = False

    report["valid"] = bool(has_bom and header_ok and report["columns_ok"] and not malformed)
    return report


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Check a generated Google Contacts CSV.")
    parser.add_argument("--config", type=str, default=None)
    parser.add_argument("--contacts-csv", type=str, default=None)
    parser.add_argument("--report-json", type=str, default=None)
    parser.add_argument("--log-level", type=str, default=None, help="Override logging level")

    args = parser.parse_args(argv)
    config = load_config(args)
    configure_logging(config, level_override=args.log_level)

    contacts_csv = args.contacts_csv or config.outputs.contacts_csv
    if warn_missing(contacts_csv, "Contacts CSV"):
        return 1

    report = validate_contacts_file(contacts_csv)
    print(
        {
            "rows_total": report["rows_total"],
            "valid": report["valid"],
            **{key: value for key, value in report.items() if key.endswith("_pct")},
        }
    )
    if args.report_json:
        with open(args.report_json, "w", encoding="utf-8") as handle:
            json.dump(report, handle, ensure_ascii=False, indent=2)
        print(f"Saved: {args.report_json}")
    return 0 if report["valid"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
