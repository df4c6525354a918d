from __future__ import annotations

import argparse
import logging
import sys
from typing import BinaryIO, Iterable, Optional, Sequence, TextIO, Tuple

from .common import UTF8_BOM, load_config
from .csv_codec import format_csv_line, parse_csv_line
from .logging_utils import RowLogAdapter, configure_logging
from .mapping import ContactRowMapper
from .models import (
    GOOGLE_CONTACTS_HEADER,
    INPUT_MIN_COLUMNS,
    ConversionStats,
    SkipReason,
)

logger = logging.getLogger(__name__)

OUTPUT_ENCODING = "utf-8"
# Undecodable input bytes are carried through to the output unchanged.
PASSTHROUGH_ERRORS = "surrogateescape"


class ConversionError(Exception):
    exit_code = 1


class InvalidArgumentCount(ConversionError):
    pass


class InputFileOpenError(ConversionError):
    pass


class OutputFileOpenError(ConversionError):
    pass


def resolve_paths(paths: Sequence[str]) -> Tuple[Optional[str], Optional[str]]:
    if not paths:
        return None, None
    if len(paths) == 2:
        return paths[0], paths[1]
    raise InvalidArgumentCount(
        f"expected 0 or 2 file arguments (input and output), got {len(paths)}"
    )


def prompt_labels(stream: Optional[TextIO] = None) -> str:
    """Ask for the Labels value on stdin; EOF counts as an empty answer."""
    print("Enter a name for the contact group (leave empty for none): ", end="", flush=True)
    answer = (stream or sys.stdin).readline()
    return answer.rstrip("\r\n")


def _encode_line(text: str) -> bytes:
    return (text + "\n").encode(OUTPUT_ENCODING, errors=PASSTHROUGH_ERRORS)


def convert_lines(
    lines: Iterable[str], output: BinaryIO, mapper: ContactRowMapper
) -> ConversionStats:
    """
    Stream Google Forms lines into a Google Contacts file.

    Writes the BOM and the contacts header first. The first input line is the
    forms header and is always dropped, whatever it contains. Blank lines and
    rows with too few columns are logged and skipped; an unexpected failure on
    one row is logged with its content and the run moves on to the next line.
    Rows already written stay written.
    """
    output.write(UTF8_BOM)
    output.write(_encode_line(GOOGLE_CONTACTS_HEADER))

    stats = ConversionStats()
    for line_number, raw_line in enumerate(lines, start=1):
        stats.lines_read += 1
        line = raw_line.rstrip("\r\n")
        if line_number == 1:
            continue
        row_log = RowLogAdapter(logger, line_number)
        if not line:
            row_log.warning("skipped empty line")
            stats.record_skip(SkipReason.EMPTY_LINE)
            continue

        fields = parse_csv_line(line)
        if len(fields) < INPUT_MIN_COLUMNS:
            row_log.warning(
                "skipped, not enough columns (%d found, at least %d expected). Line: %s",
                len(fields),
                INPUT_MIN_COLUMNS,
                line,
            )
            stats.record_skip(SkipReason.INSUFFICIENT_COLUMNS)
            continue

        try:
            contact = mapper.map(fields)
            if contact is None:
                raise ValueError("row could not be mapped")
            encoded = _encode_line(format_csv_line(contact.to_fields()))
        except Exception as exc:
            row_log.error("failed to process: %s. Line: %s", exc, line)
            stats.record_skip(SkipReason.ROW_FAULT)
            continue

        output.write(encoded)
        stats.processed += 1

    return stats


def convert_file(
    input_path: str,
    output_path: str,
    labels: str = "",
    encoding: Optional[str] = None,
) -> ConversionStats:
    try:
        # only \n ends a line; a bare \r stays inside its field
        input_handle = open(
            input_path, "r", encoding=encoding, errors=PASSTHROUGH_ERRORS, newline="\n"
        )
    except (OSError, LookupError) as exc:
        raise InputFileOpenError(f"Unable to open input file: {input_path} ({exc})") from exc

    with input_handle:
        try:
            output_handle = open(output_path, "wb")
        except OSError as exc:
            raise OutputFileOpenError(
                f"Unable to open output file: {output_path} ({exc})"
            ) from exc
        with output_handle:
            return convert_lines(input_handle, output_handle, ContactRowMapper(labels))


class ConverterArgumentParser(argparse.ArgumentParser):
    """Report command-line errors the same way as a wrong path count."""

    def error(self, message):
        raise InvalidArgumentCount(message)


def build_parser() -> ConverterArgumentParser:
    parser = ConverterArgumentParser(
        description="Convert a Google Forms CSV export into a Google Contacts import CSV.",
        usage="%(prog)s [options] [INPUT_CSV OUTPUT_CSV]",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="Input and output CSV paths; give both or neither (defaults: input.csv output.csv).",
    )
    parser.add_argument("--config", type=str, default=None, help="Path to YAML config.")
    parser.add_argument(
        "--labels", type=str, default=None, help="Labels value; skips the interactive prompt."
    )
    parser.add_argument("--input-encoding", type=str, default=None)
    parser.add_argument("--log-level", type=str, default=None, help="Override logging level")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_intermixed_args(argv)
        args.input_csv, args.output_csv = resolve_paths(args.paths)
    except InvalidArgumentCount as exc:
        print(f"Error: {exc}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        print("Note: quote paths that contain spaces.", file=sys.stderr)
        return exc.exit_code

    config = load_config(args)
    configure_logging(config, level_override=args.log_level)

    input_csv = config.inputs.forms_csv
    output_csv = config.outputs.contacts_csv
    print(f"Reading from: {input_csv}")
    print(f"Writing to:   {output_csv} (UTF-8 with BOM)")

    labels = config.conversion.labels
    if labels is None:
        labels = prompt_labels()
    print(f"Using group label: '{labels or '[EMPTY]'}'")

    try:
        stats = convert_file(input_csv, output_csv, labels, encoding=config.inputs.encoding)
    except ConversionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        logger.debug("Conversion aborted", exc_info=True)
        return exc.exit_code

    logger.info("Run summary: %s", stats.to_dict())
    print(f"Processing complete. Data rows converted: {stats.processed}.")
    if stats.skipped:
        print(f"Lines skipped: {stats.skipped}.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
