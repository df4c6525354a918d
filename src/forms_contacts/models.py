from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

GOOGLE_CONTACTS_COLUMNS: List[str] = [
    "First Name",
    "Middle Name",
    "Last Name",
    "Phonetic First Name",
    "Phonetic Middle Name",
    "Phonetic Last Name",
    "Name Prefix",
    "Name Suffix",
    "Nickname",
    "File As",
    "Organization Name",
    "Organization Title",
    "Organization Department",
    "Birthday",
    "Notes",
    "Photo",
    "Labels",
    "E-mail 1 - Label",
    "E-mail 1 - Value",
    "E-mail 2 - Label",
    "E-mail 2 - Value",
    "Phone 1 - Label",
    "Phone 1 - Value",
]
GOOGLE_CONTACTS_HEADER = ",".join(GOOGLE_CONTACTS_COLUMNS)
OUTPUT_COLUMN_COUNT = len(GOOGLE_CONTACTS_COLUMNS)

OUTPUT_IDX_FIRST_NAME = 0
OUTPUT_IDX_LAST_NAME = 2
OUTPUT_IDX_LABELS = 16
OUTPUT_IDX_EMAIL_1 = 18
OUTPUT_IDX_EMAIL_2 = 20
OUTPUT_IDX_PHONE_1 = 22

# Google Forms export layout
INPUT_IDX_TIMESTAMP = 0
INPUT_IDX_ROLE = 1
INPUT_IDX_FIRST_NAME = 2
INPUT_IDX_GROUP_LAST_NAME = 3
INPUT_IDX_EMAIL_LOGIN = 4
INPUT_IDX_EMAIL_CREATED = 5
INPUT_IDX_PHONE = 6
INPUT_MIN_COLUMNS = 7


class SkipReason:
    EMPTY_LINE = "empty_line"
    INSUFFICIENT_COLUMNS = "insufficient_columns"
    ROW_FAULT = "row_fault"


@dataclass(frozen=True)
class InputRow:
    timestamp: str
    role: str
    first_name: str
    group_last_name: str
    email_login: str
    email_created: str
    phone: str

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> "InputRow":
        if len(fields) < INPUT_MIN_COLUMNS:
            raise ValueError(
                f"expected at least {INPUT_MIN_COLUMNS} fields, got {len(fields)}"
            )
        return cls(
            timestamp=fields[INPUT_IDX_TIMESTAMP],
            role=fields[INPUT_IDX_ROLE],
            first_name=fields[INPUT_IDX_FIRST_NAME],
            group_last_name=fields[INPUT_IDX_GROUP_LAST_NAME],
            email_login=fields[INPUT_IDX_EMAIL_LOGIN],
            email_created=fields[INPUT_IDX_EMAIL_CREATED],
            phone=fields[INPUT_IDX_PHONE],
        )


@dataclass(frozen=True)
class GroupSurname:
    group: str = ""
    surname: str = ""

    @property
    def last_name(self) -> str:
        """Contacts "Last Name" value: ``"<group> <surname>"`` or the bare surname."""
        if self.group:
            return f"{self.group} {self.surname}"
        return self.surname


@dataclass(frozen=True)
class ContactImportRow:
    first_name: str = ""
    last_name: str = ""
    labels: str = ""
    email_1: str = ""
    email_2: str = ""
    phone_1: str = ""

    def to_fields(self) -> List[str]:
        fields = [""] * OUTPUT_COLUMN_COUNT
        fields[OUTPUT_IDX_FIRST_NAME] = self.first_name
        fields[OUTPUT_IDX_LAST_NAME] = self.last_name
        fields[OUTPUT_IDX_LABELS] = self.labels
        fields[OUTPUT_IDX_EMAIL_1] = self.email_1
        fields[OUTPUT_IDX_EMAIL_2] = self.email_2
        fields[OUTPUT_IDX_PHONE_1] = self.phone_1
        return fields

    def to_dict(self) -> Dict[str, str]:
        return dict(zip(GOOGLE_CONTACTS_COLUMNS, self.to_fields()))


@dataclass
class ConversionStats:
    lines_read: int = 0
    processed: int = 0
    skipped_empty: int = 0
    skipped_short: int = 0
    failed: int = 0

    def record_skip(self, reason: str) -> None:
        if reason == SkipReason.EMPTY_LINE:
            self.skipped_empty += 1
        elif reason == SkipReason.INSUFFICIENT_COLUMNS:
            self.skipped_short += 1
        elif reason == SkipReason.ROW_FAULT:
            self.failed += 1
        else:
            raise ValueError(f"unknown skip reason: {reason!r}")

    @property
    def skipped(self) -> int:
        return self.skipped_empty + self.skipped_short + self.failed

    def to_dict(self) -> Dict[str, int]:
        return {
            "lines_read": self.lines_read,
            "processed": self.processed,
            "skipped_empty": self.skipped_empty,
            "skipped_short": self.skipped_short,
            "failed": self.failed,
            "skipped": self.skipped,
        }
