from __future__ import annotations

from typing import List, Optional, Sequence

from .models import INPUT_MIN_COLUMNS, ContactImportRow, GroupSurname, InputRow


def split_group_last_name(combined: str) -> GroupSurname:
    """
    Split a "<group> <surname>" token such as ``"ПМ-35 ПОНОМАРЕВ"`` on its first space.

    Without a space the whole token is the surname. Spaces after the first one
    are trimmed from the start of the surname.
    """
    if not combined:
        return GroupSurname()
    group, sep, rest = combined.partition(" ")
    if not sep:
        return GroupSurname(group="", surname=combined)
    return GroupSurname(group=group.rstrip(" "), surname=rest.lstrip(" "))


class ContactRowMapper:
    def __init__(self, labels: str = ""):
        self.labels = labels

    def map(self, fields: Sequence[str]) -> Optional[ContactImportRow]:
        if len(fields) < INPUT_MIN_COLUMNS:
            return None
        row = InputRow.from_fields(fields)
        names = split_group_last_name(row.group_last_name)
        return ContactImportRow(
            first_name=row.first_name,
            last_name=names.last_name,
            labels=self.labels,
            email_1=row.email_created,
            email_2=row.email_login,
            phone_1=row.phone,
        )


def map_row(fields: Sequence[str], labels: str = "") -> Optional[List[str]]:
    contact = ContactRowMapper(labels).map(fields)
    if contact is None:
        return None
    return contact.to_fields()


__all__ = ["ContactRowMapper", "map_row", "split_group_last_name"]
