import pytest

from forms_contacts.common import (
    GOOGLE_CONTACTS_COLUMNS,
    ContactImportRow,
    ContactRowMapper,
    GroupSurname,
    InputRow,
    format_csv_field,
    format_csv_line,
    map_row,
    parse_csv_line,
    split_group_last_name,
)


def test_parse_plain_and_quoted_fields():
    assert parse_csv_line("a,b,c") == ["a", "b", "c"]
    assert parse_csv_line('x,"Doe, John",y') == ["x", "Doe, John", "y"]
    assert parse_csv_line('"say ""hi""",2') == ['say "hi"', "2"]


def test_parse_keeps_empty_fields_and_single_field_lines():
    assert parse_csv_line("") == [""]
    assert parse_csv_line("single") == ["single"]
    assert parse_csv_line(",,") == ["", "", ""]
    assert parse_csv_line("a,") == ["a", ""]


def test_parse_field_count_matches_unescaped_commas():
    line = 'one,"two, three","four ""4"", five",six'
    fields = parse_csv_line(line)
    assert len(fields) == 4
    assert fields[2] == 'four "4", five'


def test_parse_tolerates_unbalanced_quotes():
    assert parse_csv_line('a,"b,c') == ["a", "b,c"]


def test_parse_empty_quoted_field():
    assert parse_csv_line('x,"",y') == ["x", "", "y"]


def test_format_quote_doubling():
    assert format_csv_field('a"b') == '"a""b"'


def test_format_only_quotes_when_needed():
    assert format_csv_field("plain") == "plain"
    assert format_csv_field("") == ""
    assert format_csv_field("a,b") == '"a,b"'
    assert format_csv_field("line\nbreak") == '"line\nbreak"'
    assert format_csv_line(["a", "b,c", ""]) == 'a,"b,c",'


@pytest.mark.parametrize(
    "value",
    ['"', '""', 'a"', '"a', "a,b", 'He said "hi", then left', "multi\nline", ","],
)
def test_escaped_fields_parse_back(value):
    assert parse_csv_line(format_csv_line([value])) == [value]


def test_split_group_last_name():
    assert split_group_last_name("ПМ-35 ПОНОМАРЕВ") == GroupSurname("ПМ-35", "ПОНОМАРЕВ")
    assert split_group_last_name("ONLYNAME") == GroupSurname("", "ONLYNAME")
    assert split_group_last_name("") == GroupSurname("", "")


def test_split_group_last_name_trims_extra_spaces():
    names = split_group_last_name("ИВТ-21   Сидоров Петр")
    assert names.group == "ИВТ-21"
    assert names.surname == "Сидоров Петр"
    assert names.last_name == "ИВТ-21 Сидоров Петр"
    assert split_group_last_name(" Lonely") == GroupSurname("", "Lonely")
    assert split_group_last_name("G1   ") == GroupSurname("G1", "")


def test_input_row_requires_seven_fields():
    with pytest.raises(ValueError):
        InputRow.from_fields(["a"] * 6)
    row = InputRow.from_fields(["t", "r", "Ivan", "G Petrov", "l@x", "c@x", "+7", "extra"])
    assert row.first_name == "Ivan"
    assert row.phone == "+7"


def test_mapper_places_fields():
    fields = ["x", "Lector", "Ivan", "ПМ-35 Petrov", "login@x.com", "created@x.com", "+79991234567"]
    contact = ContactRowMapper("MyGroup").map(fields)
    assert contact == ContactImportRow(
        first_name="Ivan",
        last_name="ПМ-35 Petrov",
        labels="MyGroup",
        email_1="created@x.com",
        email_2="login@x.com",
        phone_1="+79991234567",
    )
    row = contact.to_fields()
    assert len(row) == len(GOOGLE_CONTACTS_COLUMNS) == 23
    filled = {index for index, value in enumerate(row) if value}
    assert filled == {0, 2, 16, 18, 20, 22}
    assert contact.to_dict()["E-mail 2 - Value"] == "login@x.com"


def test_mapper_without_group_and_label():
    row = map_row(["t", "r", "Anna", "Smirnova", "", "", ""], labels="")
    assert row[0] == "Anna"
    assert row[2] == "Smirnova"
    assert row[16] == ""


def test_mapper_skips_short_rows():
    assert ContactRowMapper("L").map(["a", "b", "c", "d", "e"]) is None
    assert map_row([]) is None


def test_mapper_passes_values_through_unvalidated():
    fields = ["t", "r", 'Jo "JJ"', "G Doe", "not-an-email", "also, weird", "call me"]
    row = map_row(fields, labels="a,b")
    assert row[18] == "also, weird"
    line = format_csv_line(row)
    assert parse_csv_line(line) == row


if __name__ == "__main__":
    pytest.main(["-q"])
