import pytest

from csv_parser import ParsedTable, parse


def test_parse_header_and_rows():
    table = parse("a,b\n1,2\n3,4")
    assert table.schema == ("a", "b")
    assert list(table.rows) == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]


def test_short_row_is_padded_with_empty_strings():
    table = parse("a,b,c\n1,2")
    assert list(table.rows) == [{"a": "1", "b": "2", "c": ""}]


def test_extra_fields_are_dropped():
    table = parse("a,b\n1,2,3,4")
    assert list(table.rows) == [{"a": "1", "b": "2"}]


def test_fields_and_header_are_trimmed():
    table = parse(" name , age \r\n  Ann ,  31 \r\n")
    assert table.schema == ("name", "age")
    assert list(table.rows) == [{"name": "Ann", "age": "31"}]


def test_blank_lines_are_skipped():
    table = parse("\n\na,b\n\n1,2\n\n\n3,4\n")
    assert len(table) == 2
    assert table.rows[1] == {"a": "3", "b": "4"}


def test_crlf_trailing_blank_line_adds_no_row():
    table = parse("a,b\r\n1,2\r\n\r\n")
    assert list(table.rows) == [{"a": "1", "b": "2"}]


def test_whitespace_only_line_is_skipped():
    table = parse("a,b\n1,2\n   \n3,4")
    assert len(table) == 2
    assert all(any(row.values()) for row in table.rows)


def test_comma_is_always_a_separator():
    table = parse('name,city\n"Doe, Jane",Paris')
    assert table.rows[0] == {"name": '"Doe', "city": 'Jane"'}


@pytest.mark.parametrize("raw", ["", "\n\n\n", None, "a,b,c", "a,b\n\n"])
def test_no_data_yields_empty_table(raw):
    table = parse(raw)
    assert table.schema == ()
    assert table.rows == ()
    assert table.is_empty


def test_duplicate_header_last_value_wins():
    table = parse("a,b,a\n1,2,3")
    assert table.schema == ("a", "b")
    assert table.rows[0] == {"a": "3", "b": "2"}


def test_empty_field_stays_empty():
    table = parse("a,b,c\n1,,3")
    assert table.rows[0] == {"a": "1", "b": "", "c": "3"}


def test_bytes_input_is_decoded():
    table = parse("x,y\n1,é".encode("utf-8"))
    assert table.rows[0] == {"x": "1", "y": "é"}


def test_every_row_has_exactly_the_schema_keys():
    table = parse("a,b,c\n1\n1,2,3,4\n,,\n1,2")
    for row in table.rows:
        assert tuple(row.keys()) == table.schema


def test_frame_mirrors_rows():
    table = parse("a,b\n1,x\n2,y")
    frame = table.frame
    assert list(frame.columns) == ["a", "b"]
    assert frame["b"].tolist() == ["x", "y"]
    assert frame.shape == (2, 2)


def test_empty_frame_has_no_columns():
    assert ParsedTable.empty().frame.shape == (0, 0)


def test_from_records_uses_first_record_keys():
    table = ParsedTable.from_records([{"a": 1, "b": None}, {"a": "2"}])
    assert table.schema == ("a", "b")
    assert list(table.rows) == [{"a": "1", "b": ""}, {"a": "2", "b": ""}]
