import io

import pytest

from dbplus.util import QueryKind, is_known_data_type, show_help, split, to_upper


def test_split_query_tokens():
    tokens = split("CREATE TABLE persons", " ")
    assert tokens[0] == "CREATE"
    assert tokens[1] == "TABLE"


def test_split_keeps_empty_fields():
    assert split("a  b", " ") == ["a", "", "b"]
    assert split("", " ") == [""]
    assert split("abc ", " ") == ["abc", ""]


def test_split_join_round_trip():
    text = "students name varchar 0 0"
    assert " ".join(split(text, " ")) == text


def test_split_rejects_long_delimiter():
    with pytest.raises(ValueError):
        split("a b", "  ")


def test_to_upper():
    assert to_upper("hhjh fn") == "HHJH FN"


def test_to_upper_is_idempotent():
    once = to_upper("Mixed Case 123")
    assert to_upper(once) == once


@pytest.mark.parametrize(
    "name", ["VARCHAR", "INT", "INTEGER", "TEXT", "DECIMAL", "DOUBLE", "LONG"]
)
def test_known_data_types(name):
    assert is_known_data_type(name) is True


@pytest.mark.parametrize("name", ["varchar", "FLOAT", ""])
def test_unknown_data_types(name):
    assert is_known_data_type(name) is False


def test_query_kinds_differ():
    assert QueryKind[to_upper("read")] is QueryKind.READ
    assert QueryKind[to_upper("write")] is QueryKind.WRITE
    assert QueryKind(0) is QueryKind.READ
    assert QueryKind(1) is QueryKind.WRITE


def test_show_help_copies_lines(tmp_path):
    help_file = tmp_path / "help.txt"
    help_file.write_text("first\nsecond", encoding="utf-8")
    out = io.StringIO()
    show_help(help_file, out)
    assert out.getvalue() == "first\nsecond\n"


def test_show_help_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        show_help(tmp_path / "absent.txt", io.StringIO())