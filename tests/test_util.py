import pytest

from SCKM.util import extract_value, app_data_dir


class TestExtractValue:

    def test_extracts_between_tokens(self):
        assert extract_value("A[Class B]C", "[Class ", "]") == "B"

    def test_missing_tokens_give_empty_string(self):
        assert extract_value("no-tokens", "X", "Y") == ""

    def test_missing_end_token(self):
        assert extract_value("killed by 'Bob", "killed by '", "'") == ""

    def test_end_token_searched_after_start(self):
        line = "'ignored' CActor::Kill: 'Alice' in zone 'Stanton'"
        assert extract_value(line, "CActor::Kill: '", "'") == "Alice"

    def test_first_occurrence_wins(self):
        assert extract_value("using 'A' using 'B'", "using '", "'") == "A"

    def test_empty_value(self):
        assert extract_value("in zone '' killed", "in zone '", "'") == ""


def test_app_data_dir_override(monkeypatch, tmp_path):
    target = tmp_path / "sckm-home"
    monkeypatch.setenv("SCKM_HOME", str(target))
    assert app_data_dir() == target
    assert target.is_dir()
