"""Tests for confscope.ini tokenizer"""

import io
from pathlib import Path
from typing import List, Tuple

import pytest

from confscope.exceptions import ConfigFileError, ConfigurationError
from confscope.ini import tokenize_file, tokenize_lines, tokenize_stream


class Recorder:
    """Handler collecting every entry it receives."""

    def __init__(self):
        self.entries: List[Tuple[str, str, str]] = []

    def __call__(self, section: str, name: str, value: str) -> None:
        self.entries.append((section, name, value))


def tokenize(text: str) -> List[Tuple[str, str, str]]:
    recorder = Recorder()
    tokenize_stream(io.StringIO(text), recorder)
    return recorder.entries


class TestTokenizeStream:
    """Tests for the line grammar"""

    def test_top_level_entries_have_empty_section(self):
        assert tokenize("a = 1\n") == [("", "a", "1")]

    def test_sections_and_entries_in_order(self):
        text = "a=1\n[db]\nhost = localhost\nport=5432\n[cache]\nttl = 60\n"
        assert tokenize(text) == [
            ("", "a", "1"),
            ("db", "host", "localhost"),
            ("db", "port", "5432"),
            ("cache", "ttl", "60"),
        ]

    def test_colon_separator(self):
        assert tokenize("name: value\n") == [("", "name", "value")]

    def test_first_separator_wins(self):
        """Test value may contain further separators"""
        assert tokenize("url = http://host:80/a=b\n") == [("", "url", "http://host:80/a=b")]

    def test_whitespace_trimmed(self):
        assert tokenize("   [ db ]  \n  host   =   local host  \n") == [
            ("db", "host", "local host")
        ]

    def test_comments_and_blank_lines_skipped(self):
        text = "; comment\n# another\n\n   \n[s]\n  ; indented comment\nk=v\n"
        assert tokenize(text) == [("s", "k", "v")]

    def test_inline_comment_needs_whitespace(self):
        """Test ';' only starts an inline comment after whitespace"""
        assert tokenize("a = 1 ; note\nb = x;y\n") == [("", "a", "1"), ("", "b", "x;y")]

    def test_semicolon_at_value_start_is_kept(self):
        assert tokenize("a = ;literal\n") == [("", "a", ";literal")]

    def test_empty_value(self):
        assert tokenize("a =\n") == [("", "a", "")]

    def test_comment_after_section_header(self):
        assert tokenize("[db] ; primary\nk=v\n") == [("db", "k", "v")]

    def test_bom_stripped(self):
        assert tokenize("\ufeffa = 1\n") == [("", "a", "1")]

    def test_repeated_section_reported_again(self):
        text = "[db]\na=1\n[cache]\nb=2\n[db]\nc=3\n"
        assert [e[0] for e in tokenize(text)] == ["db", "cache", "db"]

    def test_scoped_key_names_passed_through(self):
        assert tokenize("prod.2.timeout = 90\n") == [("", "prod.2.timeout", "90")]

    def test_no_trailing_newline(self):
        assert tokenize("a = 1") == [("", "a", "1")]


class TestSyntaxErrors:
    """Tests for malformed lines"""

    def test_missing_separator(self):
        with pytest.raises(ConfigFileError) as exc_info:
            tokenize("a = 1\njust text\n")
        assert exc_info.value.line == 2
        assert exc_info.value.code == "CONFIG_FILE"
        assert exc_info.value.details == {"filename": "<stream>", "line": 2}

    def test_unterminated_section(self):
        with pytest.raises(ConfigFileError) as exc_info:
            tokenize("[db\n")
        assert exc_info.value.line == 1

    def test_empty_name(self):
        with pytest.raises(ConfigFileError):
            tokenize(" = value\n")

    def test_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            tokenize("oops\n")

    def test_entries_before_error_are_delivered(self):
        recorder = Recorder()
        with pytest.raises(ConfigFileError):
            tokenize_lines(["a=1\n", "bad\n", "b=2\n"], recorder, "mem")
        assert recorder.entries == [("", "a", "1")]

    def test_source_named_in_message(self):
        with pytest.raises(ConfigFileError) as exc_info:
            tokenize_lines(["bad"], Recorder(), "app.ini")
        assert "app.ini:1" in exc_info.value.message


class TestHandlerErrors:
    """Tests for exceptions raised by the handler"""

    def test_handler_exception_propagates_and_stops(self):
        seen = []

        def handler(section, name, value):
            seen.append(name)
            if name == "b":
                raise RuntimeError("stop")

        with pytest.raises(RuntimeError, match="stop"):
            tokenize_stream(io.StringIO("a=1\nb=2\nc=3\n"), handler)
        assert seen == ["a", "b"]


class TestTokenizeFile:
    """Tests for reading files from disk"""

    def test_reads_utf8_file(self, tmp_path: Path):
        path = tmp_path / "app.ini"
        path.write_text("[s]\nname = café\n", encoding="utf-8")
        recorder = Recorder()
        tokenize_file(str(path), recorder)
        assert recorder.entries == [("s", "name", "café")]

    def test_falls_back_to_detected_encoding(self, tmp_path: Path):
        """Test non UTF-8 bytes are decoded with the detected encoding"""
        path = tmp_path / "legacy.ini"
        text = "[s]\n" + "".join(f"k{i} = valeur déjà vue été\n" for i in range(40))
        path.write_bytes(text.encode("latin-1"))
        recorder = Recorder()
        tokenize_file(str(path), recorder)
        assert len(recorder.entries) == 40
        assert all(entry[0] == "s" for entry in recorder.entries)
        assert all(entry[2].startswith("valeur") for entry in recorder.entries)

    def test_explicit_encoding(self, tmp_path: Path):
        path = tmp_path / "legacy.ini"
        path.write_bytes("name = été\n".encode("latin-1"))
        recorder = Recorder()
        tokenize_file(str(path), recorder, encoding="latin-1")
        assert recorder.entries == [("", "name", "été")]

    def test_missing_file(self, tmp_path: Path):
        missing = tmp_path / "nope.ini"
        with pytest.raises(ConfigFileError) as exc_info:
            tokenize_file(str(missing), Recorder())
        assert exc_info.value.filename == str(missing)
        assert exc_info.value.line is None

    def test_directory_is_not_a_file(self, tmp_path: Path):
        with pytest.raises(ConfigFileError):
            tokenize_file(str(tmp_path), Recorder())

    def test_syntax_error_reports_filename(self, tmp_path: Path):
        path = tmp_path / "bad.ini"
        path.write_text("a = 1\n[broken\n")
        with pytest.raises(ConfigFileError) as exc_info:
            tokenize_file(str(path), Recorder())
        assert exc_info.value.details == {"filename": str(path), "line": 2}
