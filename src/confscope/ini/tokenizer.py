"""Callback based INI tokenizer.

Reads INI text line by line and calls ``handler(section, name, value)`` once
per entry, in file order. The tokenizer keeps no state beyond the current
section name; building anything out of the entries is the handler's job.

Accepted syntax:

    ; comment
    # comment
    top_level = value          ; reported with section ""
    [section]
    name = value               ; inline comment after whitespace
    other: value

Section names and entries are stripped of surrounding whitespace. A line
that is neither blank, a comment, a section header nor a ``name=value`` /
``name:value`` pair is a syntax error.
"""

from io import StringIO
from typing import Callable, Iterable, Optional, TextIO, Tuple

import chardet

from confscope.exceptions import ConfigFileError

EntryHandler = Callable[[str, str, str], None]

COMMENT_PREFIXES = (";", "#")
INLINE_COMMENT_PREFIX = ";"
UTF8_BOM = "\ufeff"


def _strip_inline_comment(text: str) -> str:
    # inih rule: ';' only starts a comment when preceded by whitespace
    for pos, char in enumerate(text):
        if char == INLINE_COMMENT_PREFIX and pos > 0 and text[pos - 1].isspace():
            return text[:pos]
    return text


def _split_entry(line: str) -> Optional[Tuple[str, str]]:
    seps = [pos for pos in (line.find("="), line.find(":")) if pos >= 0]
    if not seps:
        return None
    pos = min(seps)
    return line[:pos].strip(), _strip_inline_comment(line[pos + 1:].lstrip()).strip()


def tokenize_lines(lines: Iterable[str], handler: EntryHandler, source: str = "<stream>") -> None:
    """Tokenize already decoded lines.

    Raises:
        ConfigFileError: On the first line that cannot be tokenized
    """
    section = ""
    for lineno, raw in enumerate(lines, start=1):
        if lineno == 1 and raw.startswith(UTF8_BOM):
            raw = raw[len(UTF8_BOM):]

        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue

        if line.startswith("["):
            end = line.find("]")
            if end < 0:
                raise ConfigFileError(source, "section header missing ']'", lineno)
            section = line[1:end].strip()
            continue

        entry = _split_entry(line)
        if entry is None:
            raise ConfigFileError(source, "expected 'name = value' or 'name: value'", lineno)
        name, value = entry
        if not name:
            raise ConfigFileError(source, "entry has an empty name", lineno)

        handler(section, name, value)


def tokenize_stream(stream: TextIO, handler: EntryHandler, source: str = "<stream>") -> None:
    """Tokenize an open text stream."""
    tokenize_lines(stream, handler, source)


def _decode_file(filename: str) -> StringIO:
    with open(filename, "rb") as fp:
        raw = fp.read()

    # UTF-8 has already failed at this point
    encoding = chardet.detect(raw).get("encoding") or "latin-1"

    try:
        return StringIO(raw.decode(encoding))
    except (UnicodeDecodeError, LookupError) as e:
        raise ConfigFileError(filename, f"cannot decode file: {e}") from e


def tokenize_file(filename: str, handler: EntryHandler, encoding: Optional[str] = None) -> None:
    """Tokenize a file on disk.

    The file is read with the given encoding (UTF-8 by default). When that
    fails to decode, it is read again with the encoding chardet detects.

    Raises:
        ConfigFileError: If the file cannot be opened, decoded or tokenized
    """
    try:
        with open(filename, "r", encoding=encoding or "utf-8") as fp:
            lines = fp.readlines()
    except UnicodeDecodeError:
        try:
            lines = _decode_file(filename).readlines()
        except OSError as e:
            raise ConfigFileError(filename, str(e)) from e
    except OSError as e:
        raise ConfigFileError(filename, e.strerror or str(e)) from e

    tokenize_lines(lines, handler, filename)
