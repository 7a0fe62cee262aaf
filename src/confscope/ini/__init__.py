"""INI tokenizer emitting (section, name, value) entries through a callback."""

from .tokenizer import EntryHandler, tokenize_file, tokenize_lines, tokenize_stream

__all__ = [
    "EntryHandler",
    "tokenize_file",
    "tokenize_lines",
    "tokenize_stream",
]
