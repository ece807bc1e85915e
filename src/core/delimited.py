"""
Delimited text (CSV) line tokenizing and field quoting.
"""

import re

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> list[str]:
    """Split text on CR, LF or CRLF only; other Unicode separators stay in the line."""
    return _LINE_BREAK.split(text)


def tokenize_line(line: str, delimiter: str = ",") -> list[str]:
    """
    Split one line of delimited text into trimmed fields.

    Double quotes toggle quoted mode, where the delimiter is literal content;
    a doubled quote inside a quoted field yields one literal '"'.
    Always returns at least one field.
    """
    fields = []
    current = []
    in_quotes = False
    i = 0

    while i < len(line):
        char = line[i]
        if char == '"':
            if in_quotes and line[i + 1 : i + 2] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current).strip())
    return fields


def quote_field(value) -> str:
    """Wrap a value in double quotes, doubling any quotes it contains."""
    text = "" if value is None else str(value)
    return '"' + text.replace('"', '""') + '"'


def join_fields(values: list, delimiter: str = ",") -> str:
    """Quote every value and join them into one line."""
    return delimiter.join(quote_field(v) for v in values)
