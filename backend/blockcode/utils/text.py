import re
from typing import Tuple

DEFAULT_INDENT = "    "


def get_indentation(line: str) -> str:
    """
    Extract indentation from a line of code

    Args:
        line: Line of code

    Returns:
        Leading whitespace
    """
    match = re.match(r'^([ \t]*)', line)
    return match.group(1) if match else ""


def cursor_line_from_offset(text: str, offset: int) -> int:
    """Zero-based line of a character offset, counting the line breaks before it"""
    offset = max(0, min(offset, len(text)))
    return text.count('\n', 0, offset)


def clamp_cursor_line(text: str, line: int) -> int:
    """Clamp a line index into [0, lineCount-1]"""
    return max(0, min(line, len(text.split('\n')) - 1))


def current_token(line: str) -> str:
    """
    The token being typed: last whitespace-separated fragment of the line

    Args:
        line: Text of the cursor line up to the cursor

    Returns:
        The fragment, empty for a blank line or after trailing whitespace
    """
    return re.split(r'\s+', line)[-1]


def line_start_offset(text: str, line_index: int) -> int:
    """Character offset of the first character of a line"""
    lines = text.split('\n')
    return sum(len(line) + 1 for line in lines[:line_index])


def indent_for_line(text: str, line_index: int, indent_unit: str = DEFAULT_INDENT) -> str:
    """
    Indentation a line should carry after a block is placed on it

    A line keeps its own indentation unless the nearest non-blank line above
    ends with ':' and the line is not already deeper than that header, in
    which case it sits one unit inside the header.

    Args:
        text: Full document text
        line_index: Zero-based line
        indent_unit: One level of indentation

    Returns:
        Leading whitespace for the line
    """
    lines = text.split('\n')
    line_index = clamp_cursor_line(text, line_index)
    own = get_indentation(lines[line_index])

    for line in reversed(lines[:line_index]):
        if not line.strip():
            continue
        header_indent = get_indentation(line)
        if line.strip().endswith(':') and len(own) <= len(header_indent):
            return header_indent + indent_unit
        break

    return own


def apply_block(
    text: str,
    offset: int,
    block: str,
    completion: str,
    indent_unit: str = DEFAULT_INDENT
) -> Tuple[str, int]:
    """
    Insert a chosen suggestion, replacing the token being typed

    The token ending at the cursor becomes `block` followed by `completion`;
    text after the cursor stays in place. The line is re-indented with
    `indent_for_line` and line breaks inside the completion keep that
    indentation.

    Args:
        text: Full document text
        offset: Cursor offset at the end of the typed token
        block: Suggestion label
        completion: Text inserted after the label
        indent_unit: One level of indentation

    Returns:
        (new text, cursor offset at the end of the inserted text)
    """
    offset = max(0, min(offset, len(text)))
    line_index = cursor_line_from_offset(text, offset)
    lines = text.split('\n')
    start = line_start_offset(text, line_index)

    before = text[start:offset]
    after = lines[line_index][len(before):]
    head = before[:len(before) - len(current_token(before))].lstrip()

    indent = indent_for_line(text, line_index, indent_unit)
    inserted = indent + head + block + completion.replace('\n', '\n' + indent)

    lines[line_index] = inserted + after
    return '\n'.join(lines), start + len(inserted)


def newline_with_indent(
    text: str,
    offset: int,
    indent_unit: str = DEFAULT_INDENT
) -> Tuple[str, int]:
    """
    Enter key: break the line and carry its indentation

    One extra level is added after a line ending with ':'.

    Returns:
        (new text, cursor offset after the inserted indentation)
    """
    offset = max(0, min(offset, len(text)))
    current_line = text[:offset].split('\n')[-1]
    indent = get_indentation(current_line)
    if current_line.strip().endswith(':'):
        indent += indent_unit

    inserted = '\n' + indent
    return text[:offset] + inserted + text[offset:], offset + len(inserted)


def shift_lines(
    text: str,
    start: int,
    end: int,
    increase: bool,
    indent_unit: str = DEFAULT_INDENT
) -> str:
    """
    Indent or dedent every line touched by a selection

    Dedenting only removes a full unit from lines that start with one.
    """
    if end < start:
        start, end = end, start
    lines = text.split('\n')
    first = cursor_line_from_offset(text, start)
    last = cursor_line_from_offset(text, end)

    for i in range(first, last + 1):
        if increase:
            lines[i] = indent_unit + lines[i]
        elif lines[i].startswith(indent_unit):
            lines[i] = lines[i][len(indent_unit):]

    return '\n'.join(lines)
