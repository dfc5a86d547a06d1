"""
Text scanning helpers shared by the parsers.

These helpers understand just enough of both dialects' lexical structure
to skip comments and quoted strings while looking for braces, brackets and
separators.
"""

import re
from typing import Iterator

from schema_extractor.exceptions import StructuralParseError

_QUOTES = ("'", '"', "`")
_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {")", "]", "}"}


def strip_comments(text: str) -> str:
    """Remove block and line comments, leaving string contents intact.

    Line breaks inside removed block comments are kept so that line numbers
    computed on the stripped text match the original.

    Args:
        text: Source text.

    Returns:
        Text without comments.

    Example:
        >>> strip_comments('url = "http://x" // db')
        'url = "http://x" '
    """
    out: list[str] = []
    i = 0
    length = len(text)
    quote = ""

    while i < length:
        char = text[i]

        if quote:
            out.append(char)
            if char == "\\" and i + 1 < length:
                out.append(text[i + 1])
                i += 2
                continue
            if char == quote:
                quote = ""
            i += 1
            continue

        if char in _QUOTES:
            quote = char
            out.append(char)
            i += 1
            continue

        if text.startswith("//", i):
            end = text.find("\n", i)
            i = length if end == -1 else end
            continue

        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            comment = text[i:] if end == -1 else text[i : end + 2]
            out.append("\n" * comment.count("\n"))
            i = length if end == -1 else end + 2
            continue

        out.append(char)
        i += 1

    return "".join(out)


def find_matching_brace(text: str, open_index: int) -> int:
    """Find the bracket closing the one at ``open_index``.

    Brackets of any kind nest; quoted strings are skipped.

    Args:
        text: Text to scan.
        open_index: Index of an opening "(", "[" or "{".

    Returns:
        Index of the matching closing bracket, or -1 if the text ends first.

    Raises:
        ValueError: If ``open_index`` does not point at an opening bracket.
    """
    if open_index >= len(text) or text[open_index] not in _OPENERS:
        raise ValueError(f"no opening bracket at index {open_index}")

    stack = [_OPENERS[text[open_index]]]
    quote = ""
    i = open_index + 1

    while i < len(text):
        char = text[i]
        if quote:
            if char == "\\":
                i += 2
                continue
            if char == quote:
                quote = ""
        elif char in _QUOTES:
            quote = char
        elif char in _OPENERS:
            stack.append(_OPENERS[char])
        elif char in _CLOSERS:
            if char != stack[-1]:
                return -1
            stack.pop()
            if not stack:
                return i
        i += 1

    return -1


def line_number_at(text: str, index: int) -> int:
    """Return the 1-based line number of a character index."""
    return text.count("\n", 0, index) + 1


def iter_blocks(text: str, keyword: str) -> Iterator[tuple[str, str, int]]:
    """Yield every ``keyword Name { ... }`` block of the text.

    Args:
        text: Comment-free text to scan.
        keyword: Block keyword, e.g. "model" or "enum".

    Yields:
        (name, body, line) tuples, body excluding the outer braces.

    Raises:
        StructuralParseError: If a block is never closed.
    """
    pattern = re.compile(rf"(?<![\w.@]){re.escape(keyword)}\s+(\w+)\s*\{{")
    pos = 0

    while True:
        match = pattern.search(text, pos)
        if match is None:
            return

        open_index = match.end() - 1
        close_index = find_matching_brace(text, open_index)
        line = line_number_at(text, match.start())
        if close_index == -1:
            raise StructuralParseError(
                f"Unterminated {keyword} block '{match.group(1)}'", line=line
            )

        yield match.group(1), text[open_index + 1 : close_index], line
        pos = close_index + 1


def split_top_level(text: str, separator: str = ",") -> list[str]:
    """Split text on a separator outside brackets and quoted strings.

    Empty pieces are dropped and every piece is stripped.

    Args:
        text: Text to split, e.g. 'fields: [a, b], references: [id]'.
        separator: Single-character separator.

    Returns:
        List of top-level pieces.

    Example:
        >>> split_top_level('fields: [a, b], references: [id]')
        ['fields: [a, b]', 'references: [id]']
    """
    pieces: list[str] = []
    current: list[str] = []
    depth = 0
    quote = ""
    i = 0

    while i < len(text):
        char = text[i]

        if quote:
            current.append(char)
            if char == "\\" and i + 1 < len(text):
                current.append(text[i + 1])
                i += 2
                continue
            if char == quote:
                quote = ""
        elif char in _QUOTES:
            quote = char
            current.append(char)
        elif char in _OPENERS:
            depth += 1
            current.append(char)
        elif char in _CLOSERS:
            depth -= 1
            current.append(char)
        elif char == separator and depth == 0:
            piece = "".join(current).strip()
            if piece:
                pieces.append(piece)
            current = []
        else:
            current.append(char)
        i += 1

    piece = "".join(current).strip()
    if piece:
        pieces.append(piece)
    return pieces


def braces_balanced(text: str) -> bool:
    """Check that curly braces outside quoted strings are balanced."""
    depth = 0
    quote = ""
    i = 0
    while i < len(text):
        char = text[i]
        if quote:
            if char == "\\":
                i += 2
                continue
            if char == quote:
                quote = ""
        elif char in _QUOTES:
            quote = char
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth < 0:
                return False
        i += 1
    return depth == 0


def unquote(value: str) -> str:
    """Strip one pair of matching quotes from a string, if present."""
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        return value[1:-1]
    return value
