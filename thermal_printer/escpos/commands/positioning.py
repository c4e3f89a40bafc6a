"""
Positioning and paper feed commands for thermal printers.

Contains line feed, justification, left indent, paper feed by lines or dots,
and the horizontal rule built from box-drawing characters.

Reference: ESC/POS Application Programming Guide, Chapters
           "Print position commands" and "Paper feed commands"
Compatibility: 58 mm serial thermal printers (32 columns in font A)
"""

from enum import Enum
from typing import Final

__all__ = [
    "LF",
    "MAX_INDENT_COLUMNS",
    "MAX_RULE_LENGTH",
    "RULE_CHARACTER",
    "Alignment",
    "set_alignment",
    "set_indent",
    "feed_lines",
    "feed_dots",
    "horizontal_rule",
]

# =============================================================================
# CONTROL CHARACTERS
# =============================================================================

LF: Final[bytes] = b"\n"
"""
Line feed.

Hex: 0A
Effect: Prints the buffer and advances the paper by one line
"""

MAX_INDENT_COLUMNS: Final[int] = 31
"""Largest indent the firmware accepts for ESC B."""

MAX_RULE_LENGTH: Final[int] = 32
"""Characters per line in font A on a 384-dot head."""

RULE_CHARACTER: Final[int] = 0xC4
"""Box-drawing horizontal line (─) in both IBM437 and IBM850."""

# =============================================================================
# JUSTIFICATION
# =============================================================================


class Alignment(Enum):
    """Justification values for ESC a."""

    LEFT = 0
    CENTER = 1
    RIGHT = 2


def set_alignment(alignment: Alignment) -> bytes:
    """
    Select justification.

    Command: ESC a n
    Hex: 1B 61 n

    Args:
        alignment: LEFT, CENTER or RIGHT.

    Returns:
        ESC/POS command bytes.

    Example:
        >>> set_alignment(Alignment.CENTER)
        b'\\x1ba\\x01'
    """
    return b"\x1ba" + bytes([alignment.value])


# =============================================================================
# INDENT
# =============================================================================


def set_indent(columns: int) -> bytes:
    """
    Set left indent in character columns.

    Command: ESC B n
    Hex: 1B 42 n

    Args:
        columns: Indent in columns (0-31). Values outside the range fall
                 back to 0 (no indent).

    Returns:
        ESC/POS command bytes.

    Example:
        >>> set_indent(4)
        b'\\x1bB\\x04'
        >>> set_indent(50) == set_indent(0)
        True
    """
    if not (0 <= columns <= MAX_INDENT_COLUMNS):
        columns = 0
    return b"\x1bB" + bytes([columns])


# =============================================================================
# PAPER FEED
# =============================================================================


def feed_lines(lines: int) -> bytes:
    """
    Print the buffer and feed n lines.

    Command: ESC d n
    Hex: 1B 64 n

    Raises:
        ValueError: If lines is not 0-255.
    """
    if not (0 <= lines <= 255):
        raise ValueError(f"Line count must be 0-255, got {lines}")
    return b"\x1bd" + bytes([lines])


def feed_dots(dots: int) -> bytes:
    """
    Print the buffer and feed n dot rows.

    Command: ESC J n
    Hex: 1B 4A n

    Raises:
        ValueError: If dots is not 0-255.
    """
    if not (0 <= dots <= 255):
        raise ValueError(f"Dot count must be 0-255, got {dots}")
    return b"\x1bJ" + bytes([dots])


# =============================================================================
# HORIZONTAL RULE
# =============================================================================


def horizontal_rule(length: int) -> bytes:
    """
    Build a horizontal rule line.

    Args:
        length: Number of rule characters. Values above 32 are clamped to
                one full line; zero or negative produces nothing.

    Returns:
        Rule characters followed by a line feed, or b"" for length <= 0.

    Example:
        >>> horizontal_rule(3)
        b'\\xc4\\xc4\\xc4\\n'
        >>> len(horizontal_rule(40))
        33
    """
    if length <= 0:
        return b""
    length = min(length, MAX_RULE_LENGTH)
    return bytes([RULE_CHARACTER]) * length + LF
