"""
Character table selection and text encoding for thermal printers.

The printer maps codes 128-255 through a single-byte code page selected with
ESC t. Text must be converted into the same code page before it is sent.

Reference: ESC/POS Application Programming Guide, ESC t
Supported tables: IBM437 (US), IBM850 (Multilingual Latin 1)
"""

from __future__ import annotations

from enum import Enum

from thermal_printer.exceptions import EncodingError

__all__ = [
    "TextEncoding",
    "ENCODING_ERROR_POLICIES",
    "select_character_table",
    "encode_text",
]

ENCODING_ERROR_POLICIES = ("strict", "replace")
"""Accepted values for the ``errors`` argument of encode_text()."""

# =============================================================================
# CHARACTER TABLE CONSTANTS
# =============================================================================


class TextEncoding(Enum):
    """
    Code pages understood by the printer firmware.

    Format: (table_id, python_codec)
    The table id is the n argument of ESC t n for this firmware family.
    """

    IBM437 = (0, "cp437")
    """IBM437 - US/Standard (IBM PC original character set)."""

    IBM850 = (1, "cp850")
    """IBM850 - Multilingual (Latin 1, Western European). Power-on default."""

    def __init__(self, table_id: int, codec: str) -> None:
        self.table_id = table_id
        self.codec = codec

    @classmethod
    def from_name(cls, name: str) -> "TextEncoding":
        """
        Resolve an encoding from a configuration string.

        Accepts the member name in any case ("IBM850", "ibm437") and the
        Python codec name ("cp850").

        Raises:
            ValueError: If the name matches no supported code page.
        """
        wanted = name.strip().lower()
        for member in cls:
            if wanted in (member.name.lower(), member.codec):
                return member
        raise ValueError(f"Unsupported text encoding: {name!r}")


# =============================================================================
# CHARACTER TABLE COMMAND
# =============================================================================


def select_character_table(encoding: TextEncoding) -> bytes:
    """
    Select character table (code page).

    Command: ESC t n
    Hex: 1B 74 n

    Args:
        encoding: Code page to activate.

    Returns:
        ESC/POS command bytes.

    Example:
        >>> select_character_table(TextEncoding.IBM437)
        b'\\x1bt\\x00'
    """
    return b"\x1bt" + bytes([encoding.table_id])


# =============================================================================
# TEXT ENCODING
# =============================================================================


def encode_text(text: str, encoding: TextEncoding, errors: str = "strict") -> bytes:
    """
    Convert a line of text into printer bytes.

    Leading and trailing newline and carriage-return characters are removed
    first, so callers control line feeds explicitly.

    Args:
        text: Text to encode.
        encoding: Target code page (must match the active character table).
        errors: "strict" raises on unmappable characters, "replace"
                substitutes them with '?'.

    Returns:
        Encoded bytes, without any line terminator.

    Raises:
        EncodingError: If a character has no representation in the code page
                       and errors is "strict".
        ValueError: If errors is not a supported policy.

    Example:
        >>> encode_text("Café\\r\\n", TextEncoding.IBM850)
        b'Caf\\x82'
    """
    if errors not in ENCODING_ERROR_POLICIES:
        raise ValueError(
            f"errors must be one of {ENCODING_ERROR_POLICIES}, got {errors!r}"
        )

    stripped = text.strip("\r\n")
    try:
        return stripped.encode(encoding.codec, errors=errors)
    except UnicodeEncodeError as e:
        raise EncodingError(
            f"Character {e.object[e.start:e.end]!r} at position {e.start} "
            f"cannot be encoded in {encoding.name}",
            cause=e,
        ) from e
