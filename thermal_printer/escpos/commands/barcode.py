"""
Barcode commands for thermal printers.

Contains the symbology table, payload validation and the GS k (format A,
NUL-terminated) print command, plus barcode module width and left spacing.

Reference: ESC/POS Application Programming Guide, GS k / GS w / GS x
Compatibility: 58 mm serial thermal printers (CSN-A2 class firmware)

IMPORTANT: Format A terminates the payload with 0x00, so a payload must
           never contain a NUL byte.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Final, FrozenSet, Union

from thermal_printer.escpos.commands.charset import TextEncoding
from thermal_printer.exceptions import EncodingError, InvalidBarcodeSpecError

logger = logging.getLogger(__name__)

__all__ = [
    "BarcodeType",
    "BarcodeSpec",
    "validate_barcode",
    "barcode_payload",
    "encode_barcode",
    "set_large_barcode",
    "set_barcode_left_spacing",
]

BarcodePayload = Union[str, bytes]

# =============================================================================
# BARCODE TYPE CONSTANTS
# =============================================================================


class BarcodeType(Enum):
    """
    Barcode symbologies supported by the firmware.

    Each value is the m argument of GS k m.
    """

    UPC_A = 0
    """UPC-A. 11 data digits (check digit added by printer) or 12."""

    UPC_E = 1
    """UPC-E. Sent as 11 or 12 digits like UPC-A."""

    EAN13 = 2
    """EAN-13. 12 data digits or 13 with check digit."""

    EAN8 = 3
    """EAN-8. 7 data digits or 8 with check digit."""

    CODE39 = 4
    """Code 39. 0-9, A-Z, space and $%+-./"""

    ITF = 5
    """Interleaved 2 of 5. Digits in pairs (even length)."""

    CODABAR = 6
    """Codabar (NW-7). Digits, -$:/.+ and A-D start/stop characters."""

    CODE93 = 7
    """Code 93. Full ASCII, sent as raw bytes."""

    CODE128 = 8
    """Code 128. Full ASCII, sent as raw bytes."""

    CODE11 = 9
    """Code 11. Digits and dash."""

    MSI = 10
    """MSI Plessey. Digits only."""

    @property
    def is_raw(self) -> bool:
        """True for symbologies whose payload is sent without recoding."""
        return self in _RAW_SYMBOLOGIES


_RAW_SYMBOLOGIES: Final[FrozenSet[BarcodeType]] = frozenset(
    {BarcodeType.CODE93, BarcodeType.CODE128}
)

_FIXED_LENGTHS: Final[dict[BarcodeType, FrozenSet[int]]] = {
    BarcodeType.UPC_A: frozenset({11, 12}),
    BarcodeType.UPC_E: frozenset({11, 12}),
    BarcodeType.EAN13: frozenset({12, 13}),
    BarcodeType.EAN8: frozenset({7, 8}),
}

MIN_VARIABLE_LENGTH: Final[int] = 2
"""Shortest payload accepted for variable-length symbologies."""


@dataclass(frozen=True)
class BarcodeSpec:
    """
    A barcode print request.

    Attributes:
        symbology: Barcode type.
        payload: Data as text or bytes. Text is upper-cased and recoded to
                 the active code page (Code93/Code128: UTF-8, unchanged).
                 Bytes are sent as given (upper-cased for non-raw types).
    """

    symbology: BarcodeType
    payload: BarcodePayload


# =============================================================================
# VALIDATION
# =============================================================================


def barcode_payload(spec: BarcodeSpec, encoding: TextEncoding) -> bytes:
    """
    Convert a barcode payload into the bytes sent after GS k m.

    Raises:
        EncodingError: If a text payload cannot be represented.
    """
    payload = spec.payload
    if spec.symbology.is_raw:
        if isinstance(payload, bytes):
            return payload
        return payload.encode("utf-8")

    if isinstance(payload, bytes):
        return payload.upper()

    try:
        return payload.upper().encode(encoding.codec)
    except UnicodeEncodeError as e:
        raise EncodingError(
            f"Barcode data {payload!r} cannot be encoded in {encoding.name}",
            cause=e,
        ) from e


def validate_barcode(symbology: BarcodeType, data: bytes) -> None:
    """
    Check payload bytes against the rules of a symbology.

    Args:
        symbology: Barcode type.
        data: Payload bytes as they will be transmitted.

    Raises:
        InvalidBarcodeSpecError: If the length rule is violated or the
                                 payload contains the 0x00 terminator.
    """
    length = len(data)
    allowed = _FIXED_LENGTHS.get(symbology)

    if allowed is not None:
        if length not in allowed:
            expected = " or ".join(str(n) for n in sorted(allowed))
            raise InvalidBarcodeSpecError(
                f"{symbology.name} payload must be {expected} characters long, "
                f"got {length}"
            )
    elif length < MIN_VARIABLE_LENGTH:
        raise InvalidBarcodeSpecError(
            f"{symbology.name} payload must be at least "
            f"{MIN_VARIABLE_LENGTH} characters long, got {length}"
        )

    if b"\x00" in data:
        raise InvalidBarcodeSpecError(
            f"{symbology.name} payload must not contain NUL bytes"
        )

    if symbology is BarcodeType.ITF and length % 2:
        logger.warning("ITF payload has odd length %d; scanners may reject it", length)


# =============================================================================
# BARCODE PRINTING
# =============================================================================


def encode_barcode(spec: BarcodeSpec, encoding: TextEncoding) -> bytes:
    """
    Generate ESC/POS command to print a barcode.

    Command: GS k m d1...dk NUL
    Hex: 1D 6B m d1...dk 00

    Args:
        spec: Symbology and payload.
        encoding: Active code page, used to recode text payloads of
                  non-raw symbologies.

    Returns:
        ESC/POS command bytes.

    Raises:
        InvalidBarcodeSpecError: If the payload violates the symbology rules.
        EncodingError: If a text payload cannot be represented.

    Example:
        >>> spec = BarcodeSpec(BarcodeType.EAN8, "1234567")
        >>> encode_barcode(spec, TextEncoding.IBM850)
        b'\\x1dk\\x031234567\\x00'
    """
    data = barcode_payload(spec, encoding)
    validate_barcode(spec.symbology, data)
    return b"\x1dk" + bytes([spec.symbology.value]) + data + b"\x00"


def set_large_barcode(large: bool) -> bytes:
    """
    Select barcode module width.

    Command: GS w n
    Hex: 1D 77 n

    Args:
        large: True selects n=3 (wide bars), False the default n=2.
    """
    return b"\x1dw" + bytes([3 if large else 2])


def set_barcode_left_spacing(dots: int) -> bytes:
    """
    Set barcode left spacing.

    Command: GS x n
    Hex: 1D 78 n

    Raises:
        ValueError: If dots is not 0-255.
    """
    if not (0 <= dots <= 255):
        raise ValueError(f"Barcode left spacing must be 0-255 dots, got {dots}")
    return b"\x1dx" + bytes([dots])
