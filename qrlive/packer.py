"""
Codeword packer: byte-mode bit stream construction and version selection.

Only byte mode is produced. Text is encoded as UTF-8 and every input byte
becomes one 8-bit payload unit.
"""

import logging
from typing import List, Tuple, Union

from qrlive.capacity import (
    MAX_VERSION, MIN_VERSION, ErrorCorrectionLevel, data_capacity,
)
from qrlive.errors import InvalidPayload, PayloadTooLarge

logger = logging.getLogger(__name__)

MODE_BYTE = 0b0100
MODE_INDICATOR_BITS = 4
TERMINATOR_BITS = 4

# Pad codewords, repeated alternately
PAD_BYTES = (0xEC, 0x11)


def get_character_count_bits(version: int) -> int:
    """Width of the byte-mode character count field."""
    return 8 if version <= 9 else 16


def int_to_bits(value: int, length: int) -> List[int]:
    """Convert integer to list of bits with specified length, MSB first."""
    return [(value >> (length - 1 - i)) & 1 for i in range(length)]


def bits_to_bytes(bits: List[int]) -> List[int]:
    """Group a bit list into codewords. The length must be a multiple of 8."""
    if len(bits) % 8 != 0:
        raise ValueError(f"Bit stream of length {len(bits)} is not byte aligned")
    codewords = []
    for i in range(0, len(bits), 8):
        byte = 0
        for bit in bits[i:i + 8]:
            byte = (byte << 1) | bit
        codewords.append(byte)
    return codewords


def to_bytes(text: Union[str, bytes]) -> bytes:
    if not isinstance(text, str):
        return bytes(text)
    try:
        return text.encode('utf-8')
    except UnicodeEncodeError as exc:
        raise InvalidPayload(f"Text is not valid UTF-8 at position {exc.start}: {exc.reason}") from exc


def encode_byte(text: Union[str, bytes]) -> List[int]:
    """Encode the payload bytes. Returns list of bits."""
    bits = []
    for byte in to_bytes(text):
        bits.extend(int_to_bits(byte, 8))
    return bits


def segment_bits(byte_count: int, version: int) -> int:
    """Header plus payload length in bits for a byte-mode segment."""
    return MODE_INDICATOR_BITS + get_character_count_bits(version) + 8 * byte_count


def max_payload_bytes(level: ErrorCorrectionLevel) -> int:
    """Largest byte-mode payload that fits in a version 40 symbol."""
    capacity_bits = data_capacity(MAX_VERSION, level) * 8
    return (capacity_bits - segment_bits(0, MAX_VERSION)) // 8


def choose_version(text: Union[str, bytes], level: ErrorCorrectionLevel) -> int:
    """Smallest version whose data capacity holds the byte-mode segment."""
    level = ErrorCorrectionLevel.parse(level)
    length = len(to_bytes(text))
    for version in range(MIN_VERSION, MAX_VERSION + 1):
        if segment_bits(length, version) <= data_capacity(version, level) * 8:
            return version
    raise PayloadTooLarge(length, max_payload_bytes(level), level.value)


def pack(text: Union[str, bytes], level: ErrorCorrectionLevel,
         version: int = None) -> Tuple[List[int], int]:
    """
    Build the full data bit stream for ``text``.

    Args:
        text: Payload; strings are encoded as UTF-8
        level: Error correction level
        version: Force a version instead of choosing the smallest one

    Returns:
        (bits, version), where len(bits) is exactly 8 * data capacity
    """
    level = ErrorCorrectionLevel.parse(level)
    payload = to_bytes(text)
    if version is None:
        version = choose_version(payload, level)

    capacity_bits = data_capacity(version, level) * 8
    if segment_bits(len(payload), version) > capacity_bits:
        raise PayloadTooLarge(len(payload), max_payload_bytes(level), level.value)

    bits = int_to_bits(MODE_BYTE, MODE_INDICATOR_BITS)
    bits.extend(int_to_bits(len(payload), get_character_count_bits(version)))
    bits.extend(encode_byte(payload))

    # Terminator, possibly truncated when the symbol is full
    bits.extend([0] * min(TERMINATOR_BITS, capacity_bits - len(bits)))
    bits.extend([0] * (-len(bits) % 8))

    i = 0
    while len(bits) < capacity_bits:
        bits.extend(int_to_bits(PAD_BYTES[i % 2], 8))
        i += 1

    logger.debug("Packed %d bytes into version %d-%s (%d codewords)",
                 len(payload), version, level.value, capacity_bits // 8)
    return bits, version
