"""
Symbol assembler: function patterns and zig-zag codeword placement.

Cells hold ``None`` (unset), ``0`` (light) or ``1`` (dark). Coordinates
passed as ``(x, y)`` are column then row; grids are indexed ``[row][col]``.

References:
- https://www.thonky.com/qr-code-tutorial/module-placement-matrix
"""

import logging
from typing import List, Optional

from qrlive.capacity import ErrorCorrectionLevel, check_version, total_codewords
from qrlive.errors import AssemblyOverflow

logger = logging.getLogger(__name__)

Grid = List[List[Optional[int]]]

#==============================================================================
# BCH CODES FOR FORMAT AND VERSION INFORMATION
#==============================================================================

# x^10 + x^8 + x^5 + x^4 + x^2 + x + 1
FORMAT_GENERATOR = 0b10100110111
FORMAT_MASK = 0b101010000010010

# x^12 + x^11 + x^10 + x^9 + x^8 + x^5 + x^2 + 1
VERSION_GENERATOR = 0b1111100100101


def _bch_remainder(value: int, generator: int, degree: int) -> int:
    remainder = value << degree
    for i in range(remainder.bit_length() - 1, degree - 1, -1):
        if remainder & (1 << i):
            remainder ^= generator << (i - degree)
    return remainder


def format_info_bits(level: ErrorCorrectionLevel, mask: int) -> int:
    """15-bit format word: (level, mask) protected by BCH(15,5), then masked."""
    level = ErrorCorrectionLevel.parse(level)
    data = (level.format_bits << 3) | mask
    return ((data << 10) | _bch_remainder(data, FORMAT_GENERATOR, 10)) ^ FORMAT_MASK


def version_info_bits(version: int) -> int:
    """18-bit version word protected by BCH(18,6); only used from version 7."""
    return (version << 12) | _bch_remainder(version, VERSION_GENERATOR, 12)


def write_format_info(grid: Grid, level: ErrorCorrectionLevel, mask: int) -> None:
    """Write both copies of the format word into ``grid`` in place."""
    size = len(grid)
    bits = format_info_bits(level, mask)

    def bit(i):
        return (bits >> i) & 1

    # Around the top-left finder
    for i in range(6):
        grid[i][8] = bit(i)
    grid[7][8] = bit(6)
    grid[8][8] = bit(7)
    grid[8][7] = bit(8)
    for i in range(9, 15):
        grid[8][14 - i] = bit(i)

    # Split between the top-right and bottom-left finders
    for i in range(8):
        grid[8][size - 1 - i] = bit(i)
    for i in range(8, 15):
        grid[size - 15 + i][8] = bit(i)
    grid[size - 8][8] = 1


def alignment_positions(version: int) -> List[int]:
    """Row/column centers of the alignment patterns, ascending."""
    check_version(version)
    if version == 1:
        return []
    num_align = version // 7 + 2
    step = (version * 8 + num_align * 3 + 5) // (num_align * 4 - 4) * 2
    last = 4 * version + 10
    positions = [last - i * step for i in range(num_align - 1)]
    return [6] + positions[::-1]


#==============================================================================
# MATRIX CONSTRUCTION
#==============================================================================

class QRMatrix:
    """
    Module grid of one symbol version plus its reserved-module bitmap.

    The constructor places every function pattern, so the reserved bitmap is
    complete before any codeword is placed and is shared with the mask
    selector.
    """

    def __init__(self, version: int):
        check_version(version)
        self.version = version
        self.size = 4 * version + 17
        self.matrix: Grid = [[None] * self.size for _ in range(self.size)]
        self.reserved = [[False] * self.size for _ in range(self.size)]

        self._place_finder_patterns()
        self._place_timing_patterns()
        self._place_alignment_patterns()
        self._place_dark_module()
        self._reserve_format_area()
        if version >= 7:
            self._place_version_info()

    def _set_function(self, x: int, y: int, value: Optional[int]):
        if 0 <= x < self.size and 0 <= y < self.size:
            self.matrix[y][x] = value
            self.reserved[y][x] = True

    def _place_finder_patterns(self):
        """Three finders with their light separators."""
        for (x, y) in [(0, 0), (self.size - 7, 0), (0, self.size - 7)]:
            # The 9x9 square includes the separator ring; off-grid cells are skipped
            for dy in range(-1, 8):
                for dx in range(-1, 8):
                    dist = max(abs(dx - 3), abs(dy - 3))
                    self._set_function(x + dx, y + dy, 1 if dist in (0, 1, 3) else 0)

    def _place_timing_patterns(self):
        for i in range(8, self.size - 8):
            value = (i + 1) % 2
            self._set_function(i, 6, value)
            self._set_function(6, i, value)

    def _place_alignment_patterns(self):
        positions = alignment_positions(self.version)
        last = len(positions) - 1
        for i, row in enumerate(positions):
            for j, col in enumerate(positions):
                # Corners occupied by finders
                if (i, j) in ((0, 0), (0, last), (last, 0)):
                    continue
                for dy in range(-2, 3):
                    for dx in range(-2, 3):
                        dist = max(abs(dx), abs(dy))
                        self._set_function(col + dx, row + dy, 1 if dist != 1 else 0)

    def _place_dark_module(self):
        self._set_function(8, 4 * self.version + 9, 1)

    def _reserve_format_area(self):
        """Reserve format cells; their values are written after masking."""
        for i in range(9):
            if not self.reserved[8][i]:
                self._set_function(i, 8, None)
            if not self.reserved[i][8]:
                self._set_function(8, i, None)
        for i in range(8):
            self._set_function(self.size - 1 - i, 8, None)
            if i < 7:
                self._set_function(8, self.size - 1 - i, None)

    def _place_version_info(self):
        bits = version_info_bits(self.version)
        for i in range(18):
            bit = (bits >> i) & 1
            a = self.size - 11 + i % 3
            b = i // 3
            self._set_function(a, b, bit)
            self._set_function(b, a, bit)

    def data_module_count(self) -> int:
        return sum(not cell for row in self.reserved for cell in row)

    def place_data(self, codewords: List[int]) -> int:
        """
        Place codewords in the two-column zig-zag, MSB first.

        Raises:
            AssemblyOverflow: codeword count differs from the version's capacity

        Returns:
            Number of data bits placed; leftover remainder modules are light
        """
        expected = total_codewords(self.version)
        if len(codewords) != expected:
            raise AssemblyOverflow(
                f"Version {self.version} holds {expected} codewords, got {len(codewords)}"
            )

        total_bits = len(codewords) * 8
        bit_index = 0
        x = self.size - 1
        upward = True

        while x >= 1:
            if x == 6:
                x -= 1

            y_range = range(self.size - 1, -1, -1) if upward else range(self.size)
            for y in y_range:
                for col in (x, x - 1):
                    if self.reserved[y][col]:
                        continue
                    if bit_index < total_bits:
                        byte = codewords[bit_index >> 3]
                        self.matrix[y][col] = (byte >> (7 - (bit_index & 7))) & 1
                        bit_index += 1
                    else:
                        self.matrix[y][col] = 0

            x -= 2
            upward = not upward

        logger.debug("Placed %d bits in %dx%d matrix", bit_index, self.size, self.size)
        return bit_index


def to_string(grid, border: int = 4) -> str:
    """Render a finished grid as terminal blocks with a quiet zone."""
    size = len(grid)
    blank = "  " * (size + 2 * border)
    lines = [blank] * border
    for row in grid:
        cells = "".join("██" if cell else "  " for cell in row)
        lines.append("  " * border + cells + "  " * border)
    lines.extend([blank] * border)
    return "\n".join(lines)
