"""
Error correction levels and the per-version capacity tables.

All tables are indexed by ``version - 1`` and list the L, M, Q, H columns in
that order.
"""

from enum import Enum
from typing import Union

MIN_VERSION = 1
MAX_VERSION = 40


class ErrorCorrectionLevel(str, Enum):
    """Fraction of codewords a reader can recover: L 7%, M 15%, Q 25%, H 30%."""

    L = 'L'
    M = 'M'
    Q = 'Q'
    H = 'H'

    @property
    def ordinal(self) -> int:
        return 'LMQH'.index(self.value)

    @property
    def format_bits(self) -> int:
        return EC_LEVEL_BITS[self.value]

    @classmethod
    def parse(cls, level: Union[str, 'ErrorCorrectionLevel']) -> 'ErrorCorrectionLevel':
        if isinstance(level, cls):
            return level
        try:
            return cls(str(level).strip().upper())
        except ValueError:
            raise ValueError(f"Invalid error correction level: {level}") from None


# Two-bit level field of the format information
EC_LEVEL_BITS = {
    'L': 0b01,
    'M': 0b00,
    'Q': 0b11,
    'H': 0b10,
}

# Total error correction codewords of the whole symbol
ECC_CODEWORDS = (
    (7, 10, 13, 17), (10, 16, 22, 28), (15, 26, 36, 44), (20, 36, 52, 64),
    (26, 48, 72, 88), (36, 64, 96, 112), (40, 72, 108, 130), (48, 88, 132, 156),
    (60, 110, 160, 192), (72, 130, 192, 224), (80, 150, 224, 264), (96, 176, 260, 308),
    (104, 198, 288, 352), (120, 216, 320, 384), (132, 240, 360, 432), (144, 280, 408, 480),
    (168, 308, 448, 532), (180, 338, 504, 588), (196, 364, 546, 650), (224, 416, 600, 700),
    (224, 442, 644, 750), (252, 476, 690, 816), (270, 504, 750, 900), (300, 560, 810, 960),
    (312, 588, 870, 1050), (336, 644, 952, 1110), (360, 700, 1020, 1200), (390, 728, 1050, 1260),
    (420, 784, 1140, 1350), (450, 812, 1200, 1440), (480, 868, 1290, 1530), (510, 924, 1350, 1620),
    (540, 980, 1440, 1710), (570, 1036, 1530, 1800), (570, 1064, 1590, 1890), (600, 1120, 1680, 1980),
    (630, 1204, 1770, 2100), (660, 1260, 1860, 2220), (720, 1316, 1950, 2310), (750, 1372, 2040, 2430),
)

# Number of Reed-Solomon blocks
NUM_BLOCKS = (
    (1, 1, 1, 1), (1, 1, 1, 1), (1, 1, 2, 2), (1, 2, 2, 4), (1, 2, 4, 4),
    (2, 4, 4, 4), (2, 4, 6, 5), (2, 4, 6, 6), (2, 5, 8, 8), (4, 5, 8, 8),
    (4, 5, 8, 11), (4, 8, 10, 11), (4, 9, 12, 16), (4, 9, 16, 16), (6, 10, 12, 18),
    (6, 10, 17, 16), (6, 11, 16, 19), (6, 13, 18, 21), (7, 14, 21, 25), (8, 16, 20, 25),
    (8, 17, 23, 25), (9, 17, 23, 34), (9, 18, 25, 30), (10, 20, 27, 32), (12, 21, 29, 35),
    (12, 23, 34, 37), (12, 25, 34, 40), (13, 26, 35, 42), (14, 28, 38, 45), (15, 29, 40, 48),
    (16, 31, 43, 51), (17, 33, 45, 54), (18, 35, 48, 57), (19, 37, 51, 60), (19, 38, 53, 63),
    (20, 40, 56, 66), (21, 43, 59, 70), (22, 45, 62, 74), (24, 47, 65, 77), (25, 49, 68, 81),
)


def check_version(version: int) -> None:
    if not MIN_VERSION <= version <= MAX_VERSION:
        raise ValueError(f"Version must be in range {MIN_VERSION}-{MAX_VERSION}, got {version}")


def raw_data_modules(version: int) -> int:
    """
    Number of modules left for codewords once every function pattern is placed.

    Includes the remainder bits, so it is not always a multiple of 8.
    """
    check_version(version)
    result = (16 * version + 128) * version + 64
    if version >= 2:
        num_align = version // 7 + 2
        result -= (25 * num_align - 10) * num_align - 55
        if version >= 7:
            result -= 36
    return result


def total_codewords(version: int) -> int:
    return raw_data_modules(version) // 8


def ecc_codewords(version: int, level: ErrorCorrectionLevel) -> int:
    return ECC_CODEWORDS[version - 1][level.ordinal]


def num_blocks(version: int, level: ErrorCorrectionLevel) -> int:
    return NUM_BLOCKS[version - 1][level.ordinal]


def data_capacity(version: int, level: ErrorCorrectionLevel) -> int:
    """Number of data codewords for the version/level pair."""
    return total_codewords(version) - ecc_codewords(version, level)
