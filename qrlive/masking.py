"""
Mask selector: the eight data masks, the four-rule penalty and mask choice.
"""

import logging
from typing import Callable, List, Tuple

from qrlive.capacity import ErrorCorrectionLevel
from qrlive.matrix import Grid, write_format_info

logger = logging.getLogger(__name__)

MASK_PATTERNS: List[Callable[[int, int], bool]] = [
    lambda r, c: (r + c) % 2 == 0,
    lambda r, c: r % 2 == 0,
    lambda r, c: c % 3 == 0,
    lambda r, c: (r + c) % 3 == 0,
    lambda r, c: (r // 2 + c // 3) % 2 == 0,
    lambda r, c: (r * c) % 2 + (r * c) % 3 == 0,
    lambda r, c: ((r * c) % 2 + (r * c) % 3) % 2 == 0,
    lambda r, c: ((r + c) % 2 + (r * c) % 3) % 2 == 0,
]

PENALTY_N1 = 3
PENALTY_N2 = 3
PENALTY_N3 = 40
PENALTY_N4 = 10

FINDER_LIKE = ([1, 0, 1, 1, 1, 0, 1, 0, 0, 0, 0],
               [0, 0, 0, 0, 1, 0, 1, 1, 1, 0, 1])


def apply_mask(matrix: Grid, reserved: List[List[bool]], mask_num: int) -> Grid:
    """Return a copy of ``matrix`` with the mask XORed into the data modules."""
    if not 0 <= mask_num <= 7:
        raise ValueError(f"Mask pattern must be in range 0-7, got {mask_num}")
    mask_func = MASK_PATTERNS[mask_num]
    size = len(matrix)
    result = [list(row) for row in matrix]
    for r in range(size):
        for c in range(size):
            if not reserved[r][c] and mask_func(r, c):
                result[r][c] ^= 1
    return result


def _lines(grid: Grid):
    """Every row, then every column."""
    yield from grid
    yield from zip(*grid)


def _penalty_runs(grid: Grid) -> int:
    """Runs of 5+ same-color modules in rows and columns."""
    penalty = 0
    for line in _lines(grid):
        run_length = 1
        for prev, curr in zip(line, line[1:]):
            if curr == prev:
                run_length += 1
                continue
            if run_length >= 5:
                penalty += PENALTY_N1 + (run_length - 5)
            run_length = 1
        if run_length >= 5:
            penalty += PENALTY_N1 + (run_length - 5)
    return penalty


def _penalty_boxes(grid: Grid) -> int:
    """2x2 blocks of a single color."""
    penalty = 0
    size = len(grid)
    for r in range(size - 1):
        upper, lower = grid[r], grid[r + 1]
        for c in range(size - 1):
            if upper[c] == upper[c + 1] == lower[c] == lower[c + 1]:
                penalty += PENALTY_N2
    return penalty


def _penalty_finder_like(grid: Grid) -> int:
    """1:1:3:1:1 dark/light sequences with four light modules on one side."""
    penalty = 0
    for line in _lines(grid):
        line = list(line)
        for c in range(len(line) - 10):
            if line[c:c + 11] in FINDER_LIKE:
                penalty += PENALTY_N3
    return penalty


def _penalty_balance(grid: Grid) -> int:
    """Deviation of the dark module ratio from 50%, in 5% steps."""
    size = len(grid)
    dark_count = sum(sum(row) for row in grid)
    percent = (dark_count * 100) // (size * size)
    prev_multiple = percent - (percent % 5)
    next_multiple = prev_multiple + 5
    return min(abs(prev_multiple - 50), abs(next_multiple - 50)) // 5 * PENALTY_N4


def calculate_penalty(grid: Grid) -> int:
    """Total penalty score for a fully masked grid."""
    return (_penalty_runs(grid) + _penalty_boxes(grid)
            + _penalty_finder_like(grid) + _penalty_balance(grid))


def masked_symbol(matrix: Grid, reserved: List[List[bool]],
                  level: ErrorCorrectionLevel, mask_num: int) -> Grid:
    """Mask the data modules and write the matching format information."""
    grid = apply_mask(matrix, reserved, mask_num)
    write_format_info(grid, level, mask_num)
    return grid


def choose_best_mask(matrix: Grid, reserved: List[List[bool]],
                     level: ErrorCorrectionLevel) -> Tuple[int, int, List[int]]:
    """
    Score all eight masks and pick the lowest penalty.

    Ties go to the lowest mask index.

    Returns:
        (best mask, its penalty, penalties of masks 0-7)
    """
    penalties = [calculate_penalty(masked_symbol(matrix, reserved, level, mask_num))
                 for mask_num in range(8)]
    best_mask = min(range(8), key=lambda m: (penalties[m], m))
    logger.debug("Mask penalties %s, selected mask %d", penalties, best_mask)
    return best_mask, penalties[best_mask], penalties
