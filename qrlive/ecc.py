"""
Error-correction coder: block splitting, Reed-Solomon parity and interleaving.
"""

from dataclasses import dataclass, field
from typing import List

from qrlive.capacity import (
    ErrorCorrectionLevel, data_capacity, ecc_codewords, num_blocks, total_codewords,
)
from qrlive.galois import rs_encoder


@dataclass
class CodewordBlock:
    """Data codewords of one block and the parity computed over them."""
    data: List[int]
    ecc: List[int] = field(default_factory=list)


def split_blocks(data_codewords: List[int], version: int,
                 level: ErrorCorrectionLevel) -> List[CodewordBlock]:
    """
    Partition the data codewords into blocks and compute each block's parity.

    Short blocks come first; long blocks carry one extra data codeword.
    Every block gets the same number of parity codewords.
    """
    level = ErrorCorrectionLevel.parse(level)
    expected = data_capacity(version, level)
    if len(data_codewords) != expected:
        raise ValueError(
            f"Version {version}-{level.value} takes {expected} data codewords, "
            f"got {len(data_codewords)}"
        )

    blocks_count = num_blocks(version, level)
    ecc_len = ecc_codewords(version, level) // blocks_count
    raw = total_codewords(version)
    num_short = blocks_count - raw % blocks_count
    short_data_len = raw // blocks_count - ecc_len

    blocks = []
    offset = 0
    for i in range(blocks_count):
        length = short_data_len + (0 if i < num_short else 1)
        data = list(data_codewords[offset:offset + length])
        offset += length
        blocks.append(CodewordBlock(data, rs_encoder.encode(data, ecc_len)))
    return blocks


def interleave(blocks: List[CodewordBlock]) -> List[int]:
    """Read data round-robin across blocks, then parity round-robin."""
    result = []
    longest = max(len(b.data) for b in blocks)
    for i in range(longest):
        for block in blocks:
            if i < len(block.data):
                result.append(block.data[i])
    ecc_len = len(blocks[0].ecc)
    for i in range(ecc_len):
        for block in blocks:
            result.append(block.ecc[i])
    return result


def build_codewords(data_codewords: List[int], version: int,
                    level: ErrorCorrectionLevel) -> List[int]:
    """Final codeword sequence for the symbol assembler."""
    return interleave(split_blocks(data_codewords, version, level))
