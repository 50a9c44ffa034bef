import pytest

from qrlive.capacity import ErrorCorrectionLevel, total_codewords
from qrlive.ecc import CodewordBlock, build_codewords, interleave, split_blocks
from qrlive.galois import rs_encoder

Q = ErrorCorrectionLevel.Q
M = ErrorCorrectionLevel.M


def test_split_5q_short_blocks_first():
    blocks = split_blocks(list(range(62)), 5, Q)
    assert [len(b.data) for b in blocks] == [15, 15, 16, 16]
    assert all(len(b.ecc) == 18 for b in blocks)
    assert blocks[2].data[0] == 30
    assert blocks[3].data[-1] == 61


def test_block_parity_matches_reed_solomon():
    blocks = split_blocks(list(range(62)), 5, Q)
    for block in blocks:
        assert block.ecc == rs_encoder.encode(block.data, 18)


def test_split_rejects_wrong_length():
    with pytest.raises(ValueError):
        split_blocks([0] * 10, 1, M)


def test_interleave_round_robin():
    blocks = [
        CodewordBlock([1, 2], [10, 11]),
        CodewordBlock([3, 4, 5], [12, 13]),
    ]
    assert interleave(blocks) == [1, 3, 2, 4, 5, 10, 12, 11, 13]


def test_build_codewords_5q_layout():
    codewords = build_codewords(list(range(62)), 5, Q)
    assert len(codewords) == total_codewords(5)
    assert codewords[:4] == [0, 15, 30, 46]
    assert codewords[60:62] == [45, 61]


def test_build_codewords_is_deterministic():
    data = [(i * 7) % 256 for i in range(total_codewords(12) - 176)]
    assert build_codewords(data, 12, M) == build_codewords(data, 12, M)


def test_every_version_and_level_partitions_capacity():
    from qrlive.capacity import data_capacity
    for version in range(1, 41):
        for level in ErrorCorrectionLevel:
            blocks = split_blocks([0] * data_capacity(version, level), version, level)
            total = sum(len(b.data) + len(b.ecc) for b in blocks)
            assert total == total_codewords(version)
