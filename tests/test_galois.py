import pytest

from qrlive.galois import GF256, Polynomial, ReedSolomonEncoder, gf, rs_encoder


def evaluate(coeffs, x):
    """Horner evaluation of a highest-first coefficient list over GF(256)."""
    result = 0
    for coeff in coeffs:
        result = gf.multiply(result, x) ^ coeff
    return result


def test_field_tables_cover_every_nonzero_element():
    assert sorted(gf.exp_table[:255]) == list(range(1, 256))
    assert gf.exp_table[8] == 0x1d  # alpha^8 reduced by 0x11d


def test_multiply():
    assert gf.multiply(0x80, 2) == 0x1d
    assert gf.multiply(0, 77) == 0
    assert gf.multiply(1, 201) == 201
    for a in (2, 83, 202, 255):
        for b in (3, 17, 254):
            assert gf.multiply(a, b) == gf.multiply(b, a)
            assert gf.multiply(a, b) == gf.alpha_power(gf.log_table[a] + gf.log_table[b])


def test_polynomial_drops_leading_zeros():
    p = Polynomial([0, 0, 1, 3])
    assert p.coeffs == [1, 3]
    assert p.degree == 1


def test_polynomial_multiply():
    # (x + 1)(x + 2) = x^2 + 3x + 2
    assert Polynomial([1, 1]).multiply(Polynomial([1, 2])).coeffs == [1, 3, 2]


def test_generator_roots_are_consecutive_powers_of_alpha():
    generator = ReedSolomonEncoder(GF256()).build_generator(10)
    assert generator.degree == 10
    assert generator.coeffs[0] == 1
    for i in range(10):
        assert evaluate(generator.coeffs, gf.alpha_power(i)) == 0


def test_generator_is_cached():
    encoder = ReedSolomonEncoder()
    assert encoder.build_generator(7) is encoder.build_generator(7)
    with pytest.raises(ValueError):
        encoder.build_generator(0)


def test_hello_world_1m_parity():
    data = [32, 91, 11, 120, 209, 114, 220, 77, 67, 64, 236, 17, 236, 17, 236, 17]
    assert rs_encoder.encode(data, 10) == [196, 35, 39, 119, 235, 215, 231, 226, 93, 23]


def test_codeword_polynomial_is_divisible_by_generator():
    data = list(range(40, 80))
    ecc = rs_encoder.encode(data, 18)
    for i in range(18):
        assert evaluate(data + ecc, gf.alpha_power(i)) == 0
