"""
Galois field GF(256) arithmetic and the Reed-Solomon encoder built on it.

QR symbols use the field generated by the primitive polynomial
x^8 + x^4 + x^3 + x^2 + 1 (0x11D) with alpha = 2.

References:
- https://en.wikiversity.org/wiki/Reed-Solomon_codes_for_coders
"""

from typing import Dict, List

#==============================================================================
# GF(256) FIELD
#==============================================================================

class GF256:
    """GF(2^8) with precomputed exponent and logarithm tables."""

    PRIMITIVE_POLY = 0x11d

    def __init__(self):
        # exp_table is doubled so log(a) + log(b) never needs a modulo
        self.exp_table = [0] * 510
        self.log_table = [0] * 256
        x = 1
        for i in range(255):
            self.exp_table[i] = x
            self.exp_table[i + 255] = x
            self.log_table[x] = i
            x <<= 1
            if x & 0x100:
                x ^= self.PRIMITIVE_POLY

    def multiply(self, a: int, b: int) -> int:
        if a == 0 or b == 0:
            return 0
        return self.exp_table[self.log_table[a] + self.log_table[b]]

    def alpha_power(self, n: int) -> int:
        """Return alpha^n."""
        return self.exp_table[n % 255]


gf = GF256()


#==============================================================================
# POLYNOMIALS OVER GF(256)
#==============================================================================

class Polynomial:
    """
    Polynomial with GF(256) coefficients, highest degree first.

    ``Polynomial([1, 3, 2])`` is x^2 + 3x + 2.
    """

    def __init__(self, coefficients: List[int], field: GF256 = None):
        self.gf = field or gf
        coeffs = list(coefficients)
        while len(coeffs) > 1 and coeffs[0] == 0:
            coeffs.pop(0)
        self.coeffs = coeffs

    @property
    def degree(self) -> int:
        return len(self.coeffs) - 1

    def multiply(self, other: 'Polynomial') -> 'Polynomial':
        result = [0] * (len(self.coeffs) + len(other.coeffs) - 1)
        for i, a in enumerate(self.coeffs):
            for j, b in enumerate(other.coeffs):
                result[i + j] ^= self.gf.multiply(a, b)
        return Polynomial(result, self.gf)


#==============================================================================
# REED-SOLOMON ENCODER
#==============================================================================

class ReedSolomonEncoder:
    """
    Computes Reed-Solomon parity codewords for one block of QR data.

    Generator polynomials are cached by degree; they only depend on the
    number of parity codewords requested.
    """

    def __init__(self, field: GF256 = None):
        self.gf = field or gf
        self._generator_cache: Dict[int, Polynomial] = {}

    def build_generator(self, num_ec_codewords: int) -> Polynomial:
        """
        Build g(x) = (x - a^0)(x - a^1)...(x - a^(n-1)).

        Subtraction equals addition in GF(256), so each factor is x + a^i.
        """
        if num_ec_codewords < 1:
            raise ValueError(f"Invalid number of EC codewords: {num_ec_codewords}")
        cached = self._generator_cache.get(num_ec_codewords)
        if cached is not None:
            return cached

        generator = Polynomial([1], self.gf)
        for i in range(num_ec_codewords):
            generator = generator.multiply(Polynomial([1, self.gf.alpha_power(i)], self.gf))

        self._generator_cache[num_ec_codewords] = generator
        return generator

    def encode(self, data: List[int], num_ec_codewords: int) -> List[int]:
        """
        Compute the parity codewords for ``data``.

        Args:
            data: Data codewords (integers 0-255)
            num_ec_codewords: Number of parity codewords to produce

        Returns:
            The remainder of data(x) * x^n divided by g(x), n codewords long
        """
        generator = self.build_generator(num_ec_codewords)
        coeffs = generator.coeffs
        remainder = [0] * generator.degree

        # Shift-register division; generator's leading coefficient is 1
        for byte in data:
            factor = byte ^ remainder[0]
            remainder = remainder[1:] + [0]
            if factor:
                for j in range(generator.degree):
                    remainder[j] ^= self.gf.multiply(coeffs[j + 1], factor)

        return remainder


rs_encoder = ReedSolomonEncoder()
