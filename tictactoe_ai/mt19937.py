"""64-bit Mersenne Twister pseudorandom number generator."""

from __future__ import annotations

_NN = 312
_MM = 156
_MATRIX_A = 0xB5026F5AA96619E9
_UM = 0xFFFFFFFF80000000  # most significant 33 bits
_LM = 0x7FFFFFFF  # least significant 31 bits
_MASK64 = 0xFFFFFFFFFFFFFFFF

DEFAULT_SEED = 5489


class MT19937_64:
    """MT19937-64 generator producing integers in [0, 2**64 - 1]."""

    def __init__(self, seed: int = DEFAULT_SEED):
        self._mt: list[int] = []
        self._index = _NN
        self.seed(seed)

    def seed(self, seed: int) -> None:
        """Reinitialise the state vector from ``seed``."""
        mt = [seed & _MASK64]
        for i in range(1, _NN):
            prev = mt[-1]
            mt.append((6364136223846793005 * (prev ^ (prev >> 62)) + i) & _MASK64)
        self._mt = mt
        self._index = _NN

    def _twist(self) -> None:
        mt = self._mt
        for i in range(_NN):
            x = (mt[i] & _UM) | (mt[(i + 1) % _NN] & _LM)
            mag = _MATRIX_A if x & 1 else 0
            mt[i] = mt[(i + _MM) % _NN] ^ (x >> 1) ^ mag
        self._index = 0

    def rand(self) -> int:
        """Return the next 64-bit unsigned value."""
        if self._index >= _NN:
            self._twist()
        x = self._mt[self._index]
        self._index += 1
        x ^= (x >> 29) & 0x5555555555555555
        x ^= (x << 17) & 0x71D67FFFEDA60000
        x ^= (x << 37) & 0xFFF7EEE000000000
        x ^= x >> 43
        return x & _MASK64

    def __iter__(self):
        return self

    def __next__(self) -> int:
        return self.rand()