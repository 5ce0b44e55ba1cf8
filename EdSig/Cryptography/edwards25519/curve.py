# Reticulum License
#
# Copyright (c) 2016-2025 Mark Qvist
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# - The Software shall not be used in any kind of system which includes amongst
#   its functions the ability to purposefully do harm to human beings.
#
# - The Software shall not be used, directly or indirectly, in the creation of
#   an artificial intelligence, machine learning or language model training
#   dataset, including but not limited to any use that contributes to the
#   training or development of such a model or algorithm.
#
# - The above copyright notice and this permission notice shall be included in
#   all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

# Point arithmetic on the twisted Edwards curve -x^2 + y^2 = 1 + d*x^2*y^2
# in extended coordinates (X, Y, Z, T) with x = X/Z, y = Y/Z, x*y = T/Z.
# Nothing in here is constant time.

from . import field
from . import scalar
from .field import P, D
from ..Errors import IdentityElementError, WeakPublicKeyError

class Edwards25519:
    ENCODED_LENGTH = 32

    def __init__(self, x, y, z, t, is_base=False):
        self.x = x
        self.y = y
        self.z = z
        self.t = t
        self.is_base = is_base

    @staticmethod
    def reject_non_canonical(s):
        field.reject_non_canonical(s)

    @classmethod
    def from_bytes(cls, s):
        """
        Decodes a compressed point. Encodings of y that are not fully
        reduced are accepted and reduced, and a set sign bit on a point
        with x = 0 is ignored. Callers that need strict encodings must
        call *reject_non_canonical* first.

        :raises: *InvalidEncodingError* if the encoding is not a point on the curve.
        """
        y = field.from_bytes(s)
        yy = y * y % P
        u = (yy - 1) % P
        v = (yy * D + 1) % P
        x = field.sqrt_ratio(u, v)
        if field.is_negative(x) != s[31] >> 7:
            x = (P - x) % P

        return cls(x, y, 1, x * y % P)

    def to_bytes(self):
        zi = field.inv(self.z)
        x = self.x * zi % P
        y = self.y * zi % P
        return (y | ((x & 1) << 255)).to_bytes(Edwards25519.ENCODED_LENGTH, "little")

    def reject_identity(self):
        # Also catches (0, -1), the point of order 2
        if self.x % P == 0:
            raise IdentityElementError("Point is the neutral element")

    def neg(self):
        return Edwards25519((P - self.x) % P, self.y, self.z, (P - self.t) % P)

    def add(self, q):
        a = self.x * q.x % P
        b = self.y * q.y % P
        c = self.t * D % P * q.t % P
        d = self.z * q.z % P
        e = ((self.x + self.y) * (q.x + q.y) - a - b) % P
        f = (d - c) % P
        g = (d + c) % P
        h = (b + a) % P
        return Edwards25519(e * f % P, g * h % P, f * g % P, e * h % P)

    def sub(self, q):
        return self.add(q.neg())

    def dbl(self):
        a = self.x * self.x % P
        b = self.y * self.y % P
        c = 2 * self.z * self.z % P
        d = (P - a) % P
        e = ((self.x + self.y) * (self.x + self.y) - a - b) % P
        g = (d + b) % P
        f = (g - c) % P
        h = (d - b) % P
        return Edwards25519(e * f % P, g * h % P, f * g % P, e * h % P)

    def clear_cofactor(self):
        return self.dbl().dbl().dbl()

    def mul(self, s, reject_weak=True):
        """
        Multiplies the point by a 32-byte little-endian scalar. The
        scalar is used as-is, without reduction.

        :param s: The scalar as 32 *bytes*.
        :param reject_weak: Refuse points whose order divides the cofactor.
        :raises: *WeakPublicKeyError* if *reject_weak* is set and the point has small order.
        """
        if len(s) != scalar.ENCODED_LENGTH:
            raise ValueError("Scalars must be 32 bytes")
        n = int.from_bytes(s, "little")

        if self.is_base:
            return _base_mul(n)

        if reject_weak and self.dbl().dbl().x % P == 0:
            raise WeakPublicKeyError("Point has small order")

        q = NEUTRAL_ELEMENT
        for i in reversed(range(n.bit_length())):
            q = q.dbl()
            if (n >> i) & 1:
                q = q.add(self)

        return q

    def clamped_mul(self, s):
        return self.mul(scalar.clamp(s))

    def __eq__(self, other):
        if not isinstance(other, Edwards25519):
            return NotImplemented
        return ((self.x * other.z - other.x * self.z) % P == 0 and
                (self.y * other.z - other.y * self.z) % P == 0)

    def __repr__(self):
        return "<Edwards25519 "+self.to_bytes().hex()+">"


NEUTRAL_ELEMENT = Edwards25519(0, 1, 1, 0)

def _base_point():
    p = Edwards25519.from_bytes(field.to_bytes(4 * field.inv(5)))
    p.is_base = True
    return p

BASE_POINT = _base_point()

def _precompute_base_table():
    table = []
    p = Edwards25519(BASE_POINT.x, BASE_POINT.y, BASE_POINT.z, BASE_POINT.t)
    for i in range(256):
        table.append(p)
        p = p.dbl()
    return table

# 2^i * B for every bit position of a 32-byte scalar
_BASE_TABLE = _precompute_base_table()

def _base_mul(n):
    q = NEUTRAL_ELEMENT
    i = 0
    while n > 0:
        if n & 1:
            q = q.add(_BASE_TABLE[i])
        n >>= 1
        i += 1
    return q
