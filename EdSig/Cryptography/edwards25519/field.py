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

# Arithmetic in GF(2^255 - 19). Elements are plain ints, reduced
# lazily; every function here returns a fully reduced value.

from ..Errors import NonCanonicalError, InvalidEncodingError

P = 2**255 - 19
ENCODED_LENGTH = 32

_MASK_255 = (1 << 255) - 1

def inv(x):
    return pow(x, P - 2, P)

D = -121665 * inv(121666) % P
SQRT_M1 = pow(2, (P - 1) // 4, P)

def is_negative(x):
    return (x % P) & 1

def from_bytes(s):
    """Unpack 32 bytes to a field element, ignoring the top bit"""
    if len(s) != ENCODED_LENGTH:
        raise ValueError("Field elements must be 32 bytes")
    return (int.from_bytes(s, "little") & _MASK_255) % P

def to_bytes(x):
    return (x % P).to_bytes(ENCODED_LENGTH, "little")

def reject_non_canonical(s):
    """
    Rejects encodings whose low 255 bits are not below p. The top bit
    is not part of the field element and is not examined.
    """
    if len(s) != ENCODED_LENGTH:
        raise ValueError("Field elements must be 32 bytes")
    if int.from_bytes(s, "little") & _MASK_255 >= P:
        raise NonCanonicalError("Non-canonical field element encoding")

def sqrt_ratio(u, v):
    """Return x such that v*x^2 == u or v*x^2 == -u"""
    u %= P
    v %= P
    v3 = v * v % P * v % P
    v7 = v3 * v3 % P * v % P
    x = u * v3 % P * pow(u * v7 % P, (P - 5) // 8, P) % P

    vxx = v * x % P * x % P
    if vxx == u:
        return x
    elif vxx == (P - u) % P:
        return x * SQRT_M1 % P
    else:
        raise InvalidEncodingError("No square root exists, point is not on the curve")
