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

# Scalars modulo the prime order of the Edwards25519 base point. All
# values cross this module's boundary as 32-byte little-endian
# encodings; inputs may be unreduced, outputs are always reduced.

from ..Errors import NonCanonicalError

L = 2**252 + 27742317777372353535851937790883648493
ENCODED_LENGTH = 32

ZERO = bytes(ENCODED_LENGTH)

def _unpack(s):
    if len(s) != ENCODED_LENGTH:
        raise ValueError("Scalars must be 32 bytes")
    return int.from_bytes(s, "little")

def _pack(n):
    return (n % L).to_bytes(ENCODED_LENGTH, "little")

def reject_non_canonical(s):
    if _unpack(s) >= L:
        raise NonCanonicalError("Non-canonical scalar encoding")

def reduce(s):
    return _pack(_unpack(s))

def reduce64(s):
    """Reduce a 64-byte value, such as a SHA-512 digest, modulo L"""
    if len(s) != 2*ENCODED_LENGTH:
        raise ValueError("Wide scalars must be 64 bytes")
    return _pack(int.from_bytes(s, "little"))

def clamp(s):
    """
    Applies the RFC 8032 clamping to a 32-byte secret. The three low
    bits are cleared so the scalar is a multiple of the cofactor, the
    top bit is cleared and bit 254 is set. The result is not reduced.
    """
    t = bytearray(s)
    if len(t) != ENCODED_LENGTH:
        raise ValueError("Scalars must be 32 bytes")
    t[0]  &= 248
    t[31] &= 127
    t[31] |= 64
    return bytes(t)

def add(a, b):
    return _pack(_unpack(a) + _unpack(b))

def mul(a, b):
    return _pack(_unpack(a) * _unpack(b))

def mul_add(a, b, c):
    """Compute a*b + c modulo L"""
    return _pack(_unpack(a) * _unpack(b) + _unpack(c))

def mul8(s):
    return _pack(_unpack(s) * 8)
