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

"""
Ed25519 signatures as specified in RFC 8032, with cofactored
verification, strict canonicity checks on S, A and R, rejection
of small-order public keys, optional signing noise and batch
verification by random linear combination.

All functions operate on fixed-width *bytes* and hold no state
between calls.
"""

import os
from collections import namedtuple

import EdSig
from .. import Hashes
from . import scalar
from .curve import Edwards25519, BASE_POINT, NEUTRAL_ELEMENT
from ..Errors import IdentityElementError, InvalidSignatureError

SEED_LENGTH      = 32
KEYPAIR_LENGTH   = 64
PUBLIC_LENGTH    = 32
SIGNATURE_LENGTH = 64
NOISE_LENGTH     = 32

# The expanded secret is split into the scalar and the nonce prefix
SECRET_LENGTH    = Hashes.DIGEST_LENGTH//2

# Batch blinding coefficients are 128 bits, upper half zero
BLIND_LENGTH     = 16

BatchElement = namedtuple("BatchElement", ["signature", "message", "public_key"])

def _check_length(name, data, length):
    if len(data) != length:
        raise ValueError(name+" must be "+str(length)+" bytes, got "+str(len(data)))

def _challenge(r, public_key, message):
    h = Hashes.Sha512()
    h.update(r)
    h.update(public_key)
    h.update(message)
    return scalar.reduce64(h.digest())

def create_keypair(seed):
    """
    Derives a key pair from a secret seed. The seed is hashed with
    SHA-512, and the clamped lower half of the digest is the secret
    scalar that the base point is multiplied with.

    :param seed: 32 *bytes* of secret entropy.
    :returns: The 64 byte key pair, seed followed by the public key.
    """
    _check_length("Seed", seed, SEED_LENGTH)
    az = Hashes.sha512(seed)
    p = BASE_POINT.clamped_mul(az[:SECRET_LENGTH])
    return bytes(seed) + p.to_bytes()

def generate_keypair(entropy=os.urandom):
    return create_keypair(entropy(SEED_LENGTH))

def public_key(keypair):
    _check_length("Key pair", keypair, KEYPAIR_LENGTH)
    return bytes(keypair[SEED_LENGTH:])

def sign(message, keypair, noise=None):
    """
    Signs a message. Without noise the signature is deterministic.
    With noise, the nonce additionally depends on the noise bytes,
    which gives non-standard but valid signatures that are more
    resilient against fault attacks.

    :param message: The message as *bytes*.
    :param keypair: A 64 byte key pair from *create_keypair*.
    :param noise: Optional 32 random *bytes*.
    :returns: The 64 byte signature R || S.
    """
    _check_length("Key pair", keypair, KEYPAIR_LENGTH)
    public = keypair[SEED_LENGTH:]
    az = Hashes.sha512(keypair[:SEED_LENGTH])

    h = Hashes.Sha512()
    if noise != None:
        _check_length("Noise", noise, NOISE_LENGTH)
        h.update(noise)
    h.update(az[SECRET_LENGTH:])
    h.update(message)
    nonce = scalar.reduce64(h.digest())
    r = BASE_POINT.mul(nonce).to_bytes()

    hram = _challenge(r, public, message)
    x = scalar.clamp(az[:SECRET_LENGTH])
    s = scalar.mul_add(hram, x, nonce)

    return r + s

def _decode_element(signature, public_key):
    _check_length("Signature", signature, SIGNATURE_LENGTH)
    _check_length("Public key", public_key, PUBLIC_LENGTH)
    r = bytes(signature[:32])
    s = bytes(signature[32:])

    scalar.reject_non_canonical(s)
    Edwards25519.reject_non_canonical(public_key)
    a = Edwards25519.from_bytes(public_key)
    a.reject_identity()
    Edwards25519.reject_non_canonical(r)
    expected_r = Edwards25519.from_bytes(r)

    return r, s, a, expected_r

def verify(signature, message, public_key):
    """
    Verifies a signature. Returns *None* if the signature is valid.

    :raises: *NonCanonicalError* if S, A or R is not canonically encoded.
    :raises: *InvalidEncodingError* if A or R is not a point on the curve.
    :raises: *IdentityElementError* if A is the neutral element, or *WeakPublicKeyError* if it has small order.
    :raises: *InvalidSignatureError* if the signature does not verify.
    """
    r, s, a, expected_r = _decode_element(signature, public_key)
    hram = _challenge(r, public_key, message)

    ah = a.neg().mul(hram)
    sb_ah = BASE_POINT.mul(s).add(ah)

    try:
        expected_r.sub(sb_ah).clear_cofactor().reject_identity()
    except IdentityElementError:
        return

    raise InvalidSignatureError("Signature verification failed")

def verify_batch(signature_batch, entropy=os.urandom):
    """
    Verifies several signatures in a single operation. The result is
    all or nothing: if any element is invalid the whole batch fails,
    without indicating which element it was.

    :param signature_batch: A sequence of *BatchElement* or (signature, message, public_key) tuples.
    :param entropy: Source of the random blinding coefficients.
    :raises: The same exceptions as *verify*.
    """
    batch = [BatchElement(*element) for element in signature_batch]
    count = len(batch)

    decoded_batch = []
    for element in batch:
        decoded_batch.append(_decode_element(element.signature, element.public_key))

    hram_batch = []
    for element, decoded in zip(batch, decoded_batch):
        r = decoded[0]
        hram_batch.append(_challenge(r, element.public_key, element.message))

    z_batch = []
    for i in range(count):
        z = entropy(BLIND_LENGTH)
        _check_length("Blinding entropy", z, BLIND_LENGTH)
        z_batch.append(bytes(z) + bytes(scalar.ENCODED_LENGTH - BLIND_LENGTH))

    zs_sum = scalar.ZERO
    for z, decoded in zip(z_batch, decoded_batch):
        zs = scalar.mul(z, decoded[1])
        zs_sum = scalar.add(zs_sum, zs)
    zs_sum = scalar.mul8(zs_sum)

    # Small-order R values are accepted, as they are by verify()
    zr = NEUTRAL_ELEMENT
    for z, decoded in zip(z_batch, decoded_batch):
        zr = zr.add(decoded[3].mul(z, reject_weak=False))
    zr = zr.clear_cofactor()

    zah = NEUTRAL_ELEMENT
    for z, hram, decoded in zip(z_batch, hram_batch, decoded_batch):
        zh = scalar.mul(z, hram)
        zah = zah.add(decoded[2].mul(zh))
    zah = zah.clear_cofactor()

    zsb = BASE_POINT.mul(zs_sum)
    try:
        zr.add(zah).sub(zsb).reject_identity()
    except IdentityElementError:
        return

    EdSig.log("Batch verification of "+str(count)+" signatures failed", EdSig.LOG_DEBUG)
    raise InvalidSignatureError("Batch signature verification failed")
