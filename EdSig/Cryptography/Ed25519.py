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

import os

import EdSig
from .edwards25519 import eddsa

class Ed25519PrivateKey:
    def __init__(self, seed):
        self.keypair = eddsa.create_keypair(seed)
        self.seed = self.keypair[:eddsa.SEED_LENGTH]

    @classmethod
    def generate(cls, entropy=os.urandom):
        return cls.from_private_bytes(entropy(eddsa.SEED_LENGTH))

    @classmethod
    def from_private_bytes(cls, data):
        return cls(seed=data)

    @classmethod
    def from_keypair_bytes(cls, data):
        if len(data) != eddsa.KEYPAIR_LENGTH:
            raise ValueError("Ed25519 key pairs must be "+str(eddsa.KEYPAIR_LENGTH)+" bytes")

        key = cls(seed=data[:eddsa.SEED_LENGTH])
        if key.keypair != bytes(data):
            raise ValueError("Public key does not match the seed of the key pair")

        return key

    def private_bytes(self):
        return self.seed

    def keypair_bytes(self):
        return self.keypair

    def public_key(self):
        return Ed25519PublicKey.from_public_bytes(eddsa.public_key(self.keypair))

    def sign(self, message, noise=None):
        try:
            return eddsa.sign(message, self.keypair, noise)
        except Exception as e:
            EdSig.log("Could not sign the requested message with "+EdSig.prettyhexrep(eddsa.public_key(self.keypair))+". The contained exception was: "+str(e), EdSig.LOG_ERROR)
            raise e


class Ed25519PublicKey:
    def __init__(self, public_bytes):
        if len(public_bytes) != eddsa.PUBLIC_LENGTH:
            raise ValueError("Ed25519 public keys must be "+str(eddsa.PUBLIC_LENGTH)+" bytes")
        self.vk = bytes(public_bytes)

    @classmethod
    def from_public_bytes(cls, data):
        return cls(data)

    def public_bytes(self):
        return self.vk

    def verify(self, signature, message):
        try:
            eddsa.verify(signature, message, self.vk)
        except Exception as e:
            EdSig.log("Signature verification failed for "+EdSig.prettyhexrep(self.vk)+": "+type(e).__name__, EdSig.LOG_DEBUG)
            raise e

    def __eq__(self, other):
        if not isinstance(other, Ed25519PublicKey):
            return NotImplemented
        return self.vk == other.vk


def selftest():
    seed = bytes.fromhex("8052030376d47112be7f73ed7a019293dd12ad910b654455798b4667d73de166")
    sk = Ed25519PrivateKey.from_private_bytes(seed)
    vk = sk.public_key()
    assert vk.public_bytes() == bytes.fromhex("2d6f7455d97b4a3a10d7293909d1a4f2058cb9a370e43fa8154bb280db839083")
    sig = sk.sign(b"test")
    assert sig == bytes.fromhex("10a442b4a80cc4225b154f43bef28d2472ca80221951262eb8e0df9091575e26"+
                                "87cc486e77263c3418c757522d54f84b0359236abbbd4acd20dc297fdca66808"), sig
    vk.verify(sig, b"test")

selftest()
